"""Tests for domain input validation."""

import pytest
from pydantic import ValidationError

from dnsintel.models import ScanTarget, validate_domain
from dnsintel.models.target import clean_domain_input, is_ip_address, normalize_to_root_domain


def test_clean_domain_input_strips_url_parts():
    assert clean_domain_input("https://www.Example.com:8443/path?q=1#top") == "example.com"
    assert clean_domain_input("  http://blog.example.com/ ") == "blog.example.com"


def test_valid_domain_is_normalized_to_root():
    result = validate_domain("shop.eu.example.co")

    assert result.is_valid
    assert result.domain == "example.co"
    assert result.sld == "example"
    assert result.tld == "co"
    assert result.subdomain == "shop.eu"


def test_normalize_to_root_domain():
    assert normalize_to_root_domain("https://www.api.example.com/v1") == "example.com"


@pytest.mark.parametrize(
    "raw, message",
    [
        ("", "Domain name is required"),
        ("localhost", "Domain must have at least a second-level domain and TLD"),
        ("exa mple.com", "Domain contains invalid characters"),
        ("example..com", "Domain cannot contain consecutive dots"),
        ("-bad.example.com", "Domain labels cannot start or end with a hyphen"),
        ("192.168.1.1", "Please enter a domain name, not an IP address"),
        ("a" * 64 + ".com", "Domain labels cannot exceed 63 characters"),
    ],
)
def test_invalid_domains(raw, message):
    result = validate_domain(raw)

    assert not result.is_valid
    assert any(error.startswith(message) for error in result.errors)


def test_overlong_domain_is_rejected():
    raw = ".".join(["a" * 60] * 5) + ".com"

    result = validate_domain(raw)

    assert not result.is_valid
    assert any("maximum length of 253" in error for error in result.errors)


def test_is_ip_address():
    assert is_ip_address("8.8.8.8")
    assert is_ip_address("2001:db8::1")
    assert not is_ip_address("256.1.1.1")
    assert not is_ip_address("example.com")


def test_scan_target_validates_and_normalizes():
    assert ScanTarget(domain="WWW.Example.com").domain == "example.com"

    with pytest.raises(ValidationError):
        ScanTarget(domain="not a domain")
