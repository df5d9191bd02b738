"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from dnsintel.core.config import Settings, get_settings


def test_defaults():
    settings = Settings()

    assert settings.doh_timeout_ms == 5000
    assert settings.propagation_timeout_ms == 8000
    assert settings.resolution_timeout_ms == 3000
    assert settings.ssl_timeout_ms == 5000
    assert settings.health_resolver == "cloudflare_us"
    assert settings.subdomain_limit_cap == 200
    assert settings.subdomain_probe_concurrency == 15


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PROPAGATION_TIMEOUT_MS", "2500")
    monkeypatch.setenv("LOG_FORMAT", "text")

    settings = get_settings()

    assert settings.propagation_timeout_ms == 2500
    assert settings.log_format == "text"


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_out_of_range_timeout_is_rejected(monkeypatch):
    monkeypatch.setenv("DOH_TIMEOUT_MS", "0")

    with pytest.raises(ValidationError):
        Settings()
