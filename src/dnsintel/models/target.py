"""Target and scan options models."""

import re

from pydantic import Field, field_validator

from dnsintel.models.base import BaseSchema

MAX_DOMAIN_LENGTH = 253
MAX_LABEL_LENGTH = 63

_VALID_CHARS = re.compile(r"^[a-z0-9][a-z0-9.-]*[a-z0-9]$")
_IPV4 = re.compile(r"^(\d{1,3}\.){3}\d{1,3}$")
_IPV6 = re.compile(r"^([0-9a-f]{0,4}:){2,7}[0-9a-f]{0,4}$", re.IGNORECASE)


class DomainValidation(BaseSchema):
    """Outcome of validating user supplied domain input."""

    is_valid: bool
    domain: str
    tld: str = ""
    sld: str = ""
    subdomain: str | None = None
    errors: list[str] = Field(default_factory=list)


def clean_domain_input(raw: str) -> str:
    """Strip scheme, www, path, query, fragment and port from raw input."""
    domain = raw.lower().strip()
    domain = re.sub(r"^https?://", "", domain)
    domain = re.sub(r"^www\.", "", domain)
    for sep in ("/", "?", "#", ":"):
        domain = domain.split(sep)[0]
    return domain


def validate_domain(raw: str | None) -> DomainValidation:
    """Validate raw input and normalize it to the root domain."""
    if not raw:
        return DomainValidation(
            is_valid=False,
            domain="",
            errors=["Domain name is required"],
        )

    domain = clean_domain_input(raw)
    errors: list[str] = []

    if len(domain) > MAX_DOMAIN_LENGTH:
        errors.append(
            f"Domain name exceeds maximum length of {MAX_DOMAIN_LENGTH} characters"
        )

    if len(domain) > 1 and not _VALID_CHARS.match(domain):
        errors.append(
            "Domain contains invalid characters. "
            "Use only letters, numbers, hyphens, and dots."
        )

    if ".." in domain:
        errors.append("Domain cannot contain consecutive dots")

    labels = domain.split(".")
    for label in labels:
        if label.startswith("-") or label.endswith("-"):
            errors.append("Domain labels cannot start or end with a hyphen")
            break
        if len(label) > MAX_LABEL_LENGTH:
            errors.append(f"Domain labels cannot exceed {MAX_LABEL_LENGTH} characters")
            break

    tld = labels[-1] if labels else ""
    sld = labels[-2] if len(labels) >= 2 else ""
    subdomain = ".".join(labels[:-2]) if len(labels) > 2 else None

    if not tld:
        errors.append("Domain must have a TLD (e.g., .com, .net)")
    elif len(labels) < 2:
        errors.append("Domain must have at least a second-level domain and TLD")

    if tld.isdigit():
        errors.append("Please enter a domain name, not an IP address")

    return DomainValidation(
        is_valid=not errors,
        domain=f"{sld}.{tld}" if len(labels) >= 2 else domain,
        tld=tld,
        sld=sld,
        subdomain=subdomain,
        errors=errors,
    )


def normalize_to_root_domain(raw: str) -> str:
    """Root domain (``sld.tld``) of raw input."""
    return validate_domain(raw).domain


def is_ip_address(value: str) -> bool:
    """Check if a string looks like an IPv4 or IPv6 address."""
    if _IPV4.match(value):
        return all(0 <= int(part) <= 255 for part in value.split("."))
    return bool(_IPV6.match(value))


class ScanTarget(BaseSchema):
    """Validated root domain to scan."""

    domain: str = Field(description="Target root domain")

    @field_validator("domain")
    @classmethod
    def validate_and_normalize(cls, v: str) -> str:
        result = validate_domain(v)
        if not result.is_valid:
            raise ValueError("; ".join(result.errors))
        return result.domain


class ScanOptions(BaseSchema):
    """Options for a full scan."""

    include_propagation: bool = True
    include_subdomains: bool = True
    include_whois: bool = True
    record_type: str = "A"
    subdomain_limit: int = Field(default=50, ge=1, le=1000)
    check_ssl: bool = True
