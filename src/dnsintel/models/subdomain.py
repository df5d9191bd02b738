"""Subdomain discovery models."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from dnsintel.models.base import BaseSchema, utcnow

SOURCE_CT = "Certificate Transparency"
SOURCE_COMMON = "Common Subdomain List"


class SSLDetails(BaseSchema):
    """What the handshake heuristic could tell about the certificate."""

    expired: bool | None = None


class SubdomainResult(BaseSchema):
    """Discovered subdomain."""

    subdomain: str  # label relative to the root, "@" for the apex
    full_domain: str
    source: Literal["Certificate Transparency", "Common Subdomain List"]
    resolves: bool = False
    ip_addresses: list[str] = Field(default_factory=list)
    has_ssl: bool = False
    ssl_details: SSLDetails | None = None


class SourceCounts(BaseSchema):
    """Per-source contributions to the merged list."""

    certificate_transparency: int = 0
    common_subdomains: int = 0


class SubdomainEnumerationResult(BaseSchema):
    """Merged subdomain discovery result."""

    domain: str
    timestamp: datetime = Field(default_factory=utcnow)
    total_found: int = 0
    subdomains: list[SubdomainResult] = Field(default_factory=list)
    sources: SourceCounts = Field(default_factory=SourceCounts)
