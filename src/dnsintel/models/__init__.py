"""Pydantic data models for DNS Intel."""

from dnsintel.models.base import (
    BaseSchema,
    IssueCategory,
    QueryStatus,
    Severity,
    utcnow,
)
from dnsintel.models.target import (
    DomainValidation,
    ScanOptions,
    ScanTarget,
    validate_domain,
)
from dnsintel.models.dns import (
    DNSLookupResult,
    DoHQuestion,
    DoHResponse,
    ResolvedRecord,
)
from dnsintel.models.propagation import (
    PropagationAnalysis,
    PropagationReport,
    PropagationResult,
    ResolverDescriptor,
)
from dnsintel.models.health import (
    ZoneHealthIssue,
    ZoneHealthReport,
    ZoneHealthSummary,
)
from dnsintel.models.subdomain import (
    SOURCE_COMMON,
    SOURCE_CT,
    SourceCounts,
    SSLDetails,
    SubdomainEnumerationResult,
    SubdomainResult,
)
from dnsintel.models.whois import (
    ContactInfo,
    RegistrarInfo,
    RegistrationDates,
    WHOISResult,
)
from dnsintel.models.scan import FullScanReport

__all__ = [
    # Base
    "BaseSchema",
    "IssueCategory",
    "QueryStatus",
    "Severity",
    "utcnow",
    # Target
    "DomainValidation",
    "ScanOptions",
    "ScanTarget",
    "validate_domain",
    # DNS
    "DNSLookupResult",
    "DoHQuestion",
    "DoHResponse",
    "ResolvedRecord",
    # Propagation
    "PropagationAnalysis",
    "PropagationReport",
    "PropagationResult",
    "ResolverDescriptor",
    # Zone health
    "ZoneHealthIssue",
    "ZoneHealthReport",
    "ZoneHealthSummary",
    # Subdomains
    "SOURCE_COMMON",
    "SOURCE_CT",
    "SourceCounts",
    "SSLDetails",
    "SubdomainEnumerationResult",
    "SubdomainResult",
    # WHOIS
    "ContactInfo",
    "RegistrarInfo",
    "RegistrationDates",
    "WHOISResult",
    # Scan
    "FullScanReport",
]
