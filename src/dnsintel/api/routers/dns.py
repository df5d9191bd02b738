"""DNS intelligence endpoints."""

from fastapi import APIRouter, Depends, Query

from dnsintel.core.config import get_settings
from dnsintel.core.exceptions import ValidationError
from dnsintel.models import (
    DNSLookupResult,
    FullScanReport,
    PropagationReport,
    ScanOptions,
    SubdomainEnumerationResult,
    WHOISResult,
    ZoneHealthReport,
    validate_domain,
)
from dnsintel.orchestration.coordinator import ScanCoordinator

router = APIRouter()


def get_coordinator() -> ScanCoordinator:
    return ScanCoordinator()


def valid_domain(domain: str) -> str:
    """Path dependency: the validated root domain."""
    result = validate_domain(domain)
    if not result.is_valid:
        raise ValidationError("Invalid domain", errors=result.errors)
    return result.domain


@router.get("/scan/{domain}", response_model=None)
async def full_scan(
    root_domain: str = Depends(valid_domain),
    subdomains: bool = True,
    whois: bool = True,
    propagation: bool = True,
    coordinator: ScanCoordinator = Depends(get_coordinator),
) -> FullScanReport:
    """Zone health plus propagation, subdomains and WHOIS in parallel."""
    options = ScanOptions(
        include_propagation=propagation,
        include_subdomains=subdomains,
        include_whois=whois,
        subdomain_limit=get_settings().full_scan_subdomain_limit,
    )
    return await coordinator.run_full_scan(root_domain, options)


@router.get("/dns/{domain}", response_model=None)
async def dns_records(
    root_domain: str = Depends(valid_domain),
    record_type: str | None = Query(default=None, alias="type"),
    coordinator: ScanCoordinator = Depends(get_coordinator),
) -> DNSLookupResult:
    """All standard record types, optionally filtered (``?type=A,MX``)."""
    return await coordinator.lookup_records(root_domain, record_type)


@router.get("/propagation/{domain}", response_model=None)
async def propagation_check(
    root_domain: str = Depends(valid_domain),
    record_type: str = Query(default="A", alias="type"),
    coordinator: ScanCoordinator = Depends(get_coordinator),
) -> PropagationReport:
    return await coordinator.propagation(root_domain, record_type.upper())


@router.get("/health/{domain}", response_model=None)
async def zone_health(
    root_domain: str = Depends(valid_domain),
    coordinator: ScanCoordinator = Depends(get_coordinator),
) -> ZoneHealthReport:
    return await coordinator.health(root_domain)


@router.get("/subdomains/{domain}", response_model=None)
async def subdomain_enumeration(
    root_domain: str = Depends(valid_domain),
    ssl: bool = True,
    limit: int | None = None,
    coordinator: ScanCoordinator = Depends(get_coordinator),
) -> SubdomainEnumerationResult:
    """Subdomain discovery; ``limit`` is capped by ``subdomain_limit_cap``."""
    settings = get_settings()
    if not limit or limit < 1:
        limit = settings.subdomain_max_results
    return await coordinator.subdomains(
        root_domain,
        check_ssl=ssl,
        max_results=min(limit, settings.subdomain_limit_cap),
    )


@router.get("/whois/{domain}", response_model=None)
async def whois_lookup(
    root_domain: str = Depends(valid_domain),
    coordinator: ScanCoordinator = Depends(get_coordinator),
) -> WHOISResult:
    return await coordinator.whois(root_domain)
