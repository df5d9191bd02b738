"""Scan coordinator for orchestrating the DNS scanners."""

import asyncio
import time
from collections.abc import Sequence
from typing import Any

import httpx

from dnsintel.core.logging import get_logger
from dnsintel.models import (
    DNSLookupResult,
    FullScanReport,
    PropagationReport,
    ScanOptions,
    SubdomainEnumerationResult,
    WHOISResult,
    ZoneHealthReport,
)
from dnsintel.models.propagation import ResolverDescriptor
from dnsintel.scanners.health import ZoneHealthScanner
from dnsintel.scanners.propagation import PropagationScanner
from dnsintel.scanners.subdomain import SubdomainScanner
from dnsintel.scanners.whois import WHOISScanner


def parse_type_filter(types: str | Sequence[str] | None) -> list[str] | None:
    """Normalize a ``"a,mx"`` style filter to upper-case mnemonics."""
    if types is None:
        return None
    if isinstance(types, str):
        types = types.split(",")
    parsed = [t.strip().upper() for t in types if t.strip()]
    return parsed or None


class ScanCoordinator:
    """Coordinates the scanners for a full DNS intelligence scan."""

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        resolvers: Sequence[ResolverDescriptor] | None = None,
    ) -> None:
        self.logger = get_logger("coordinator")
        self._health_scanner = ZoneHealthScanner(transport=transport)
        self._propagation_scanner = PropagationScanner(
            transport=transport, resolvers=resolvers
        )
        self._subdomain_scanner = SubdomainScanner(transport=transport)
        self._whois_scanner = WHOISScanner(transport=transport)

    async def run_full_scan(
        self,
        domain: str,
        options: ScanOptions | None = None,
    ) -> FullScanReport:
        """Run zone health plus every enabled sub-check concurrently.

        A failing sub-check is recorded in ``errors`` and leaves its slot
        empty; the scan itself never fails.
        """
        options = options or ScanOptions()
        start_time = time.time()
        self.logger.info("scan_started", target=domain)

        checks: dict[str, Any] = {"health": self.health(domain)}
        if options.include_propagation:
            checks["propagation"] = self.propagation(domain, options.record_type)
        if options.include_subdomains:
            checks["subdomains"] = self.subdomains(
                domain,
                check_ssl=options.check_ssl,
                max_results=options.subdomain_limit,
            )
        if options.include_whois:
            checks["whois"] = self.whois(domain)

        outcomes = await asyncio.gather(*checks.values(), return_exceptions=True)

        report = FullScanReport(domain=domain)
        for module, outcome in zip(checks, outcomes):
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            if isinstance(outcome, BaseException):
                self.logger.error("scanner_failed", module=module, error=str(outcome))
                report.errors.append(f"{module}: {outcome}")
                continue
            setattr(report, module, outcome)

        report.duration_seconds = time.time() - start_time
        self.logger.info(
            "scan_completed",
            target=domain,
            errors=len(report.errors),
            duration=report.duration_seconds,
        )
        return report

    async def lookup_records(
        self,
        domain: str,
        types: str | Sequence[str] | None = None,
    ) -> DNSLookupResult:
        """All standard record types of ``domain``, optionally filtered."""
        lookup = await self._health_scanner.fetch_records(domain)
        type_filter = parse_type_filter(types)
        if type_filter is not None:
            lookup.records = {
                rtype: lookup.records[rtype]
                for rtype in type_filter
                if rtype in lookup.records
            }
        return lookup

    async def health(self, domain: str) -> ZoneHealthReport:
        return await self._health_scanner.analyze_zone_health(domain)

    async def propagation(self, domain: str, record_type: str = "A") -> PropagationReport:
        return await self._propagation_scanner.scan(domain, record_type)

    async def subdomains(
        self,
        domain: str,
        check_ssl: bool = True,
        max_results: int | None = None,
    ) -> SubdomainEnumerationResult:
        return await self._subdomain_scanner.enumerate_subdomains(
            domain,
            check_ssl=check_ssl,
            check_resolution=True,
            include_common=True,
            max_results=max_results,
        )

    async def whois(self, domain: str) -> WHOISResult:
        return await self._whois_scanner.lookup(domain)
