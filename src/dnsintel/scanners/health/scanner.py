"""Zone health scanner."""

import asyncio
import time
from collections.abc import Sequence

import httpx

from dnsintel.core.exceptions import DNSIntelError, ZoneFetchError
from dnsintel.doh.client import DoHClient
from dnsintel.doh.resolvers import GLOBAL_RESOLVERS, get_resolver
from dnsintel.doh.types import DNS_RECORD_TYPES
from dnsintel.infrastructure.http import HTTPClient
from dnsintel.models.dns import DNSLookupResult, ResolvedRecord
from dnsintel.models.health import ZoneHealthReport
from dnsintel.models.propagation import ResolverDescriptor
from dnsintel.scanners.base import BaseScanner
from dnsintel.scanners.health.rules import (
    calculate_score,
    evaluate_records,
    score_to_grade,
)
from dnsintel.scanners.registry import ScannerRegistry

STANDARD_RECORD_TYPES = ("A", "AAAA", "CNAME", "MX", "NS", "TXT", "SOA", "CAA")


@ScannerRegistry.register
class ZoneHealthScanner(BaseScanner):
    """Fetches the standard record set and scores it against best practice."""

    name = "health"

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        resolver: ResolverDescriptor | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        super().__init__(transport)
        self.resolver = resolver or get_resolver(
            self.settings.health_resolver, GLOBAL_RESOLVERS
        )
        self.timeout_ms = timeout_ms or self.settings.doh_timeout_ms

    @property
    def description(self) -> str:
        return "Zone health rules for SOA, NS, A, MX and TXT records"

    def get_capabilities(self) -> list[str]:
        return [
            "SOA timer validation",
            "Nameserver redundancy",
            "Private address detection",
            "MX backup and target checks",
            "SPF presence and syntax",
            "Health score and grade",
        ]

    async def fetch_records(
        self,
        domain: str,
        record_types: Sequence[str] = STANDARD_RECORD_TYPES,
    ) -> DNSLookupResult:
        """Fetch several record types concurrently from the fast resolver.

        A failed type becomes an entry in ``errors``; types without
        answers are left out of ``records``.
        """
        async with HTTPClient(transport=self.transport) as http:
            client = DoHClient(http)
            outcomes = await asyncio.gather(
                *(self._fetch_type(client, domain, rtype) for rtype in record_types)
            )

        records: dict[str, list[ResolvedRecord]] = {}
        errors: list[str] = []
        for rtype, answer, error in outcomes:
            if error is not None:
                errors.append(f"Failed to fetch {rtype} records: {error}")
            elif answer:
                records[rtype] = answer

        return DNSLookupResult(
            domain=domain,
            records=records,
            supported_types=list(DNS_RECORD_TYPES),
            errors=errors,
        )

    async def _fetch_type(
        self,
        client: DoHClient,
        domain: str,
        rtype: str,
    ) -> tuple[str, list[ResolvedRecord], str | None]:
        try:
            response = await client.query(
                self.resolver.endpoint, domain, rtype, self.timeout_ms
            )
        except DNSIntelError as e:
            self.logger.warning(
                "record_fetch_failed",
                target=domain,
                rtype=rtype,
                error=e.message,
            )
            return rtype, [], e.message
        return rtype, response.answer, None

    async def analyze_zone_health(self, domain: str) -> ZoneHealthReport:
        """Build a scored zone health report.

        Raises ``ZoneFetchError`` only when no record type at all could be
        fetched; partial failures are reported as General warnings.
        """
        start_time = time.time()
        self.logger.info("zone_health_started", target=domain)

        lookup = await self.fetch_records(domain)
        if lookup.errors and len(lookup.errors) == len(STANDARD_RECORD_TYPES):
            raise ZoneFetchError(
                f"Could not fetch any records for {domain}",
                scanner=self.name,
                target=domain,
                details={"errors": lookup.errors},
            )

        issues, summary = evaluate_records(lookup.records, lookup.errors)
        score = calculate_score(issues, summary)

        report = ZoneHealthReport(
            domain=domain,
            overall_score=score,
            grade=score_to_grade(score),
            issues=issues,
            records=lookup.records,
            summary=summary,
        )

        self.logger.info(
            "zone_health_completed",
            target=domain,
            score=report.overall_score,
            grade=report.grade,
            issues=len(report.issues),
            duration=time.time() - start_time,
        )
        return report
