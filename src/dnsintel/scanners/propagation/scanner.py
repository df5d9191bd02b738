"""Global DNS propagation scanner."""

import asyncio
import time
from collections.abc import Sequence

import httpx

from dnsintel.core.exceptions import DNSIntelError, QueryTimeoutError
from dnsintel.doh.client import DoHClient
from dnsintel.doh.resolvers import GLOBAL_RESOLVERS
from dnsintel.doh.types import query_type_param
from dnsintel.infrastructure.http import HTTPClient
from dnsintel.models.base import QueryStatus
from dnsintel.models.propagation import (
    PropagationReport,
    PropagationResult,
    ResolverDescriptor,
)
from dnsintel.scanners.base import BaseScanner
from dnsintel.scanners.propagation.analysis import analyze_propagation
from dnsintel.scanners.registry import ScannerRegistry


@ScannerRegistry.register
class PropagationScanner(BaseScanner):
    """Queries every registered resolver and compares their answers."""

    name = "propagation"

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        resolvers: Sequence[ResolverDescriptor] | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        super().__init__(transport)
        self.resolvers = tuple(resolvers) if resolvers is not None else GLOBAL_RESOLVERS
        self.timeout_ms = timeout_ms or self.settings.propagation_timeout_ms

    @property
    def description(self) -> str:
        return "DNS propagation check across global DoH resolvers"

    def get_capabilities(self) -> list[str]:
        return [
            "Concurrent multi-resolver lookup",
            "Per-resolver latency",
            "A/AAAA answer consistency",
            "Propagation percentage",
        ]

    async def scan(self, domain: str, record_type: str = "A") -> PropagationReport:
        """Check propagation and analyze the results."""
        results = await self.check_propagation(domain, record_type)
        return PropagationReport(
            domain=domain,
            record_type=query_type_param(record_type),
            results=results,
            analysis=analyze_propagation(results),
        )

    async def check_propagation(
        self,
        domain: str,
        record_type: str = "A",
    ) -> list[PropagationResult]:
        """Query all resolvers concurrently.

        Results come back in registry order. A failing resolver yields an
        ``error`` or ``timeout`` entry and never aborts the others.
        """
        start_time = time.time()
        self.logger.info(
            "propagation_check_started",
            target=domain,
            record_type=record_type,
            resolvers=len(self.resolvers),
        )

        async with HTTPClient(transport=self.transport) as http:
            client = DoHClient(http)
            results = await asyncio.gather(
                *(
                    self._query_resolver(client, resolver, domain, record_type)
                    for resolver in self.resolvers
                )
            )

        self.logger.info(
            "propagation_check_completed",
            target=domain,
            successful=sum(1 for r in results if r.is_success),
            total=len(results),
            duration=time.time() - start_time,
        )
        return list(results)

    async def _query_resolver(
        self,
        client: DoHClient,
        resolver: ResolverDescriptor,
        domain: str,
        record_type: str,
    ) -> PropagationResult:
        start = time.perf_counter()
        try:
            response = await client.query(
                resolver.endpoint, domain, record_type, self.timeout_ms
            )
        except QueryTimeoutError as e:
            status, response, error = QueryStatus.TIMEOUT, None, e.message
        except DNSIntelError as e:
            status, response, error = QueryStatus.ERROR, None, e.message
        else:
            status, error = QueryStatus.SUCCESS, None

        latency_ms = int((time.perf_counter() - start) * 1000)
        if error:
            self.logger.debug(
                "resolver_query_failed",
                resolver=resolver.key,
                status=status.value,
                error=error,
            )

        return PropagationResult(
            resolver=resolver.name,
            region=resolver.region,
            location=resolver.location,
            status=status,
            response=response,
            latency_ms=latency_ms,
            error=error,
        )
