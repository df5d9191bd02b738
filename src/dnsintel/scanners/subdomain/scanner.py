"""Subdomain discovery from CT logs and a common-name wordlist."""

import asyncio
import ssl
import time
from collections.abc import Sequence
from typing import Any

import httpx

from dnsintel.core.exceptions import DNSIntelError
from dnsintel.doh.client import DoHClient
from dnsintel.doh.resolvers import GLOBAL_RESOLVERS, get_resolver
from dnsintel.infrastructure.http import HTTPClient
from dnsintel.infrastructure.ratelimit import ProbeLimiter
from dnsintel.models.propagation import ResolverDescriptor
from dnsintel.models.subdomain import (
    SOURCE_COMMON,
    SOURCE_CT,
    SourceCounts,
    SSLDetails,
    SubdomainEnumerationResult,
    SubdomainResult,
)
from dnsintel.scanners.base import BaseScanner
from dnsintel.scanners.registry import ScannerRegistry
from dnsintel.scanners.subdomain.wordlist import COMMON_SUBDOMAINS

# OpenSSL X509_V_ERR_CERT_HAS_EXPIRED
_CERT_HAS_EXPIRED = 10


def extract_ct_names(data: Any, domain: str) -> list[str]:
    """Distinct certificate subject names covering ``domain``.

    Names are lower-cased, wildcards dropped, and only the domain itself
    or names ending in ``.domain`` are kept, in first-seen order.
    """
    if not isinstance(data, list):
        return []

    names: dict[str, None] = {}
    suffix = f".{domain}"
    for entry in data:
        if not isinstance(entry, dict):
            continue
        name_value = entry.get("name_value") or ""
        if not isinstance(name_value, str):
            continue
        for line in name_value.split("\n"):
            name = line.strip().lower()
            if not name or name.startswith("*"):
                continue
            if name == domain or name.endswith(suffix):
                names[name] = None
    return list(names)


def subdomain_label(full_domain: str, domain: str) -> str:
    """Label relative to the root domain, ``@`` for the apex."""
    if full_domain == domain:
        return "@"
    return full_domain.removesuffix(f".{domain}")


def _find_cert_error(exc: BaseException) -> ssl.SSLCertVerificationError | None:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, ssl.SSLCertVerificationError):
            return current
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return None


async def infer_ssl_presence(
    http: HTTPClient,
    host: str,
    timeout_ms: int,
) -> tuple[bool, SSLDetails | None]:
    """Guess whether ``host`` serves TLS from a bare HEAD request.

    Any HTTP response counts as SSL present. A certificate verification
    failure (untrusted issuer, hostname mismatch, expiry) also counts,
    since the TLS handshake itself got that far; only expiry is reported
    in the details. Anything else counts as no SSL.

    This is approximate. Plain HTTP served on 443 behind a proxy, or a
    TLS endpoint that drops HEAD requests, can be misclassified, and the
    certificate itself is never inspected.
    """
    try:
        await asyncio.wait_for(http.head(f"https://{host}"), timeout=timeout_ms / 1000)
    except asyncio.TimeoutError:
        return False, None
    except httpx.HTTPError as e:
        cert_error = _find_cert_error(e)
        if cert_error is None:
            return False, None
        expired = (
            getattr(cert_error, "verify_code", None) == _CERT_HAS_EXPIRED
            or "expired" in str(cert_error).lower()
        )
        return True, SSLDetails(expired=expired)
    return True, SSLDetails()


@ScannerRegistry.register
class SubdomainScanner(BaseScanner):
    """Merges CT log names with resolving wordlist guesses."""

    name = "subdomains"

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        resolver: ResolverDescriptor | None = None,
        wordlist: Sequence[str] = COMMON_SUBDOMAINS,
    ) -> None:
        super().__init__(transport)
        self.resolver = resolver or get_resolver(
            self.settings.health_resolver, GLOBAL_RESOLVERS
        )
        self.wordlist = tuple(wordlist)

    @property
    def description(self) -> str:
        return "Subdomain discovery via Certificate Transparency and common names"

    def get_capabilities(self) -> list[str]:
        return [
            "Subdomain discovery from CT logs",
            "Common subdomain probing",
            "DoH resolution check",
            "SSL presence heuristic",
        ]

    async def query_certificate_transparency(
        self,
        http: HTTPClient,
        domain: str,
    ) -> list[str]:
        """Names from crt.sh; an empty list when the log is unreachable."""
        params = {"q": f"%.{domain}", "output": "json"}
        try:
            response = await asyncio.wait_for(
                http.get(self.settings.crtsh_url, params=params),
                timeout=self.settings.http_timeout,
            )
        except (asyncio.TimeoutError, httpx.HTTPError) as e:
            self.logger.warning("ct_query_failed", target=domain, error=str(e) or repr(e))
            return []

        if not response.is_success:
            self.logger.warning(
                "ct_query_failed",
                target=domain,
                status_code=response.status_code,
            )
            return []

        try:
            data = response.json()
        except ValueError as e:
            self.logger.warning("ct_query_failed", target=domain, error=str(e))
            return []

        return extract_ct_names(data, domain)

    async def check_resolution(self, client: DoHClient, full_domain: str) -> list[str]:
        """A-record addresses of ``full_domain``, empty when it does not resolve."""
        try:
            response = await client.query(
                self.resolver.endpoint,
                full_domain,
                "A",
                self.settings.resolution_timeout_ms,
            )
        except DNSIntelError as e:
            self.logger.debug("resolution_failed", target=full_domain, error=e.message)
            return []
        return [record.data for record in response.records_of("A")]

    async def _probe(
        self,
        client: DoHClient,
        tls_http: HTTPClient,
        limiter: ProbeLimiter,
        domain: str,
        full_domain: str,
        source: str,
        check_resolution: bool,
        check_ssl: bool,
    ) -> SubdomainResult:
        result = SubdomainResult(
            subdomain=subdomain_label(full_domain, domain),
            full_domain=full_domain,
            source=source,
        )

        if check_resolution:
            async with limiter.query():
                ips = await self.check_resolution(client, full_domain)
            result.resolves = bool(ips)
            result.ip_addresses = ips

        if check_ssl and result.resolves:
            has_ssl, details = await infer_ssl_presence(
                tls_http, full_domain, self.settings.ssl_timeout_ms
            )
            result.has_ssl = has_ssl
            result.ssl_details = details

        return result

    async def enumerate_subdomains(
        self,
        domain: str,
        check_ssl: bool = True,
        check_resolution: bool = True,
        include_common: bool = True,
        max_results: int | None = None,
    ) -> SubdomainEnumerationResult:
        """Discover, probe and merge subdomains of ``domain``.

        CT names are always kept; wordlist guesses only when they resolve.
        A name seen in both sources is reported once, as a CT result.
        """
        max_results = max_results or self.settings.subdomain_max_results
        start_time = time.time()
        self.logger.info("subdomain_enum_started", target=domain, max_results=max_results)

        subdomains: list[SubdomainResult] = []
        seen: set[str] = set()
        common_count = 0
        limiter = ProbeLimiter.from_settings(self.settings)

        async with HTTPClient(
            transport=self.transport,
            headers={"Accept": "application/json"},
        ) as http, HTTPClient(
            timeout=self.settings.ssl_timeout_ms / 1000,
            transport=self.transport,
            follow_redirects=False,
        ) as tls_http:
            client = DoHClient(http)

            ct_candidates: list[str] = []
            for name in await self.query_certificate_transparency(http, domain):
                if name in seen or len(ct_candidates) >= max_results:
                    continue
                seen.add(name)
                ct_candidates.append(name)

            async def probe_ct(name: str) -> SubdomainResult:
                async with limiter.slot():
                    return await self._probe(
                        client, tls_http, limiter, domain, name,
                        SOURCE_CT, check_resolution, check_ssl,
                    )

            subdomains.extend(await asyncio.gather(*(probe_ct(n) for n in ct_candidates)))
            ct_count = len(subdomains)

            if include_common and len(subdomains) < max_results:
                common_candidates: list[str] = []
                for label in self.wordlist[: max_results - len(subdomains)]:
                    full_domain = f"{label}.{domain}"
                    if full_domain in seen:
                        continue
                    seen.add(full_domain)
                    common_candidates.append(full_domain)

                probed = await asyncio.gather(
                    *(
                        self._probe(
                            client, tls_http, limiter, domain, full_domain,
                            SOURCE_COMMON, True, check_ssl,
                        )
                        for full_domain in common_candidates
                    )
                )
                found = [result for result in probed if result.resolves]
                subdomains.extend(found)
                common_count = len(found)

        subdomains.sort(key=lambda s: s.subdomain)

        self.logger.info(
            "subdomain_enum_completed",
            target=domain,
            total_subdomains=len(subdomains),
            certificate_transparency=ct_count,
            common_subdomains=common_count,
            doh_queries=limiter.queries,
            duration=time.time() - start_time,
        )

        return SubdomainEnumerationResult(
            domain=domain,
            total_found=len(subdomains),
            subdomains=subdomains,
            sources=SourceCounts(
                certificate_transparency=ct_count,
                common_subdomains=common_count,
            ),
        )
