"""Pytest configuration and fixtures."""

from collections.abc import Callable, Iterable

import httpx
import pytest

from dnsintel.core.config import get_settings
from dnsintel.doh.types import DNS_RECORD_TYPES
from dnsintel.models import ResolvedRecord, ResolverDescriptor

# (name, type) -> [(ttl, data), ...]
Zone = dict[tuple[str, str], list[tuple[int, str]]]
Handler = Callable[[httpx.Request], httpx.Response]

EXAMPLE_SOA = "ns.icann.org. noc.dns.icann.org. 2024010101 7200 3600 1209600 3600"


def doh_payload(
    name: str,
    rtype: str,
    answers: Iterable[tuple[int, str]] = (),
    status: int = 0,
) -> dict:
    """DoH JSON body as returned by public resolvers."""
    code = DNS_RECORD_TYPES[rtype]
    payload = {
        "Status": status,
        "TC": False,
        "RD": True,
        "RA": True,
        "AD": False,
        "CD": False,
        "Question": [{"name": name, "type": code}],
    }
    answer = [{"name": name, "type": code, "TTL": ttl, "data": data} for ttl, data in answers]
    if answer:
        payload["Answer"] = answer
    return payload


class FakeDoH:
    """Answers DoH JSON queries from an in-memory zone."""

    def __init__(self, zone: Zone, failing_types: Iterable[str] = ()) -> None:
        self.zone = zone
        self.failing_types = set(failing_types)
        self.queries: list[tuple[str, str, str]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        name = request.url.params["name"]
        rtype = request.url.params["type"]
        self.queries.append((request.url.host, name, rtype))

        if rtype in self.failing_types:
            return httpx.Response(503)

        answers = self.zone.get((name, rtype))
        if answers is not None:
            return httpx.Response(200, json=doh_payload(name, rtype, answers))

        known = any(zone_name == name for zone_name, _ in self.zone)
        return httpx.Response(200, json=doh_payload(name, rtype, status=0 if known else 3))


def make_transport(
    doh: Handler | None = None,
    crtsh: Handler | None = None,
    https: Handler | None = None,
) -> httpx.MockTransport:
    """Route DoH, crt.sh and plain HTTPS probes to separate handlers."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "crt.sh":
            if crtsh is None:
                return httpx.Response(200, json=[])
            return crtsh(request)
        if request.method == "HEAD":
            if https is None:
                raise httpx.ConnectError("connection refused", request=request)
            return https(request)
        if doh is None:
            return httpx.Response(200, json=doh_payload("unknown", "A", status=3))
        return doh(request)

    return httpx.MockTransport(handler)


def make_resolvers(*hosts: str) -> tuple[ResolverDescriptor, ...]:
    """Small resolver registry, one entry per fake host."""
    return tuple(
        ResolverDescriptor(
            key=host.split(".")[0],
            name=f"Resolver {host}",
            region="Test",
            endpoint=f"https://{host}/dns-query",
            location="Test",
        )
        for host in hosts
    )


def record(name: str, rtype: str, data: str, ttl: int = 3600) -> ResolvedRecord:
    return ResolvedRecord(name=name, type=DNS_RECORD_TYPES[rtype], ttl=ttl, data=data)


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterable[None]:
    """Settings are cached per process; reset around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def example_zone() -> Zone:
    """example.com as served by the IANA nameservers, without mail."""
    return {
        ("example.com", "A"): [(3600, "93.184.216.34")],
        ("example.com", "NS"): [
            (86400, "a.iana-servers.net"),
            (86400, "b.iana-servers.net"),
        ],
        ("example.com", "SOA"): [(3600, EXAMPLE_SOA)],
    }
