"""Tests for the propagation scanner and analysis."""

import asyncio

import httpx

from conftest import doh_payload, make_resolvers, make_transport
from dnsintel.doh.client import parse_doh_payload
from dnsintel.doh.resolvers import GLOBAL_RESOLVERS, get_resolver
from dnsintel.models import PropagationResult, QueryStatus
from dnsintel.scanners.propagation import PropagationScanner, analyze_propagation


def _answering(ips_by_host: dict[str, list[str]], rtype: str = "A"):
    def handler(request: httpx.Request) -> httpx.Response:
        ips = ips_by_host.get(request.url.host)
        if ips is None:
            return httpx.Response(500)
        name = request.url.params["name"]
        return httpx.Response(200, json=doh_payload(name, rtype, [(300, ip) for ip in ips]))

    return handler


def _success(resolver: str, *ips: str) -> PropagationResult:
    payload = doh_payload("example.com", "A", [(300, ip) for ip in ips])
    return PropagationResult(
        resolver=resolver,
        region="Test",
        location="Test",
        status=QueryStatus.SUCCESS,
        response=parse_doh_payload(payload),
    )


def _failure(resolver: str) -> PropagationResult:
    return PropagationResult(
        resolver=resolver,
        region="Test",
        location="Test",
        status=QueryStatus.ERROR,
        error="HTTP 500: Internal Server Error",
    )


def test_global_registry_has_seven_resolvers_in_order():
    assert [r.key for r in GLOBAL_RESOLVERS] == [
        "google_us",
        "cloudflare_us",
        "quad9_eu",
        "dns_sb_asia",
        "adguard",
        "nextdns",
        "control_d",
    ]
    assert get_resolver("cloudflare_us").endpoint == "https://cloudflare-dns.com/dns-query"


def test_identical_answers_are_consistent():
    """Same IP sets from every resolver means no discrepancies."""
    analysis = analyze_propagation(
        [_success("one", "1.1.1.1", "2.2.2.2"), _success("two", "2.2.2.2", "1.1.1.1")]
    )

    assert analysis.records_consistent is True
    assert analysis.discrepancies == []
    assert analysis.ip_addresses == ["1.1.1.1", "2.2.2.2"]
    assert analysis.propagated is True


def test_differing_resolver_is_reported():
    analysis = analyze_propagation(
        [
            _success("one", "1.1.1.1"),
            _success("two", "1.1.1.1"),
            _success("three", "9.9.9.9"),
        ]
    )

    assert analysis.records_consistent is False
    assert len(analysis.discrepancies) == 1
    assert analysis.discrepancies[0].startswith("three returned different IPs")
    assert analysis.propagated is False
    assert "inconsistencies" in analysis.summary


def test_first_resolver_can_be_the_outlier():
    """The majority answer is the reference, not the first one seen."""
    analysis = analyze_propagation(
        [
            _success("google", "6.6.6.6"),
            _success("cloudflare", "1.1.1.1"),
            _success("quad9", "1.1.1.1"),
        ]
    )

    assert analysis.records_consistent is False
    assert analysis.discrepancies == ["google returned different IPs: 6.6.6.6"]


def test_tied_answers_use_earliest_resolver_as_reference():
    analysis = analyze_propagation(
        [
            _success("one", "1.1.1.1"),
            _success("two", "2.2.2.2"),
        ]
    )

    assert analysis.discrepancies == ["two returned different IPs: 2.2.2.2"]


def test_five_of_seven_is_71_percent():
    results = [_success(f"r{i}", "1.1.1.1") for i in range(5)]
    results += [_failure("r5"), _failure("r6")]

    analysis = analyze_propagation(results)

    assert analysis.percentage == 71
    assert analysis.propagated is True


def test_low_percentage_is_not_propagated():
    results = [_success("r0", "1.1.1.1"), _failure("r1"), _failure("r2")]

    analysis = analyze_propagation(results)

    assert analysis.percentage == 33
    assert analysis.propagated is False
    assert "only propagated to 33%" in analysis.summary


def test_no_results_is_zero_percent():
    analysis = analyze_propagation([])

    assert analysis.percentage == 0
    assert analysis.propagated is False


async def test_scan_keeps_registry_order_and_isolates_failures():
    resolvers = make_resolvers(
        "r1.test", "r2.test", "r3.test", "r4.test", "r5.test", "r6.test", "r7.test"
    )
    ips = {f"r{i}.test": ["93.184.216.34"] for i in range(1, 6)}
    scanner = PropagationScanner(
        transport=make_transport(doh=_answering(ips)),
        resolvers=resolvers,
    )

    report = await scanner.scan("example.com", "a")

    assert report.record_type == "A"
    assert [r.resolver for r in report.results] == [r.name for r in resolvers]
    assert [r.status for r in report.results] == [QueryStatus.SUCCESS] * 5 + [QueryStatus.ERROR] * 2
    assert report.results[5].error.startswith("HTTP 500")
    assert report.analysis.percentage == 71
    assert report.analysis.ip_addresses == ["93.184.216.34"]


async def test_unresponsive_resolver_times_out():
    """A resolver that never answers is reported as a timeout without stalling the rest."""

    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "slow.test":
            await asyncio.sleep(10)
        name = request.url.params["name"]
        return httpx.Response(200, json=doh_payload(name, "A", [(300, "93.184.216.34")]))

    scanner = PropagationScanner(
        transport=httpx.MockTransport(handler),
        resolvers=make_resolvers("fast.test", "slow.test"),
        timeout_ms=200,
    )

    loop = asyncio.get_running_loop()
    start = loop.time()
    results = await scanner.check_propagation("example.com")
    elapsed = loop.time() - start

    assert elapsed < 2
    fast, slow = results
    assert fast.status == QueryStatus.SUCCESS
    assert slow.status == QueryStatus.TIMEOUT
    assert slow.response is None
    assert 150 <= slow.latency_ms < 2000
