"""Tests for the zone health scanner."""

import pytest

from conftest import FakeDoH, make_resolvers, make_transport
from dnsintel.core.exceptions import ZoneFetchError
from dnsintel.models import IssueCategory, Severity
from dnsintel.scanners.health import STANDARD_RECORD_TYPES, ZoneHealthScanner

RESOLVER = make_resolvers("fast.test")[0]


def _scanner(doh: FakeDoH) -> ZoneHealthScanner:
    return ZoneHealthScanner(transport=make_transport(doh=doh), resolver=RESOLVER)


async def test_example_com_end_to_end(example_zone):
    """example.com without MX: one MX info issue, no NS warning."""
    report = await _scanner(FakeDoH(example_zone)).analyze_zone_health("example.com")

    assert report.summary.has_mx is False
    assert report.summary.ns_count == 2
    assert report.issues_for(IssueCategory.NS) == []

    mx_issues = report.issues_for(IssueCategory.MX)
    assert len(mx_issues) == 1
    assert mx_issues[0].severity == Severity.INFO

    # Only the MX and TXT info penalties apply, then the NS bonus
    assert [i.severity for i in report.issues] == [Severity.INFO, Severity.INFO]
    assert report.overall_score == 100
    assert report.grade == "A"
    assert set(report.records) == {"A", "NS", "SOA"}


async def test_all_standard_types_are_queried(example_zone):
    doh = FakeDoH(example_zone)

    await _scanner(doh).fetch_records("example.com")

    assert sorted(rtype for _, _, rtype in doh.queries) == sorted(STANDARD_RECORD_TYPES)
    assert {host for host, _, _ in doh.queries} == {"fast.test"}


async def test_failed_type_becomes_general_warning(example_zone):
    report = await _scanner(FakeDoH(example_zone, failing_types={"CAA"})).analyze_zone_health(
        "example.com"
    )

    general = report.issues_for(IssueCategory.GENERAL, Severity.WARNING)
    assert len(general) == 1
    assert general[0].message.startswith("Failed to fetch CAA records: HTTP 503")
    assert report.overall_score == 91


async def test_lookup_lists_errors_and_supported_types(example_zone):
    lookup = await _scanner(FakeDoH(example_zone, failing_types={"TXT"})).fetch_records(
        "example.com"
    )

    assert lookup.total_records == 4
    assert lookup.errors == ["Failed to fetch TXT records: HTTP 503: Service Unavailable"]
    assert "CAA" in lookup.supported_types


async def test_every_type_failing_raises_zone_fetch_error(example_zone):
    doh = FakeDoH(example_zone, failing_types=set(STANDARD_RECORD_TYPES))

    with pytest.raises(ZoneFetchError) as exc_info:
        await _scanner(doh).analyze_zone_health("example.com")

    assert exc_info.value.target == "example.com"
    assert len(exc_info.value.details["errors"]) == len(STANDARD_RECORD_TYPES)
