"""Tests for zone health rules, scoring and grading."""

from conftest import EXAMPLE_SOA, record
from dnsintel.models import IssueCategory, Severity, ZoneHealthIssue, ZoneHealthSummary
from dnsintel.scanners.health.rules import (
    calculate_score,
    check_a,
    check_mx,
    check_ns,
    check_soa,
    check_txt,
    evaluate_records,
    is_private_address,
    score_to_grade,
)


def _healthy_records() -> dict:
    return {
        "SOA": [record("example.com", "SOA", EXAMPLE_SOA)],
        "NS": [
            record("example.com", "NS", "ns1.provider-one.net"),
            record("example.com", "NS", "ns2.provider-two.org"),
        ],
        "A": [record("example.com", "A", "93.184.216.34")],
        "MX": [
            record("example.com", "MX", "10 mx1.example.com."),
            record("example.com", "MX", "20 mx2.example.com."),
        ],
        "TXT": [record("example.com", "TXT", '"v=spf1 include:_spf.example.net -all"')],
    }


def test_low_soa_refresh_is_a_single_warning():
    """refresh=600 yields exactly one SOA warning about the refresh interval."""
    soa = record(
        "example.com",
        "SOA",
        "ns.example.com. hostmaster.example.com. 2024010101 600 3600 1209600 3600",
    )

    issues = check_soa([soa])

    assert len(issues) == 1
    assert issues[0].severity == Severity.WARNING
    assert issues[0].category == IssueCategory.SOA
    assert "refresh interval" in issues[0].message


def test_high_soa_refresh_is_info():
    soa = record(
        "example.com",
        "SOA",
        "ns.example.com. hostmaster.example.com. 1 86400 3600 1209600 3600",
    )

    issues = check_soa([soa])

    assert [(i.severity, i.category) for i in issues] == [(Severity.INFO, IssueCategory.SOA)]


def test_soa_low_ttl_and_bad_rname():
    soa = record("example.com", "SOA", "ns.example.com. hostmaster 1 7200 3600 1209600 3600", ttl=60)

    messages = [i.message for i in check_soa([soa])]

    assert "SOA TTL (60s) is very low" in messages
    assert "SOA administrator email appears malformed" in messages


def test_short_soa_data_is_not_parsed():
    assert check_soa([record("example.com", "SOA", "ns.example.com. hostmaster")]) == []


def test_missing_soa_is_critical():
    issues = check_soa([])

    assert issues[0].severity == Severity.CRITICAL


def test_ns_redundancy():
    assert check_ns([])[0].severity == Severity.CRITICAL

    single = check_ns([record("example.com", "NS", "ns1.example.net")])
    assert [i.message for i in single] == ["Only 1 NS record(s) found"]


def test_ns_on_same_network_is_a_warning():
    issues = check_ns(
        [
            record("example.com", "NS", "ns1.dns.example.net"),
            record("example.com", "NS", "ns2.dns.example.net"),
        ]
    )

    assert [i.message for i in issues] == ["All nameservers appear to be on the same network"]


def test_private_address_ranges():
    assert is_private_address("10.0.0.1")
    assert is_private_address("172.16.0.1")
    assert is_private_address("172.31.255.1")
    assert is_private_address("192.168.1.1")
    assert is_private_address("127.0.0.1")
    assert not is_private_address("172.32.0.1")
    assert not is_private_address("93.184.216.34")


def test_a_record_rules():
    issues = check_a(
        [
            record("example.com", "A", "10.1.2.3"),
            record("example.com", "A", "93.184.216.34", ttl=30),
        ]
    )

    assert [(i.severity, i.category) for i in issues] == [
        (Severity.CRITICAL, IssueCategory.A),
        (Severity.INFO, IssueCategory.A),
    ]
    assert "10.1.2.3" in issues[0].message


def test_mx_pointing_at_ip_cites_rfc_2181():
    """An MX host that is a dotted quad is one critical MX issue."""
    issues = check_mx([record("example.com", "MX", "10 203.0.113.5")])

    assert len(issues) == 1
    assert issues[0].severity == Severity.CRITICAL
    assert issues[0].category == IssueCategory.MX
    assert "RFC 2181" in issues[0].recommendation


def test_mx_same_priority_is_a_warning():
    issues = check_mx(
        [
            record("example.com", "MX", "10 mx1.example.com."),
            record("example.com", "MX", "10 mx2.example.com."),
        ]
    )

    assert [i.message for i in issues] == ["All MX records have the same priority"]


def test_spf_checks():
    missing = check_txt([record("example.com", "TXT", '"google-site-verification=abc"')])
    assert missing.has_spf is False
    assert missing.issues[0].message == "No SPF record found"

    double = check_txt(
        [
            record("example.com", "TXT", '"v=spf1 -all"'),
            record("example.com", "TXT", '"v=spf1 include:x.example ~all"'),
        ]
    )
    assert double.has_spf is True
    assert double.issues[0].severity == Severity.CRITICAL

    no_all = check_txt([record("example.com", "TXT", '"v=spf1 include:x.example"')])
    assert no_all.issues[0].message == 'SPF record missing "all" mechanism'


def test_dmarc_detection_is_limited_to_root_txt():
    """Known-limited heuristic: only a v=DMARC1 string in the root TXT set counts.

    Real DMARC policies live at _dmarc.<domain>, which is never queried,
    so a correctly deployed policy is not detected.
    """
    root_only = check_txt([record("example.com", "TXT", '"v=spf1 -all"')])
    assert root_only.has_dmarc is False

    misplaced = check_txt(
        [
            record("example.com", "TXT", '"v=spf1 -all"'),
            record("example.com", "TXT", '"v=DMARC1; p=reject"'),
        ]
    )
    assert misplaced.has_dmarc is True
    assert misplaced.has_dkim is False


def test_score_is_clamped_at_zero():
    issues = [
        ZoneHealthIssue(severity=Severity.CRITICAL, category=IssueCategory.GENERAL, message="x")
    ] * 10

    assert calculate_score(issues, ZoneHealthSummary()) == 0


def test_score_is_clamped_at_hundred():
    summary = ZoneHealthSummary(ns_count=2, mx_count=2, has_spf=True, has_dmarc=True)

    assert calculate_score([], summary) == 100


def test_grade_breakpoints():
    assert score_to_grade(100) == "A"
    assert score_to_grade(90) == "A"
    assert score_to_grade(89) == "B"
    assert score_to_grade(80) == "B"
    assert score_to_grade(70) == "C"
    assert score_to_grade(60) == "D"
    assert score_to_grade(59) == "F"
    assert score_to_grade(0) == "F"


def test_evaluation_is_deterministic():
    """Identical record sets always give identical scores."""
    first_issues, first_summary = evaluate_records(_healthy_records())
    second_issues, second_summary = evaluate_records(_healthy_records())

    assert first_issues == second_issues
    assert calculate_score(first_issues, first_summary) == calculate_score(
        second_issues, second_summary
    )


def test_healthy_zone_has_no_issues():
    issues, summary = evaluate_records(_healthy_records())

    assert issues == []
    assert summary.has_spf is True
    assert summary.ns_count == 2
    assert summary.mx_count == 2
    assert calculate_score(issues, summary) == 100


def test_fetch_errors_come_first_as_general_warnings():
    issues, _ = evaluate_records(_healthy_records(), ["Failed to fetch CAA records: HTTP 503"])

    assert issues[0].category == IssueCategory.GENERAL
    assert issues[0].severity == Severity.WARNING
    assert issues[0].message == "Failed to fetch CAA records: HTTP 503"
