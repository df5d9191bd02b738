"""Zone health rules, scoring and grading.

Every function here is pure: it looks only at already-fetched records.
"""

import re
from dataclasses import dataclass, field
from typing import Literal

from dnsintel.models.base import IssueCategory, Severity
from dnsintel.models.dns import ResolvedRecord
from dnsintel.models.health import ZoneHealthIssue, ZoneHealthSummary

SOA_MIN_REFRESH = 1200
SOA_MAX_REFRESH = 43200
SOA_MIN_TTL = 300
A_MIN_TTL = 60

SEVERITY_PENALTIES = {
    Severity.CRITICAL: 20,
    Severity.WARNING: 10,
    Severity.INFO: 2,
}

GRADE_BREAKPOINTS: tuple[tuple[int, Literal["A", "B", "C", "D"]], ...] = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)

PRIVATE_PREFIXES = (
    "10.",
    *(f"172.{octet}." for octet in range(16, 32)),
    "192.168.",
    "127.",
)

SPF_ALL_MECHANISMS = ("~all", "-all", "?all")

_DOTTED_QUAD = re.compile(r"^\d+\.\d+\.\d+\.\d+$")


def _issue(
    severity: Severity,
    category: IssueCategory,
    message: str,
    recommendation: str | None = None,
) -> ZoneHealthIssue:
    return ZoneHealthIssue(
        severity=severity,
        category=category,
        message=message,
        recommendation=recommendation,
    )


def check_soa(records: list[ResolvedRecord]) -> list[ZoneHealthIssue]:
    """Validate the SOA record."""
    if not records:
        return [
            _issue(
                Severity.CRITICAL,
                IssueCategory.SOA,
                "No SOA record found",
                "Add a Start of Authority record. This is required for proper "
                "DNS operation.",
            )
        ]

    issues: list[ZoneHealthIssue] = []
    soa = records[0]
    # mname rname serial refresh retry expire minimum
    parts = soa.data.split()
    if len(parts) < 7:
        return issues

    rname, refresh = parts[1], parts[3]

    try:
        refresh_seconds: int | None = int(refresh)
    except ValueError:
        refresh_seconds = None

    if refresh_seconds is not None and refresh_seconds < SOA_MIN_REFRESH:
        issues.append(
            _issue(
                Severity.WARNING,
                IssueCategory.SOA,
                f"SOA refresh interval ({refresh_seconds}s) is too low",
                f"Increase refresh interval to at least {SOA_MIN_REFRESH} seconds "
                "(20 minutes) to reduce DNS traffic.",
            )
        )
    elif refresh_seconds is not None and refresh_seconds > SOA_MAX_REFRESH:
        issues.append(
            _issue(
                Severity.INFO,
                IssueCategory.SOA,
                f"SOA refresh interval ({refresh_seconds}s) is quite high",
                "Consider reducing refresh interval for faster propagation of "
                "changes.",
            )
        )

    if soa.ttl < SOA_MIN_TTL:
        issues.append(
            _issue(
                Severity.WARNING,
                IssueCategory.SOA,
                f"SOA TTL ({soa.ttl}s) is very low",
                "Low TTL increases DNS query load. Consider 300-3600 seconds for "
                "production.",
            )
        )

    # DNS encodes the @ of the admin mailbox as a dot
    if "." not in rname:
        issues.append(
            _issue(
                Severity.WARNING,
                IssueCategory.SOA,
                "SOA administrator email appears malformed",
                "Ensure admin email is in DNS format: admin.example.com "
                "(replace @ with .)",
            )
        )

    return issues


def check_ns(records: list[ResolvedRecord]) -> list[ZoneHealthIssue]:
    """Validate nameserver redundancy."""
    if not records:
        return [
            _issue(
                Severity.CRITICAL,
                IssueCategory.NS,
                "No NS records found",
                "Add at least two nameserver records for redundancy.",
            )
        ]

    issues: list[ZoneHealthIssue] = []

    if len(records) < 2:
        issues.append(
            _issue(
                Severity.WARNING,
                IssueCategory.NS,
                f"Only {len(records)} NS record(s) found",
                "Add at least 2 nameserver records for redundancy. RFC 1034 "
                "recommends at least 2.",
            )
        )

    networks = {".".join(r.data.lower().split(".")[-3:]) for r in records}
    if len(networks) == 1 and len(records) > 1:
        issues.append(
            _issue(
                Severity.WARNING,
                IssueCategory.NS,
                "All nameservers appear to be on the same network",
                "Consider using nameservers from different networks/providers for "
                "better resilience.",
            )
        )

    return issues


def is_private_address(address: str) -> bool:
    """Prefix match against the private and loopback IPv4 ranges."""
    return address.startswith(PRIVATE_PREFIXES)


def check_a(records: list[ResolvedRecord]) -> list[ZoneHealthIssue]:
    """Validate root A records."""
    if not records:
        return [
            _issue(
                Severity.INFO,
                IssueCategory.A,
                "No A records found for root domain",
                "If this domain should resolve to a web server, add an A record.",
            )
        ]

    issues: list[ZoneHealthIssue] = []

    private = [r.data for r in records if is_private_address(r.data)]
    if private:
        issues.append(
            _issue(
                Severity.CRITICAL,
                IssueCategory.A,
                f"A record(s) point to private IP address(es): {', '.join(private)}",
                "Replace with public IP addresses. Private IPs are not reachable "
                "from the internet.",
            )
        )

    low_ttl = [r for r in records if r.ttl < A_MIN_TTL]
    if low_ttl:
        issues.append(
            _issue(
                Severity.INFO,
                IssueCategory.A,
                f"Very low TTL ({low_ttl[0].ttl}s) on A records",
                "Low TTL increases DNS load. Use 300+ seconds unless frequent "
                "changes expected.",
            )
        )

    return issues


def _parse_mx(record: ResolvedRecord) -> tuple[int, str]:
    parts = record.data.split()
    try:
        priority = int(parts[0]) if parts else 0
    except ValueError:
        priority = 0
    host = parts[1] if len(parts) > 1 else record.data
    return priority, host


def check_mx(records: list[ResolvedRecord]) -> list[ZoneHealthIssue]:
    """Validate mail exchangers."""
    if not records:
        return [
            _issue(
                Severity.INFO,
                IssueCategory.MX,
                "No MX records found",
                "Add MX records if this domain should receive email.",
            )
        ]

    issues: list[ZoneHealthIssue] = []
    entries = [_parse_mx(r) for r in records]

    priorities = {priority for priority, _ in entries}
    if len(priorities) == 1 and len(entries) > 1:
        issues.append(
            _issue(
                Severity.WARNING,
                IssueCategory.MX,
                "All MX records have the same priority",
                "Consider varying priorities to designate primary/backup mail "
                "servers.",
            )
        )

    ip_hosts = [host for _, host in entries if _DOTTED_QUAD.match(host)]
    if ip_hosts:
        issues.append(
            _issue(
                Severity.CRITICAL,
                IssueCategory.MX,
                f"MX record(s) point directly to IP addresses: {', '.join(ip_hosts)}",
                "MX records must point to hostnames, not IP addresses. This "
                "violates RFC 2181.",
            )
        )

    return issues


@dataclass
class TXTCheckResult:
    issues: list[ZoneHealthIssue] = field(default_factory=list)
    has_spf: bool = False
    has_dkim: bool = False
    has_dmarc: bool = False


def check_txt(records: list[ResolvedRecord]) -> TXTCheckResult:
    """Validate SPF and look for DMARC among the root TXT records.

    The DMARC flag is a limited heuristic: real DMARC policies live at
    ``_dmarc.<domain>``, which is never queried, so the flag only fires
    when a ``v=DMARC1`` string sits in the root TXT set.
    """
    result = TXTCheckResult()

    if not records:
        result.issues.append(
            _issue(
                Severity.INFO,
                IssueCategory.TXT,
                "No TXT records found",
                "Consider adding SPF, DKIM, and DMARC records for email security.",
            )
        )
        return result

    spf_records = [r for r in records if "v=spf1" in r.data.lower()]

    if not spf_records:
        result.issues.append(
            _issue(
                Severity.WARNING,
                IssueCategory.TXT,
                "No SPF record found",
                "Add an SPF record to prevent email spoofing. Example: "
                '"v=spf1 include:_spf.google.com ~all"',
            )
        )
    elif len(spf_records) > 1:
        result.has_spf = True
        result.issues.append(
            _issue(
                Severity.CRITICAL,
                IssueCategory.TXT,
                f"Multiple SPF records found ({len(spf_records)})",
                "Merge into a single SPF record. Multiple SPF records cause "
                "validation failures.",
            )
        )
    else:
        result.has_spf = True
        spf = spf_records[0].data
        if not any(mechanism in spf for mechanism in SPF_ALL_MECHANISMS):
            result.issues.append(
                _issue(
                    Severity.WARNING,
                    IssueCategory.TXT,
                    'SPF record missing "all" mechanism',
                    'Add "-all" (hard fail) or "~all" (soft fail) at the end of '
                    "your SPF record.",
                )
            )

    if any("v=dmarc1" in r.data.lower() for r in records):
        result.has_dmarc = True

    return result


def calculate_score(
    issues: list[ZoneHealthIssue],
    summary: ZoneHealthSummary,
) -> int:
    """Penalties per issue, bonuses for good practice, clamped to 0-100."""
    score = 100
    for issue in issues:
        score -= SEVERITY_PENALTIES[issue.severity]

    if summary.ns_count >= 2:
        score += 5
    if summary.has_spf:
        score += 5
    if summary.has_dmarc:
        score += 5
    if summary.mx_count >= 2:
        score += 3

    return max(0, min(100, score))


def score_to_grade(score: int) -> Literal["A", "B", "C", "D", "F"]:
    for threshold, grade in GRADE_BREAKPOINTS:
        if score >= threshold:
            return grade
    return "F"


def evaluate_records(
    records: dict[str, list[ResolvedRecord]],
    fetch_errors: list[str] | None = None,
) -> tuple[list[ZoneHealthIssue], ZoneHealthSummary]:
    """Run every rule over a fetched record set.

    Fetch errors come first as General warnings, then SOA, NS, A, MX and
    TXT issues in that order.
    """
    issues = [
        _issue(Severity.WARNING, IssueCategory.GENERAL, error)
        for error in fetch_errors or []
    ]

    issues.extend(check_soa(records.get("SOA", [])))
    issues.extend(check_ns(records.get("NS", [])))
    issues.extend(check_a(records.get("A", [])))
    issues.extend(check_mx(records.get("MX", [])))

    txt = check_txt(records.get("TXT", []))
    issues.extend(txt.issues)

    summary = ZoneHealthSummary(
        has_soa=bool(records.get("SOA")),
        has_ns=bool(records.get("NS")),
        has_a=bool(records.get("A")),
        has_mx=bool(records.get("MX")),
        has_spf=txt.has_spf,
        has_dkim=txt.has_dkim,
        has_dmarc=txt.has_dmarc,
        ns_count=len(records.get("NS", [])),
        mx_count=len(records.get("MX", [])),
    )
    return issues, summary
