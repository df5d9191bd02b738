"""Table formatter for CLI output."""

from datetime import datetime

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dnsintel.models import (
    DNSLookupResult,
    FullScanReport,
    PropagationReport,
    QueryStatus,
    Severity,
    SubdomainEnumerationResult,
    WHOISResult,
    ZoneHealthReport,
)

SEVERITY_STYLES = {
    Severity.CRITICAL: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
}

GRADE_STYLES = {"A": "green", "B": "blue", "C": "yellow", "D": "orange1", "F": "red"}

STATUS_STYLES = {
    QueryStatus.SUCCESS: "green",
    QueryStatus.ERROR: "red",
    QueryStatus.TIMEOUT: "yellow",
}


def _format_date(date_value: datetime | None) -> str:
    if date_value is None:
        return "N/A"
    return str(date_value.date())


def _truncate(value: str, width: int = 60) -> str:
    return value[:width] + "..." if len(value) > width else value


def format_records(console: Console, lookup: DNSLookupResult) -> None:
    """Format DNS records."""
    table = Table(title=f"DNS Records for {lookup.domain}", show_header=True)
    table.add_column("Type", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Value")
    table.add_column("TTL")

    for rtype, records in lookup.records.items():
        for record in records:
            table.add_row(rtype, record.name, _truncate(record.data), str(record.ttl))

    console.print(table)

    for error in lookup.errors:
        console.print(f"[yellow]{error}[/yellow]")


def format_propagation(console: Console, report: PropagationReport) -> None:
    """Format propagation results and analysis."""
    table = Table(
        title=f"Propagation of {report.record_type} for {report.domain}",
        show_header=True,
    )
    table.add_column("Resolver", style="cyan")
    table.add_column("Region")
    table.add_column("Status")
    table.add_column("Latency")
    table.add_column("Answer")

    for result in report.results:
        style = STATUS_STYLES[result.status]
        if result.response is not None:
            answer = ", ".join(r.data for r in result.response.answer) or "(empty)"
        else:
            answer = result.error or ""
        table.add_row(
            result.resolver,
            result.region,
            f"[{style}]{result.status.value}[/{style}]",
            f"{result.latency_ms}ms",
            _truncate(answer),
        )

    console.print(table)

    analysis = report.analysis
    color = "green" if analysis.propagated else "yellow"
    console.print(
        Panel(
            f"[{color}]{analysis.summary}[/{color}]\n"
            f"Propagation: {analysis.percentage}%\n"
            f"Consistent: {'Yes' if analysis.records_consistent else 'No'}\n"
            f"Addresses: {', '.join(analysis.ip_addresses) or 'N/A'}",
            title="Analysis",
        )
    )
    for discrepancy in analysis.discrepancies:
        console.print(f"  [yellow]- {discrepancy}[/yellow]")


def format_health(console: Console, report: ZoneHealthReport) -> None:
    """Format zone health score and issues."""
    grade_color = GRADE_STYLES.get(report.grade, "white")
    summary = report.summary
    console.print(
        Panel(
            f"Score: [bold]{report.overall_score}/100[/bold]  "
            f"Grade: [{grade_color}]{report.grade}[/{grade_color}]\n"
            f"NS: {summary.ns_count}  MX: {summary.mx_count}  "
            f"SPF: {'Yes' if summary.has_spf else 'No'}  "
            f"DMARC: {'Yes' if summary.has_dmarc else 'No'}",
            title=f"Zone Health for {report.domain}",
        )
    )

    if not report.issues:
        console.print("[green]No issues found[/green]")
        return

    table = Table(title="Issues", show_header=True)
    table.add_column("Severity")
    table.add_column("Category", style="cyan")
    table.add_column("Message")
    table.add_column("Recommendation")

    for issue in report.issues:
        style = SEVERITY_STYLES[issue.severity]
        table.add_row(
            f"[{style}]{issue.severity.value.upper()}[/{style}]",
            issue.category.value,
            issue.message,
            issue.recommendation or "",
        )

    console.print(table)


def format_subdomains(console: Console, result: SubdomainEnumerationResult) -> None:
    """Format discovered subdomains."""
    table = Table(
        title=f"Subdomains of {result.domain} ({result.total_found})",
        show_header=True,
    )
    table.add_column("Subdomain", style="cyan")
    table.add_column("Source")
    table.add_column("IPs", style="green")
    table.add_column("SSL")

    for sub in result.subdomains:
        if sub.has_ssl and sub.ssl_details and sub.ssl_details.expired:
            ssl_label = "[red]expired[/red]"
        elif sub.has_ssl:
            ssl_label = "[green]yes[/green]"
        else:
            ssl_label = "no"
        table.add_row(
            sub.full_domain,
            sub.source,
            ", ".join(sub.ip_addresses[:3]),
            ssl_label,
        )

    console.print(table)
    console.print(
        f"CT logs: {result.sources.certificate_transparency}  "
        f"Common names: {result.sources.common_subdomains}"
    )


def format_whois(console: Console, whois: WHOISResult) -> None:
    """Format WHOIS results."""
    table = Table(title=f"WHOIS for {whois.domain}", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    if whois.registrar and whois.registrar.name:
        table.add_row("Registrar", whois.registrar.name)
    if whois.dates:
        table.add_row("Created", _format_date(whois.dates.created))
        table.add_row("Expires", _format_date(whois.dates.expires))
    if whois.nameservers:
        table.add_row("Nameservers", ", ".join(whois.nameservers[:4]))
    if whois.status:
        table.add_row("Status", ", ".join(whois.status[:3]))
    if whois.dnssec:
        table.add_row("DNSSEC", whois.dnssec)
    if whois.registrant and whois.registrant.organization:
        table.add_row("Registrant", whois.registrant.organization)
    table.add_row("Privacy", "Yes" if whois.privacy_enabled else "No")

    console.print(table)
    if whois.summary:
        console.print(f"[dim]{whois.summary}[/dim]")


def format_scan_result(console: Console, report: FullScanReport) -> None:
    """Format a full scan."""
    console.print()
    console.print(
        Panel(
            f"[bold green]Scan Complete[/bold green]\n"
            f"Target: [cyan]{report.domain}[/cyan]\n"
            f"Duration: {report.duration_seconds:.1f}s",
            title="Results",
        )
    )

    if report.health:
        format_health(console, report.health)
    if report.propagation:
        format_propagation(console, report.propagation)
    if report.subdomains:
        format_subdomains(console, report.subdomains)
    if report.whois:
        format_whois(console, report.whois)

    if report.errors:
        console.print("[yellow]Some checks did not complete:[/yellow]")
        for error in report.errors:
            console.print(f"  - {error}")
