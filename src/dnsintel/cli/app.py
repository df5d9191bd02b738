"""Main CLI application using Typer."""

import asyncio
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Annotated, Any, Optional, TypeVar

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dnsintel.core.config import get_settings
from dnsintel.core.exceptions import PartialFailure
from dnsintel.core.logging import setup_logging
from dnsintel.models import ScanOptions, validate_domain
from dnsintel.version import __version__

app = typer.Typer(
    name="dnsintel",
    help="DNS Intel - zone health, propagation, subdomains and WHOIS",
    no_args_is_help=True,
)

console = Console()

ReportT = TypeVar("ReportT", bound=BaseModel)

FormatOption = Annotated[
    str,
    typer.Option("--format", help="Output format: table, json"),
]
OutputOption = Annotated[
    Optional[Path],
    typer.Option("--output", "-o", help="Save the JSON report to this path"),
]


def version_callback(value: bool) -> None:
    if value:
        console.print(f"DNS Intel version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """DNS Intel - DNS intelligence from the command line."""
    setup_logging()


def _root_domain(domain: str) -> str:
    result = validate_domain(domain)
    if not result.is_valid:
        console.print(f"[red]Invalid domain: {'; '.join(result.errors)}[/red]")
        raise typer.Exit(1)
    return result.domain


def _run(label: str, coro: Coroutine[Any, Any, ReportT]) -> ReportT:
    with console.status(f"[bold green]{label}...[/bold green]"):
        try:
            return asyncio.run(coro)
        except Exception as e:
            console.print(f"[red]{label} failed: {e}[/red]")
            raise typer.Exit(1) from None


def _emit(
    result: ReportT,
    format_type: str,
    output: Path | None,
    table_formatter: Callable[[Console, ReportT], None],
) -> None:
    from dnsintel.cli.formatters import export_json, format_json

    if output:
        export_json(result, output)
        console.print(f"[green]Results saved to {output}[/green]")
        return

    if format_type == "json":
        format_json(console, result)
    else:
        table_formatter(console, result)


@app.command()
def scan(
    domain: Annotated[str, typer.Argument(help="Target domain")],
    propagation: Annotated[
        bool,
        typer.Option("--propagation/--no-propagation", help="Check global propagation"),
    ] = True,
    subdomains: Annotated[
        bool,
        typer.Option("--subdomains/--no-subdomains", help="Discover subdomains"),
    ] = True,
    whois: Annotated[
        bool,
        typer.Option("--whois/--no-whois", help="Look up WHOIS data"),
    ] = True,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with status 1 if any check fails"),
    ] = False,
    format_type: FormatOption = "table",
    output: OutputOption = None,
) -> None:
    """
    Run a full DNS intelligence scan.

    Examples:
        dnsintel scan example.com
        dnsintel scan example.com --no-subdomains --format json
    """
    from dnsintel.cli.formatters import format_scan_result
    from dnsintel.orchestration.coordinator import ScanCoordinator

    root = _root_domain(domain)
    console.print(
        Panel(
            f"[bold blue]DNS Intel Scan[/bold blue]\nTarget: [green]{root}[/green]",
            title="Starting Scan",
        )
    )

    options = ScanOptions(
        include_propagation=propagation,
        include_subdomains=subdomains,
        include_whois=whois,
        subdomain_limit=get_settings().full_scan_subdomain_limit,
    )
    report = _run("Scan", ScanCoordinator().run_full_scan(root, options))
    _emit(report, format_type, output, format_scan_result)

    if strict:
        try:
            report.raise_for_errors()
        except PartialFailure as e:
            console.print(f"[red]{e.message}[/red]")
            raise typer.Exit(1) from None


@app.command()
def records(
    domain: Annotated[str, typer.Argument(help="Target domain")],
    types: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help="Comma-separated record types, e.g. A,MX"),
    ] = None,
    format_type: FormatOption = "table",
    output: OutputOption = None,
) -> None:
    """Look up the standard DNS record set."""
    from dnsintel.cli.formatters import format_records
    from dnsintel.orchestration.coordinator import ScanCoordinator

    root = _root_domain(domain)
    lookup = _run("DNS lookup", ScanCoordinator().lookup_records(root, types))
    _emit(lookup, format_type, output, format_records)


@app.command()
def propagation(
    domain: Annotated[str, typer.Argument(help="Target domain")],
    record_type: Annotated[
        str,
        typer.Option("--type", "-t", help="Record type to compare"),
    ] = "A",
    format_type: FormatOption = "table",
    output: OutputOption = None,
) -> None:
    """Compare answers from public DoH resolvers worldwide."""
    from dnsintel.cli.formatters import format_propagation
    from dnsintel.orchestration.coordinator import ScanCoordinator

    root = _root_domain(domain)
    report = _run(
        "Propagation check",
        ScanCoordinator().propagation(root, record_type.upper()),
    )
    _emit(report, format_type, output, format_propagation)


@app.command()
def health(
    domain: Annotated[str, typer.Argument(help="Target domain")],
    format_type: FormatOption = "table",
    output: OutputOption = None,
) -> None:
    """Score the zone against DNS best practice."""
    from dnsintel.cli.formatters import format_health
    from dnsintel.orchestration.coordinator import ScanCoordinator

    root = _root_domain(domain)
    report = _run("Health check", ScanCoordinator().health(root))
    _emit(report, format_type, output, format_health)


@app.command()
def subdomains(
    domain: Annotated[str, typer.Argument(help="Target domain")],
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", help="Maximum number of results"),
    ] = 100,
    ssl: Annotated[
        bool,
        typer.Option("--ssl/--no-ssl", help="Probe discovered hosts for SSL"),
    ] = True,
    format_type: FormatOption = "table",
    output: OutputOption = None,
) -> None:
    """Discover subdomains from CT logs and common names."""
    from dnsintel.cli.formatters import format_subdomains
    from dnsintel.orchestration.coordinator import ScanCoordinator

    root = _root_domain(domain)
    limit = max(1, min(limit, get_settings().subdomain_limit_cap))
    result = _run(
        "Subdomain discovery",
        ScanCoordinator().subdomains(root, check_ssl=ssl, max_results=limit),
    )
    _emit(result, format_type, output, format_subdomains)


@app.command()
def whois(
    domain: Annotated[str, typer.Argument(help="Target domain")],
    format_type: FormatOption = "table",
    output: OutputOption = None,
) -> None:
    """Look up WHOIS registration data."""
    from dnsintel.cli.formatters import format_whois
    from dnsintel.orchestration.coordinator import ScanCoordinator

    root = _root_domain(domain)
    result = _run("WHOIS lookup", ScanCoordinator().whois(root))
    _emit(result, format_type, output, format_whois)


@app.command()
def config() -> None:
    """Show current configuration."""
    settings = get_settings()

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("API Host", settings.api_host)
    table.add_row("API Port", str(settings.api_port))
    table.add_row("Log Level", settings.log_level)
    table.add_row("Log Format", settings.log_format)
    table.add_row("Health Resolver", settings.health_resolver)
    table.add_row("DoH Timeout", f"{settings.doh_timeout_ms}ms")
    table.add_row("Propagation Timeout", f"{settings.propagation_timeout_ms}ms")
    table.add_row("Resolution Timeout", f"{settings.resolution_timeout_ms}ms")
    table.add_row("SSL Probe Timeout", f"{settings.ssl_timeout_ms}ms")
    table.add_row("WHOIS Timeout", f"{settings.whois_timeout}s")
    table.add_row("Subdomain Limit Cap", str(settings.subdomain_limit_cap))
    table.add_row("DoH Queries/s", str(settings.doh_queries_per_second))

    console.print(table)


@app.command()
def serve(
    host: Annotated[
        Optional[str],
        typer.Option("--host", "-h", help="Host to bind to"),
    ] = None,
    port: Annotated[
        Optional[int],
        typer.Option("--port", "-p", help="Port to bind to"),
    ] = None,
    reload: Annotated[
        bool,
        typer.Option("--reload", "-r", help="Enable auto-reload for development"),
    ] = False,
) -> None:
    """Start the REST API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(
        Panel(
            f"[bold blue]Starting API Server[/bold blue]\n"
            f"Host: [green]{host}[/green]\n"
            f"Port: [green]{port}[/green]\n"
            f"Docs: [cyan]http://{host}:{port}/docs[/cyan]",
            title="API Server",
        )
    )

    uvicorn.run(
        "dnsintel.api.app:app",
        host=host,
        port=port,
        reload=reload,
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
