"""CLI output formatters."""

from dnsintel.cli.formatters.json_fmt import export_json, format_json
from dnsintel.cli.formatters.table import (
    format_health,
    format_propagation,
    format_records,
    format_scan_result,
    format_subdomains,
    format_whois,
)

__all__ = [
    "export_json",
    "format_health",
    "format_json",
    "format_propagation",
    "format_records",
    "format_scan_result",
    "format_subdomains",
    "format_whois",
]
