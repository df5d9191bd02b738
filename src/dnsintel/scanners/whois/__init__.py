"""WHOIS scanner module."""

from dnsintel.scanners.whois.scanner import (
    WHOISScanner,
    generate_privacy_summary,
    has_privacy_protection,
)

__all__ = ["WHOISScanner", "generate_privacy_summary", "has_privacy_protection"]
