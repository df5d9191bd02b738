"""Zone health scanner module."""

from dnsintel.scanners.health.scanner import STANDARD_RECORD_TYPES, ZoneHealthScanner

__all__ = ["STANDARD_RECORD_TYPES", "ZoneHealthScanner"]
