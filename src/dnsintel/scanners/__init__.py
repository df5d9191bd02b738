"""Scanner modules for DNS intelligence."""

from dnsintel.scanners.base import BaseScanner
from dnsintel.scanners.registry import ScannerRegistry
from dnsintel.scanners.health import ZoneHealthScanner
from dnsintel.scanners.propagation import PropagationScanner
from dnsintel.scanners.subdomain import SubdomainScanner
from dnsintel.scanners.whois import WHOISScanner

__all__ = [
    "BaseScanner",
    "PropagationScanner",
    "ScannerRegistry",
    "SubdomainScanner",
    "WHOISScanner",
    "ZoneHealthScanner",
]
