"""Subdomain discovery."""

from dnsintel.scanners.subdomain.scanner import (
    SubdomainScanner,
    extract_ct_names,
    infer_ssl_presence,
    subdomain_label,
)
from dnsintel.scanners.subdomain.wordlist import COMMON_SUBDOMAINS

__all__ = [
    "COMMON_SUBDOMAINS",
    "SubdomainScanner",
    "extract_ct_names",
    "infer_ssl_presence",
    "subdomain_label",
]
