"""Core module - configuration, logging, and exceptions."""

from dnsintel.core.config import Settings, get_settings
from dnsintel.core.exceptions import (
    DNSIntelError,
    MalformedResponseError,
    PartialFailure,
    QueryTimeoutError,
    ScanError,
    TransportError,
    ValidationError,
    ZoneFetchError,
)

__all__ = [
    "Settings",
    "get_settings",
    "DNSIntelError",
    "MalformedResponseError",
    "PartialFailure",
    "QueryTimeoutError",
    "ScanError",
    "TransportError",
    "ValidationError",
    "ZoneFetchError",
]
