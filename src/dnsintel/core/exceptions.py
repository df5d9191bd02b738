"""Custom exceptions for DNS Intel."""


class DNSIntelError(Exception):
    """Base exception for all DNS Intel errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DNSIntelError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.errors = errors or [message]


class ScanError(DNSIntelError):
    """Raised when a scan operation fails."""

    def __init__(
        self,
        message: str,
        scanner: str | None = None,
        target: str | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.scanner = scanner
        self.target = target


class QueryTimeoutError(DNSIntelError):
    """Raised when an outbound call exceeds its deadline."""

    def __init__(
        self,
        message: str,
        timeout_ms: int | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.timeout_ms = timeout_ms


class TransportError(DNSIntelError):
    """Raised on a non-2xx response or a connection failure."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code


class MalformedResponseError(DNSIntelError):
    """Raised when a payload cannot be decoded into the canonical shape."""

    pass


class PartialFailure(DNSIntelError):
    """Some sub-queries of a fan-out failed while others succeeded."""

    def __init__(
        self,
        message: str,
        failures: list[str] | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, details)
        self.failures = failures or []


class ZoneFetchError(ScanError):
    """Raised when no record type of a domain could be fetched."""

    pass
