"""Base models and enums."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
    )


class Severity(str, Enum):
    """Zone health issue severity levels."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class IssueCategory(str, Enum):
    """Record family a zone health issue belongs to."""

    SOA = "SOA"
    NS = "NS"
    A = "A"
    MX = "MX"
    CNAME = "CNAME"
    TXT = "TXT"
    GENERAL = "General"


class QueryStatus(str, Enum):
    """Outcome of a single resolver query."""

    SUCCESS = "success"
    ERROR = "error"
    TIMEOUT = "timeout"
