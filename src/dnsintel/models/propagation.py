"""Propagation check models."""

from datetime import datetime

from pydantic import ConfigDict, Field

from dnsintel.models.base import BaseSchema, QueryStatus, utcnow
from dnsintel.models.dns import DoHResponse


class ResolverDescriptor(BaseSchema):
    """Public DoH resolver with location metadata."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    region: str
    endpoint: str
    location: str


class PropagationResult(BaseSchema):
    """Outcome of one resolver in a propagation check."""

    resolver: str
    region: str
    location: str
    status: QueryStatus
    response: DoHResponse | None = None
    latency_ms: int = 0
    error: str | None = None
    timestamp: datetime = Field(default_factory=utcnow)

    @property
    def is_success(self) -> bool:
        return self.status == QueryStatus.SUCCESS


class PropagationAnalysis(BaseSchema):
    """Consistency metrics derived from a set of propagation results."""

    propagated: bool = False
    percentage: int = Field(default=0, ge=0, le=100)
    records_consistent: bool = True
    ip_addresses: list[str] = Field(default_factory=list)
    discrepancies: list[str] = Field(default_factory=list)
    summary: str = ""


class PropagationReport(BaseSchema):
    """Propagation results for one domain and record type."""

    domain: str
    record_type: str
    timestamp: datetime = Field(default_factory=utcnow)
    results: list[PropagationResult] = Field(default_factory=list)
    analysis: PropagationAnalysis = Field(default_factory=PropagationAnalysis)
