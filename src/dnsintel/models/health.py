"""Zone health models."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from dnsintel.models.base import BaseSchema, IssueCategory, Severity, utcnow
from dnsintel.models.dns import ResolvedRecord


class ZoneHealthIssue(BaseSchema):
    """Single diagnostic produced by a zone health rule."""

    severity: Severity
    category: IssueCategory
    message: str
    recommendation: str | None = None


class ZoneHealthSummary(BaseSchema):
    """Presence flags and counts for the fetched record set."""

    has_soa: bool = False
    has_ns: bool = False
    has_a: bool = False
    has_mx: bool = False
    has_spf: bool = False
    has_dkim: bool = False
    has_dmarc: bool = False
    ns_count: int = 0
    mx_count: int = 0


class ZoneHealthReport(BaseSchema):
    """Zone health assessment for one domain."""

    domain: str
    timestamp: datetime = Field(default_factory=utcnow)
    overall_score: int = Field(default=0, ge=0, le=100)
    grade: Literal["A", "B", "C", "D", "F"] = "F"
    issues: list[ZoneHealthIssue] = Field(default_factory=list)
    records: dict[str, list[ResolvedRecord]] = Field(default_factory=dict)
    summary: ZoneHealthSummary = Field(default_factory=ZoneHealthSummary)

    def issues_for(
        self,
        category: IssueCategory,
        severity: Severity | None = None,
    ) -> list[ZoneHealthIssue]:
        """Issues in one category, optionally of one severity."""
        return [
            issue
            for issue in self.issues
            if issue.category == category
            and (severity is None or issue.severity == severity)
        ]
