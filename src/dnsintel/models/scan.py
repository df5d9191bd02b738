"""Full scan report model."""

from datetime import datetime

from pydantic import Field

from dnsintel.core.exceptions import PartialFailure
from dnsintel.models.base import BaseSchema, utcnow
from dnsintel.models.health import ZoneHealthReport
from dnsintel.models.propagation import PropagationReport
from dnsintel.models.subdomain import SubdomainEnumerationResult
from dnsintel.models.whois import WHOISResult


class FullScanReport(BaseSchema):
    """Aggregate of every sub-check run for one domain."""

    domain: str
    timestamp: datetime = Field(default_factory=utcnow)
    is_premium: bool = False

    health: ZoneHealthReport | None = None
    propagation: PropagationReport | None = None
    subdomains: SubdomainEnumerationResult | None = None
    whois: WHOISResult | None = None

    # Sub-checks that could not complete, as "<module>: <error>"
    errors: list[str] = Field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def is_complete(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise ``PartialFailure`` if any sub-check could not complete."""
        if self.errors:
            raise PartialFailure(
                f"{len(self.errors)} sub-check(s) failed for {self.domain}",
                failures=list(self.errors),
            )
