"""Infrastructure layer."""

from dnsintel.infrastructure.http import HTTPClient
from dnsintel.infrastructure.ratelimit import ProbeLimiter

__all__ = ["HTTPClient", "ProbeLimiter"]
