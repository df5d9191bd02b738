"""Pacing for fan-out DoH probing."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from aiolimiter import AsyncLimiter

from dnsintel.core.config import Settings


class ProbeLimiter:
    """Bounds concurrent probes and paces the DoH queries they issue.

    ``slot()`` holds one of ``max_concurrency`` probe slots for the length
    of a probe. ``query()`` takes a token from a ``queries_per_second``
    bucket before a single DoH request goes out.
    """

    def __init__(
        self,
        queries_per_second: float,
        max_concurrency: int,
        time_period: float = 1.0,
    ) -> None:
        self._bucket = AsyncLimiter(queries_per_second, time_period)
        self._slots = asyncio.Semaphore(max_concurrency)
        self.max_concurrency = max_concurrency
        self.queries = 0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProbeLimiter":
        return cls(
            queries_per_second=settings.doh_queries_per_second,
            max_concurrency=settings.subdomain_probe_concurrency,
        )

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        async with self._slots:
            yield

    @asynccontextmanager
    async def query(self) -> AsyncIterator[None]:
        await self._bucket.acquire()
        self.queries += 1
        yield
