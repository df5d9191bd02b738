"""Base scanner class."""

from abc import ABC, abstractmethod
from typing import ClassVar

import httpx

from dnsintel.core.config import get_settings
from dnsintel.core.logging import get_logger


class BaseScanner(ABC):
    """Base class for all scanner implementations.

    ``transport`` is handed to every HTTP client the scanner opens, so a
    test can route all network traffic to ``httpx.MockTransport``.
    """

    # Module name; prefixes coordinator errors and keys the registry
    name: ClassVar[str]

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = get_settings()
        self.transport = transport
        self.logger = get_logger(self.name)

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description."""
        ...

    def get_capabilities(self) -> list[str]:
        """List of capabilities this scanner provides."""
        return []
