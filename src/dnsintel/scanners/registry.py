"""Scanner plugin registry."""

from dnsintel.scanners.base import BaseScanner


class ScannerRegistry:
    """Registry for scanner plugins, keyed by module name."""

    _scanners: dict[str, type[BaseScanner]] = {}

    @classmethod
    def register(cls, scanner_class: type[BaseScanner]) -> type[BaseScanner]:
        """Register a scanner class under its ``name``."""
        cls._scanners[scanner_class.name] = scanner_class
        return scanner_class

    @classmethod
    def list_all(cls) -> list[str]:
        """List all registered scanner names."""
        return list(cls._scanners.keys())
