"""Tests for the scanner registry."""

import pytest

from dnsintel.scanners import ScannerRegistry
from dnsintel.scanners.base import BaseScanner


def test_builtin_scanners_registered():
    assert {"health", "propagation", "subdomains", "whois"} <= set(ScannerRegistry.list_all())


def test_register_does_not_construct_scanner(monkeypatch):
    """Registration reads the class name; a broken constructor is never hit."""
    monkeypatch.setattr(ScannerRegistry, "_scanners", dict(ScannerRegistry._scanners))

    @ScannerRegistry.register
    class ExplodingScanner(BaseScanner):
        name = "exploding"

        def __init__(self) -> None:
            raise KeyError("unknown resolver")

        @property
        def description(self) -> str:
            return "never built"

    assert "exploding" in ScannerRegistry.list_all()
    with pytest.raises(KeyError):
        ExplodingScanner()
