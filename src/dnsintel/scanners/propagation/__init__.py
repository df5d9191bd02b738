"""Propagation scanner module."""

from dnsintel.scanners.propagation.analysis import (
    PROPAGATION_THRESHOLD,
    analyze_propagation,
)
from dnsintel.scanners.propagation.scanner import PropagationScanner

__all__ = ["PROPAGATION_THRESHOLD", "PropagationScanner", "analyze_propagation"]
