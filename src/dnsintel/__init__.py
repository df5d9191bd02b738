"""DNS Intel - DNS health, propagation and subdomain intelligence."""

from dnsintel.version import __version__

__all__ = ["__version__"]
