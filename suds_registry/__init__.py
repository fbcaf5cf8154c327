"""Maintenance registry for sustainable urban drainage installations."""

from suds_registry.version import __version__

__all__ = ["__version__"]
