"""Sermon-series artwork generation: preset generators and export renderers."""

from sermon_art.version import __version__

__all__ = ["__version__"]
