"""Custom exception hierarchy for sermon_art."""

from __future__ import annotations


class SermonArtError(Exception):
    """Base exception for all sermon_art errors."""


class InvalidShapeError(SermonArtError, ValueError):
    """An aspect-ratio name other than square, wide, or tall."""


class AssetError(SermonArtError):
    """A required image asset is missing, unreadable, or unreachable."""


class ImageDecodeError(AssetError):
    """Bytes that should hold an image could not be decoded."""


class RenderError(SermonArtError):
    """The rasterization backend (headless Chromium) failed."""
