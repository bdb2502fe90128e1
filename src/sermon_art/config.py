"""Runtime settings for the command-line tool, read from the environment / .env."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_JPEG_QUALITY = 92


@dataclass(frozen=True)
class Settings:
    public_root: Path          # resolves image layer paths like "/uploads/logo.png"
    output_dir: Path
    jpeg_quality: int = DEFAULT_JPEG_QUALITY
    debug: bool = False


def is_debug() -> bool:
    """Check if DEBUG is enabled via environment / .env."""
    return os.environ.get("DEBUG", "").lower() in ("1", "true")


def _jpeg_quality(raw: str | None) -> int:
    if not raw:
        return DEFAULT_JPEG_QUALITY
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring invalid SERMON_ART_JPEG_QUALITY=%r", raw)
        return DEFAULT_JPEG_QUALITY
    return max(1, min(95, value))


def load_settings(env_file: str | Path | None = None) -> Settings:
    """Load ``.env`` (without overriding the real environment) and build Settings."""
    from dotenv import find_dotenv, load_dotenv

    load_dotenv(env_file or find_dotenv(usecwd=True))
    return Settings(
        public_root=Path(os.environ.get("SERMON_ART_PUBLIC_ROOT") or "public"),
        output_dir=Path(os.environ.get("SERMON_ART_OUTPUT_DIR") or "output"),
        jpeg_quality=_jpeg_quality(os.environ.get("SERMON_ART_JPEG_QUALITY")),
        debug=is_debug(),
    )
