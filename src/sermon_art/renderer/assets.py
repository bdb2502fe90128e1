"""Image source resolution for renderers.

An image layer's ``src`` is one of:
  - a data URI, passed through;
  - an ``http(s)://`` URL, passed through (or fetched for the slide deck);
  - a path relative to the public asset root, e.g. ``/uploads/logo.png``.

Local paths are confined to the public root; anything that resolves outside
it is treated as missing.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from pathlib import Path
from urllib.parse import unquote_to_bytes

import httpx

from sermon_art.exceptions import AssetError

logger = logging.getLogger(__name__)

REMOTE_TIMEOUT = 15.0

_DATA_URI_RE = re.compile(r"^data:([^;,]*)(;base64)?,(.*)$", re.IGNORECASE | re.DOTALL)

_MIME_BY_SUFFIX = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".gif": "image/gif",
}

_MAGIC = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF8", "image/gif"),
)


def default_public_root() -> Path:
    return Path.cwd() / "public"


def is_data_uri(src: str) -> bool:
    return src[:5].lower() == "data:"


def is_remote(src: str) -> bool:
    return bool(re.match(r"^https?://", src, re.IGNORECASE))


def resolve_public_path(src: str, public_root: Path | None = None) -> Path | None:
    """Map ``src`` to a file under ``public_root``.

    Returns None for remote and data sources, for paths escaping the root,
    and for files that do not exist.
    """
    if not src or is_remote(src) or is_data_uri(src):
        return None
    root = Path(public_root or default_public_root()).resolve()
    candidate = (root / src.lstrip("/")).resolve()
    if candidate != root and root not in candidate.parents:
        logger.debug("Image path %s escapes public root %s", src, root)
        return None
    if not candidate.is_file():
        return None
    return candidate


def detect_mime_type(path: Path, data: bytes | None = None) -> str:
    """MIME type from the file suffix, falling back to magic bytes."""
    mime = _MIME_BY_SUFFIX.get(path.suffix.lower())
    if mime:
        return mime
    head = data[:16] if data is not None else path.read_bytes()[:16]
    for magic, sniffed in _MAGIC:
        if head.startswith(magic):
            return sniffed
    if head.startswith(b"RIFF") and head[8:12] == b"WEBP":
        return "image/webp"
    return "application/octet-stream"


def image_to_data_uri(path: Path) -> str:
    """Convert an image file to a base64 data URI.

    TIFF is converted to PNG since browsers do not render it.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in (".tif", ".tiff"):
        from PIL import Image

        with Image.open(path) as img:
            buf = io.BytesIO()
            img.save(buf, format="PNG")
        data = base64.b64encode(buf.getvalue()).decode()
        return f"data:image/png;base64,{data}"

    raw = path.read_bytes()
    mime = detect_mime_type(path, raw)
    return f"data:{mime};base64,{base64.b64encode(raw).decode()}"


def resolve_image_href(src: str, public_root: Path | None = None) -> str:
    """Inline a local image as a data URI; otherwise return ``src`` unchanged."""
    path = resolve_public_path(src, public_root)
    if path is None:
        if src and not is_remote(src) and not is_data_uri(src):
            logger.debug("Image %s not found under public root; keeping src", src)
        return src
    try:
        return image_to_data_uri(path)
    except OSError as exc:
        logger.warning("Could not read image %s: %s", path, exc)
        return src


def decode_data_uri(src: str) -> tuple[str, bytes]:
    """Split a data URI into (mime type, payload bytes)."""
    match = _DATA_URI_RE.match(src)
    if not match:
        raise AssetError(f"Not a data URI: {src[:40]}")
    mime = match.group(1) or "text/plain"
    payload = match.group(3)
    if match.group(2):
        try:
            return mime, base64.b64decode(payload, validate=False)
        except (binascii.Error, ValueError) as exc:
            raise AssetError("Invalid base64 payload in data URI") from exc
    return mime, unquote_to_bytes(payload)


def fetch_remote_image(url: str, timeout: float = REMOTE_TIMEOUT) -> bytes:
    """Download an image; raises AssetError on any HTTP or network failure."""
    try:
        resp = httpx.get(url, timeout=timeout, follow_redirects=True)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise AssetError(
            f"Image fetch returned HTTP {exc.response.status_code} for {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise AssetError(f"Network error fetching image {url}: {exc}") from exc
    logger.debug("Fetched %s (%d bytes)", url, len(resp.content))
    return resp.content


def load_image_bytes(src: str, public_root: Path | None = None) -> bytes:
    """Bytes for any image source kind.

    Raises:
        AssetError: the source is missing, unreadable or unfetchable.
    """
    if is_data_uri(src):
        return decode_data_uri(src)[1]
    if is_remote(src):
        return fetch_remote_image(src)
    path = resolve_public_path(src, public_root)
    if path is None:
        raise AssetError(f"Image not found under public root: {src}")
    try:
        return path.read_bytes()
    except OSError as exc:
        raise AssetError(f"Could not read image {path}") from exc
