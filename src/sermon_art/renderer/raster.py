"""PNG rendering: headless Chromium rasterizes the SVG, Pillow composites.

Rasterization runs the composed SVG inside a minimal HTML page (see
``templates/html/raster.html``) and screenshots the viewport at the
document's declared size.
"""

from __future__ import annotations

import io
import logging
import math
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from sermon_art.design.models import DesignDoc
from sermon_art.exceptions import AssetError, ImageDecodeError, RenderError
from sermon_art.renderer.filters import setup_jinja_env
from sermon_art.renderer.svg import build_svg

logger = logging.getLogger(__name__)

FocalPoint = tuple[float, float]
CENTER: FocalPoint = (0.5, 0.5)


def normalize_dimension(value: float | None, fallback: int) -> int:
    """Positive whole pixel count; non-finite or missing values use ``fallback``."""
    if value is None or not math.isfinite(value):
        value = fallback
    return max(1, round(value))


def _clamp_focal(focal: FocalPoint | None) -> FocalPoint:
    if focal is None:
        return CENTER
    fx, fy = focal
    return (min(1.0, max(0.0, fx)), min(1.0, max(0.0, fy)))


def rasterize_svg(svg: str, width: int, height: int, *, transparent: bool = False) -> bytes:
    """Render SVG markup to PNG bytes at exactly ``width`` x ``height``.

    Raises:
        RenderError: Chromium could not be launched or the page failed.
    """
    from playwright.sync_api import Error as PlaywrightError
    from playwright.sync_api import sync_playwright

    html = setup_jinja_env().get_template("raster.html").render(
        svg=svg, width=width, height=height, transparent=transparent,
    )
    try:
        with sync_playwright() as p:
            browser = p.chromium.launch()
            try:
                page = browser.new_page(
                    viewport={"width": width, "height": height},
                    device_scale_factor=1,
                )
                page.set_content(html, wait_until="load")
                png = page.screenshot(
                    type="png",
                    omit_background=transparent,
                    clip={"x": 0, "y": 0, "width": width, "height": height},
                )
            finally:
                browser.close()
    except PlaywrightError as exc:
        raise RenderError(f"Chromium failed to rasterize SVG: {exc}") from exc

    logger.debug("Rasterized %dx%d (%d bytes)", width, height, len(png))
    return png


def _to_png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def render_png(
    doc: DesignDoc,
    *,
    public_root: Path | None = None,
    output_width: int | None = None,
    output_height: int | None = None,
) -> bytes:
    """Full-document PNG, optionally resampled to an output size."""
    png = rasterize_svg(build_svg(doc, public_root=public_root), doc.width, doc.height)
    width = normalize_dimension(output_width, doc.width)
    height = normalize_dimension(output_height, doc.height)
    if (width, height) == (doc.width, doc.height):
        return png
    with Image.open(io.BytesIO(png)) as img:
        return _to_png_bytes(img.resize((width, height), Image.LANCZOS))


def cover_fit(
    image: Image.Image,
    width: int,
    height: int,
    focal_point: FocalPoint | None = None,
) -> Image.Image:
    """Scale to fill ``width`` x ``height`` and crop the overflow.

    ``focal_point`` is a fractional (x, y) position in the source that the
    crop keeps as close to centered as possible.
    """
    return ImageOps.fit(
        image, (width, height), method=Image.LANCZOS, centering=_clamp_focal(focal_point),
    )


def _open_background(data: bytes) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageDecodeError("Background is not a decodable image") from exc
    return img


def render_composite_png(
    doc: DesignDoc,
    background: bytes,
    *,
    output_width: int | None = None,
    output_height: int | None = None,
    focal_point: FocalPoint | None = None,
) -> bytes:
    """Typography of ``doc`` composited over an externally produced background.

    The document's own background color and image layers are left out; the
    background raster is cover-fitted to the output size.

    Raises:
        ImageDecodeError: ``background`` is not a decodable image.
        RenderError: rasterization failed.
    """
    width = normalize_dimension(output_width, doc.width)
    height = normalize_dimension(output_height, doc.height)

    with _open_background(background) as img:
        base = cover_fit(img.convert("RGBA"), width, height, focal_point)

    overlay_svg = build_svg(doc, include_background=False, include_images=False)
    overlay_png = rasterize_svg(overlay_svg, doc.width, doc.height, transparent=True)
    with Image.open(io.BytesIO(overlay_png)) as overlay:
        overlay = overlay.convert("RGBA")
        if overlay.size != (width, height):
            overlay = overlay.resize((width, height), Image.LANCZOS)
        result = Image.alpha_composite(base, overlay)

    logger.info("Composited %dx%d typography over background", width, height)
    return _to_png_bytes(result)


def render_composite_png_from_path(
    doc: DesignDoc,
    background_path: Path,
    **kwargs,
) -> bytes:
    """``render_composite_png`` reading the background from disk.

    Raises:
        AssetError: the background file does not exist or cannot be read.
    """
    background_path = Path(background_path)
    if not background_path.is_file():
        raise AssetError(f"Background image not found: {background_path}")
    try:
        data = background_path.read_bytes()
    except OSError as exc:
        raise AssetError(f"Could not read background image {background_path}") from exc
    return render_composite_png(doc, data, **kwargs)
