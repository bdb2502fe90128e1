"""Single-page PDF writer.

The PDF is written byte by byte: one page whose MediaBox is the canvas size
in points, drawing one full-bleed JPEG XObject.  Object layout:

    1  Catalog
    2  Pages
    3  Page
    4  Image XObject (DCTDecode stream of the JPEG bytes, unchanged)
    5  Content stream (``cm`` scale, ``Do`` draw)

followed by the cross-reference table and trailer.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from sermon_art.design.models import DesignDoc
from sermon_art.exceptions import ImageDecodeError
from sermon_art.renderer.raster import FocalPoint, render_composite_png, render_png

logger = logging.getLogger(__name__)

PDF_HEADER = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"
POINTS_PER_PIXEL = 72 / 96
DEFAULT_JPEG_QUALITY = 92

_COLOR_SPACES = {
    "RGB": "/DeviceRGB",
    "L": "/DeviceGray",
    "CMYK": "/DeviceCMYK",
}


def _num(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")


def px_to_pt(px: float) -> float:
    return px * POINTS_PER_PIXEL


def clamp_jpeg_quality(quality: int) -> int:
    return max(1, min(95, int(quality)))


def _jpeg_info(jpeg: bytes) -> tuple[int, int, str]:
    """(width, height, Pillow mode) of a JPEG stream."""
    try:
        with Image.open(io.BytesIO(jpeg)) as img:
            if img.format != "JPEG":
                raise ImageDecodeError(f"Expected JPEG data, got {img.format}")
            return img.width, img.height, img.mode
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageDecodeError("Image data is not a decodable JPEG") from exc


def build_pdf_from_jpeg(jpeg: bytes, width_px: float, height_px: float) -> bytes:
    """Wrap JPEG bytes in a one-page PDF sized ``width_px`` x ``height_px`` at 96 dpi.

    Raises:
        ImageDecodeError: ``jpeg`` is not a JPEG Pillow can read.
    """
    image_w, image_h, mode = _jpeg_info(jpeg)
    color_space = _COLOR_SPACES.get(mode)
    if color_space is None:
        raise ImageDecodeError(f"Unsupported JPEG color mode {mode}")

    page_w = _num(px_to_pt(width_px))
    page_h = _num(px_to_pt(height_px))

    image_dict = (
        f"<< /Type /XObject /Subtype /Image /Width {image_w} /Height {image_h} "
        f"/ColorSpace {color_space} /BitsPerComponent 8 /Filter /DCTDecode"
    )
    if mode == "CMYK":
        # Pillow writes Adobe-style inverted CMYK.
        image_dict += " /Decode [1 0 1 0 1 0 1 0]"
    image_dict += f" /Length {len(jpeg)} >>"

    content = f"q\n{page_w} 0 0 {page_h} 0 0 cm\n/Im0 Do\nQ".encode("ascii")

    bodies = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {page_w} {page_h}] "
            f"/Resources << /XObject << /Im0 4 0 R >> >> /Contents 5 0 R >>"
        ).encode("ascii"),
        image_dict.encode("ascii") + b"\nstream\n" + jpeg + b"\nendstream",
        f"<< /Length {len(content)} >>".encode("ascii") + b"\nstream\n" + content + b"\nendstream",
    ]

    out = bytearray(PDF_HEADER)
    offsets: list[int] = []
    for number, body in enumerate(bodies, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode("ascii") + body + b"\nendobj\n"

    xref_offset = len(out)
    size = len(bodies) + 1
    out += f"xref\n0 {size}\n".encode("ascii")
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode("ascii")
    out += (
        f"trailer\n<< /Size {size} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode("ascii")

    return bytes(out)


def png_to_jpeg(png: bytes, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    with Image.open(io.BytesIO(png)) as img:
        buf = io.BytesIO()
        img.convert("RGB").save(buf, format="JPEG", quality=clamp_jpeg_quality(quality))
    return buf.getvalue()


def render_pdf(
    doc: DesignDoc,
    *,
    public_root: Path | None = None,
    jpeg_quality: int = DEFAULT_JPEG_QUALITY,
    background: bytes | None = None,
    focal_point: FocalPoint | None = None,
) -> bytes:
    """Rasterize ``doc`` and wrap it as a full-bleed single-page PDF.

    With ``background``, the typography is composited over that raster
    first, as for the composite PNG.
    """
    if background is not None:
        png = render_composite_png(doc, background, focal_point=focal_point)
    else:
        png = render_png(doc, public_root=public_root)
    pdf = build_pdf_from_jpeg(png_to_jpeg(png, jpeg_quality), doc.width, doc.height)
    logger.info("Rendered PDF %dx%d (%d bytes)", doc.width, doc.height, len(pdf))
    return pdf
