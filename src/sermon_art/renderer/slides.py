"""Slide deck writer: one-slide PPTX whose shapes mirror the document layers.

Geometry maps 96 px to the inch, type sizes px * 72/96 to points.  Layers
stay editable: rectangles become autoshapes and text stays live text.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.util import Emu, Pt

from sermon_art.design.models import (
    PAINT_NONE,
    DesignDoc,
    ImageLayer,
    ShapeLayer,
    TextAlign,
    TextLayer,
)
from sermon_art.exceptions import AssetError
from sermon_art.renderer.assets import (
    decode_data_uri,
    detect_mime_type,
    fetch_remote_image,
    is_data_uri,
    is_remote,
    resolve_public_path,
)

logger = logging.getLogger(__name__)

EMU_PER_PX = 9525       # 914400 EMU per inch / 96 px per inch
PT_PER_PX = 72 / 96
BLANK_LAYOUT = 6
BOLD_WEIGHT = 600

_ALIGNMENT = {
    TextAlign.LEFT: PP_ALIGN.LEFT,
    TextAlign.CENTER: PP_ALIGN.CENTER,
    TextAlign.RIGHT: PP_ALIGN.RIGHT,
}


def px_to_emu(px: float) -> Emu:
    return Emu(round(px * EMU_PER_PX))


def _rgb(color: str) -> RGBColor:
    return RGBColor.from_string(color.lstrip("#").upper())


def _add_shape(slide, layer: ShapeLayer) -> None:
    shape = slide.shapes.add_shape(
        MSO_SHAPE.RECTANGLE,
        px_to_emu(layer.x), px_to_emu(layer.y), px_to_emu(layer.w), px_to_emu(layer.h),
    )
    if layer.fill == PAINT_NONE:
        shape.fill.background()
    else:
        shape.fill.solid()
        shape.fill.fore_color.rgb = _rgb(layer.fill)

    if layer.stroke == PAINT_NONE or layer.stroke_width <= 0:
        shape.line.fill.background()
    else:
        shape.line.color.rgb = _rgb(layer.stroke)
        shape.line.width = Pt(layer.stroke_width * PT_PER_PX)

    shape.shadow.inherit = False
    if layer.rotation:
        shape.rotation = layer.rotation


def _add_text(slide, layer: TextLayer) -> None:
    box = slide.shapes.add_textbox(
        px_to_emu(layer.x), px_to_emu(layer.y), px_to_emu(layer.w), px_to_emu(layer.h),
    )
    frame = box.text_frame
    frame.word_wrap = True
    frame.vertical_anchor = MSO_ANCHOR.TOP
    frame.margin_left = frame.margin_right = 0
    frame.margin_top = frame.margin_bottom = 0

    alignment = _ALIGNMENT[TextAlign(layer.align)]
    for index, line in enumerate(layer.lines):
        paragraph = frame.paragraphs[0] if index == 0 else frame.add_paragraph()
        paragraph.alignment = alignment
        run = paragraph.add_run()
        run.text = line
        font = run.font
        font.name = layer.font_family
        font.size = Pt(layer.font_size * PT_PER_PX)
        font.bold = layer.font_weight >= BOLD_WEIGHT
        font.color.rgb = _rgb(layer.color)
        if layer.letter_spacing:
            # a:rPr@spc is in hundredths of a point.
            spacing = round(layer.letter_spacing * PT_PER_PX * 100)
            run._r.get_or_add_rPr().set("spc", str(spacing))

    if layer.rotation:
        box.rotation = layer.rotation


def _image_source(layer: ImageLayer, public_root: Path | None) -> str | io.BytesIO | None:
    """A path or stream python-pptx can embed, or None to skip the layer."""
    src = layer.src
    local = resolve_public_path(src, public_root)
    if local is not None:
        if detect_mime_type(local) == "image/svg+xml":
            logger.warning("Skipping SVG image %s; slide decks need a raster image", src)
            return None
        return str(local)

    if is_data_uri(src):
        try:
            mime, data = decode_data_uri(src)
        except AssetError as exc:
            logger.warning("Skipping image layer: %s", exc)
            return None
        if mime == "image/svg+xml":
            logger.warning("Skipping SVG data URI; slide decks need a raster image")
            return None
        return io.BytesIO(data)

    if is_remote(src):
        try:
            return io.BytesIO(fetch_remote_image(src))
        except AssetError as exc:
            logger.warning("Skipping image layer: %s", exc)
            return None

    logger.warning("Image %s not found under public root; skipping", src)
    return None


def _add_image(slide, layer: ImageLayer, public_root: Path | None) -> None:
    source = _image_source(layer, public_root)
    if source is None:
        return
    picture = slide.shapes.add_picture(
        source,
        px_to_emu(layer.x), px_to_emu(layer.y), px_to_emu(layer.w), px_to_emu(layer.h),
    )
    if layer.rotation:
        picture.rotation = layer.rotation


def build_pptx(doc: DesignDoc, *, public_root: Path | None = None) -> bytes:
    """Build a one-slide deck sized to the document.

    Images that cannot be embedded (SVG, missing or unfetchable) are
    skipped with a warning.
    """
    prs = Presentation()
    prs.slide_width = px_to_emu(doc.width)
    prs.slide_height = px_to_emu(doc.height)

    slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])
    fill = slide.background.fill
    fill.solid()
    fill.fore_color.rgb = _rgb(doc.background)

    for layer in doc.layers:
        if isinstance(layer, ShapeLayer):
            _add_shape(slide, layer)
        elif isinstance(layer, TextLayer):
            _add_text(slide, layer)
        else:
            _add_image(slide, layer, public_root)

    buf = io.BytesIO()
    prs.save(buf)
    data = buf.getvalue()
    logger.info("Built slide deck %dx%d with %d layers (%d bytes)",
                doc.width, doc.height, len(doc.layers), len(data))
    return data
