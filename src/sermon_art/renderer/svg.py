"""SVG composer: DesignDoc -> self-contained SVG text.

Output is a pure function of the document and the files under the public
root, so re-exporting a stored document reproduces the same text.
"""

from __future__ import annotations

import logging
from html import escape
from pathlib import Path

from sermon_art.design.models import DesignDoc, ImageLayer, Layer, ShapeLayer, TextAlign, TextLayer
from sermon_art.renderer.assets import resolve_image_href

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
LINE_ADVANCE = 1.25

_ANCHORS = {
    TextAlign.LEFT: "start",
    TextAlign.CENTER: "middle",
    TextAlign.RIGHT: "end",
}


def fmt(value: float) -> str:
    """Compact number: integers bare, otherwise at most four decimals."""
    if float(value).is_integer():
        return str(int(value))
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _attr(value: str) -> str:
    return escape(value, quote=True)


def _rotate(rotation: float, x: float, y: float, w: float, h: float) -> str:
    if not rotation:
        return ""
    return f' transform="rotate({fmt(rotation)} {fmt(x + w / 2)} {fmt(y + h / 2)})"'


def _shape(layer: ShapeLayer) -> str:
    return (
        f'<rect x="{fmt(layer.x)}" y="{fmt(layer.y)}" width="{fmt(layer.w)}" '
        f'height="{fmt(layer.h)}" fill="{_attr(layer.fill)}" stroke="{_attr(layer.stroke)}" '
        f'stroke-width="{fmt(layer.stroke_width)}"'
        f"{_rotate(layer.rotation, layer.x, layer.y, layer.w, layer.h)} />"
    )


def _text(layer: TextLayer) -> list[str]:
    align = TextAlign(layer.align)
    if align is TextAlign.CENTER:
        x = layer.x + layer.w / 2
    elif align is TextAlign.RIGHT:
        x = layer.x + layer.w
    else:
        x = layer.x
    first_baseline = layer.y + layer.font_size
    advance = layer.font_size * LINE_ADVANCE

    spacing = ""
    if layer.letter_spacing is not None:
        spacing = f' letter-spacing="{fmt(layer.letter_spacing)}"'

    parts = [
        f'<text x="{fmt(x)}" y="{fmt(first_baseline)}" fill="{_attr(layer.color)}" '
        f'font-family="{_attr(layer.font_family or "Arial")}" font-size="{fmt(layer.font_size)}" '
        f'font-weight="{layer.font_weight}" text-anchor="{_ANCHORS[align]}"{spacing}'
        f"{_rotate(layer.rotation, layer.x, layer.y, layer.w, layer.h)}>"
    ]
    for index, line in enumerate(layer.text.replace("\r\n", "\n").split("\n")):
        line_y = first_baseline + index * advance
        parts.append(f'<tspan x="{fmt(x)}" y="{fmt(line_y)}">{escape(line, quote=False)}</tspan>')
    parts.append("</text>")
    return parts


def _image(layer: ImageLayer, public_root: Path | None) -> str:
    href = resolve_image_href(layer.src, public_root)
    return (
        f'<image x="{fmt(layer.x)}" y="{fmt(layer.y)}" width="{fmt(layer.w)}" '
        f'height="{fmt(layer.h)}" href="{_attr(href)}" preserveAspectRatio="xMidYMid meet"'
        f"{_rotate(layer.rotation, layer.x, layer.y, layer.w, layer.h)} />"
    )


def _layer(layer: Layer, public_root: Path | None) -> list[str]:
    if isinstance(layer, ShapeLayer):
        return [_shape(layer)]
    if isinstance(layer, TextLayer):
        return _text(layer)
    return [_image(layer, public_root)]


def build_svg(
    doc: DesignDoc,
    *,
    include_background: bool = True,
    include_images: bool = True,
    public_root: Path | None = None,
) -> str:
    """Compose the document as SVG.

    Args:
        doc: Document to draw; layers are painted in order.
        include_background: Emit the full-canvas background rect.
        include_images: Emit image layers.  Typography-only output (both
            flags False) is what gets composited over a photo.
        public_root: Root for resolving local image paths.  Defaults to
            ``./public``.
    """
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="{SVG_NS}" width="{doc.width}" height="{doc.height}" '
        f'viewBox="0 0 {doc.width} {doc.height}">',
    ]
    if include_background:
        parts.append(
            f'<rect x="0" y="0" width="{doc.width}" height="{doc.height}" '
            f'fill="{_attr(doc.background)}" />'
        )

    for index, layer in enumerate(doc.layers, start=1):
        if not include_images and isinstance(layer, ImageLayer):
            continue
        parts.append(f'<g id="layer-{index}">')
        parts.extend(_layer(layer, public_root))
        parts.append("</g>")

    parts.append("</svg>")
    logger.debug("Composed SVG %dx%d with %d layers", doc.width, doc.height, len(doc.layers))
    return "\n".join(parts)
