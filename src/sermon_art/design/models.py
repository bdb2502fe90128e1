"""Data models for layered design documents.

A ``DesignDoc`` is a fixed-size canvas with a background color and an
ordered list of layers (first = bottom).  Layers are frozen dataclasses;
generators build them once and never mutate them.  ``to_dict()`` gives the
camelCase JSON shape stored alongside generations, and
``normalize_design_doc()`` turns such JSON back into a document.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from sermon_art.design.colors import normalize_hex

logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND = "#0F172A"
PAINT_NONE = "none"

MAX_ROTATION = 360.0
MAX_LETTER_SPACING = 24.0


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class ShapeLayer:
    """Filled, optionally stroked rectangle."""
    x: float
    y: float
    w: float
    h: float
    fill: str
    stroke: str
    stroke_width: float = 0
    rotation: float = 0

    kind = "shape"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.kind,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "shape": "rect",
            "fill": self.fill,
            "stroke": self.stroke,
            "strokeWidth": self.stroke_width,
        }
        if self.rotation:
            data["rotation"] = self.rotation
        return data


@dataclass(frozen=True)
class TextLayer:
    """Box of pre-wrapped text; lines are separated by ``\\n``."""
    x: float
    y: float
    w: float
    h: float
    text: str
    font_size: float
    font_family: str
    font_weight: int
    color: str
    align: TextAlign = TextAlign.LEFT
    rotation: float = 0
    letter_spacing: float | None = None

    kind = "text"

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.kind,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "text": self.text,
            "fontSize": self.font_size,
            "fontFamily": self.font_family,
            "fontWeight": self.font_weight,
            "color": self.color,
            "align": TextAlign(self.align).value,
        }
        if self.rotation:
            data["rotation"] = self.rotation
        if self.letter_spacing is not None:
            data["letterSpacing"] = self.letter_spacing
        return data


@dataclass(frozen=True)
class ImageLayer:
    """Image placed by reference (public path, data URI, or http(s) URL)."""
    x: float
    y: float
    w: float
    h: float
    src: str
    rotation: float = 0

    kind = "image"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.kind,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "src": self.src,
        }
        if self.rotation:
            data["rotation"] = self.rotation
        return data


Layer = Union[ShapeLayer, TextLayer, ImageLayer]


@dataclass(frozen=True)
class DesignDoc:
    width: int
    height: int
    background: str
    layers: tuple[Layer, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "background": {"color": self.background},
            "layers": [layer.to_dict() for layer in self.layers],
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def text_layers(self) -> list[TextLayer]:
        return [layer for layer in self.layers if isinstance(layer, TextLayer)]

    def image_layers(self) -> list[ImageLayer]:
        return [layer for layer in self.layers if isinstance(layer, ImageLayer)]

    def shape_layers(self) -> list[ShapeLayer]:
        return [layer for layer in self.layers if isinstance(layer, ShapeLayer)]


# ── Normalization of stored documents ────────────────────────────────

def _is_number(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _non_negative(value: object, fallback: float) -> float:
    if not _is_number(value):
        return fallback
    return 0 if value < 0 else value


def _finite(value: object, fallback: float) -> float:
    return value if _is_number(value) else fallback


def _canvas_size(value: object, fallback: int) -> int:
    if not _is_number(value) or value < 1:
        return fallback
    return int(value)


def _clamped(value: object, limit: float, fallback: float | None) -> float | None:
    if not _is_number(value):
        return fallback
    return max(-limit, min(limit, value))


def _color(value: object, fallback: str) -> str:
    return normalize_hex(value) or fallback


def _paint(value: object, fallback: str) -> str:
    if isinstance(value, str) and value.strip().lower() == PAINT_NONE:
        return PAINT_NONE
    return _color(value, fallback)


def _align(value: object) -> TextAlign:
    if value in ("left", "center", "right"):
        return TextAlign(value)
    return TextAlign.LEFT


def _text_layer(data: dict) -> TextLayer | None:
    text = data.get("text")
    if not isinstance(text, str) or not text.strip():
        return None
    family = data.get("fontFamily")
    return TextLayer(
        x=_finite(data.get("x"), 0),
        y=_finite(data.get("y"), 0),
        w=_non_negative(data.get("w"), 400),
        h=_non_negative(data.get("h"), 120),
        rotation=_clamped(data.get("rotation"), MAX_ROTATION, 0),
        text=text,
        font_size=_non_negative(data.get("fontSize"), 42),
        font_family=family.strip() if isinstance(family, str) and family.strip() else "Arial",
        font_weight=int(_non_negative(data.get("fontWeight"), 700)),
        letter_spacing=_clamped(data.get("letterSpacing"), MAX_LETTER_SPACING, None),
        color=_color(data.get("color"), "#FFFFFF"),
        align=_align(data.get("align")),
    )


def _image_layer(data: dict) -> ImageLayer | None:
    src = data.get("src")
    if not isinstance(src, str) or not src.strip():
        return None
    return ImageLayer(
        x=_finite(data.get("x"), 0),
        y=_finite(data.get("y"), 0),
        w=_non_negative(data.get("w"), 320),
        h=_non_negative(data.get("h"), 320),
        rotation=_clamped(data.get("rotation"), MAX_ROTATION, 0),
        src=src.strip(),
    )


def _shape_layer(data: dict) -> ShapeLayer:
    return ShapeLayer(
        x=_finite(data.get("x"), 0),
        y=_finite(data.get("y"), 0),
        w=_non_negative(data.get("w"), 320),
        h=_non_negative(data.get("h"), 200),
        rotation=_clamped(data.get("rotation"), MAX_ROTATION, 0),
        fill=_paint(data.get("fill"), "#FFFFFF"),
        stroke=_paint(data.get("stroke"), "#000000"),
        stroke_width=_non_negative(data.get("strokeWidth"), 0),
    )


_LAYER_PARSERS = {
    "text": _text_layer,
    "image": _image_layer,
    "shape": _shape_layer,
}


def normalize_design_doc(data: object, *, allow_empty: bool = False) -> DesignDoc | None:
    """Rebuild a ``DesignDoc`` from stored JSON-like data.

    Out-of-range numbers are clamped, bad colors replaced with defaults, and
    layers that cannot be drawn (blank text, blank image source, unknown
    type) are dropped.  A canvas size below 1 falls back to 1920x1080.

    Returns ``None`` if ``data`` is not a mapping, or if no layer survives
    and ``allow_empty`` is false.
    """
    if not isinstance(data, dict):
        return None

    raw_layers = data.get("layers")
    layers: list[Layer] = []
    for raw in raw_layers if isinstance(raw_layers, list) else []:
        if not isinstance(raw, dict):
            continue
        kind = raw.get("type")
        parser = _LAYER_PARSERS.get(kind) if isinstance(kind, str) else None
        if parser is None:
            continue
        layer = parser(raw)
        if layer is not None:
            layers.append(layer)

    if not layers and not allow_empty:
        logger.debug("Stored design doc has no drawable layers")
        return None

    background = data.get("background")
    return DesignDoc(
        width=_canvas_size(data.get("width"), 1920),
        height=_canvas_size(data.get("height"), 1080),
        background=_color(
            background.get("color") if isinstance(background, dict) else None,
            DEFAULT_BACKGROUND,
        ),
        layers=tuple(layers),
    )


def read_stored_design_doc(data: object, option_label: str) -> DesignDoc:
    """Normalize stored data, or return a notice document when it is unusable."""
    doc = normalize_design_doc(data)
    if doc is not None:
        return doc

    logger.warning("Design doc for %s is missing or invalid; using notice doc", option_label)
    return DesignDoc(
        width=1920,
        height=1080,
        background=DEFAULT_BACKGROUND,
        layers=(
            TextLayer(
                x=120, y=160, w=1680, h=200,
                text=option_label,
                font_size=96, font_family="Arial", font_weight=700,
                color="#F8FAFC",
            ),
            TextLayer(
                x=120, y=420, w=1680, h=120,
                text="Design preview unavailable for this option.",
                font_size=40, font_family="Arial", font_weight=500,
                color="#CBD5E1",
            ),
        ),
    )
