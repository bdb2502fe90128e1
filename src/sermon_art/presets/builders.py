"""Shared layer builders used by every preset.

Each builder is a pure function returning new layers; presets concatenate
the results bottom-to-top.  Builders that need randomness take the
generator's ``SeededRandom`` explicitly.
"""

from __future__ import annotations

import math
from typing import Literal

from sermon_art.design.colors import mix_hex
from sermon_art.design.metrics import CANVAS_HEIGHT, CANVAS_WIDTH
from sermon_art.design.models import (
    DesignDoc,
    ImageLayer,
    Layer,
    ShapeLayer,
    TextAlign,
    TextLayer,
)
from sermon_art.design.rng import SeededRandom
from sermon_art.design.text_utils import (
    chars_for_width,
    clamp_wrapped_copy,
    fit_title_text,
)
from sermon_art.presets.context import GeneratorContext

Direction = Literal["horizontal", "vertical"]

# Line advance used when stacking supporting copy.
COPY_LINE_HEIGHT = 1.25
COPY_CHAR_WIDTH = 0.56


def create_base_doc(
    background: str,
    layers: list[Layer],
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
) -> DesignDoc:
    return DesignDoc(width=width, height=height, background=background, layers=tuple(layers))


def rect(
    x: float,
    y: float,
    w: float,
    h: float,
    fill: str,
    stroke: str | None = None,
    stroke_width: float = 0,
    rotation: float = 0,
) -> ShapeLayer:
    """Rectangle whose stroke defaults to its fill."""
    return ShapeLayer(
        x=x, y=y, w=w, h=h,
        fill=fill,
        stroke=stroke if stroke is not None else fill,
        stroke_width=stroke_width,
        rotation=rotation,
    )


# ── Text ─────────────────────────────────────────────────────────────

def create_title_layer(
    x: float,
    y: float,
    w: float,
    h: float,
    text: str,
    color: str,
    *,
    font_family: str = "Arial",
    font_size: float = 94,
    font_weight: int = 700,
    align: TextAlign = TextAlign.LEFT,
    rotation: float = 0,
) -> TextLayer:
    return TextLayer(
        x=x, y=y, w=w, h=h,
        text=text,
        font_size=font_size,
        font_family=font_family,
        font_weight=font_weight,
        color=color,
        align=align,
        rotation=rotation,
    )


def create_subtitle_layer(
    x: float,
    y: float,
    w: float,
    h: float,
    text: str,
    color: str,
    *,
    font_family: str = "Arial",
    font_size: float = 34,
    font_weight: int = 500,
    align: TextAlign = TextAlign.LEFT,
) -> TextLayer:
    return TextLayer(
        x=x, y=y, w=w, h=h,
        text=text,
        font_size=font_size,
        font_family=font_family,
        font_weight=font_weight,
        color=color,
        align=align,
    )


def fitted_title_layer(
    context: GeneratorContext,
    x: float,
    y: float,
    w: float,
    h: float,
    color: str,
    *,
    font_size: int,
    min_ratio: float = 0.6,
    **kwargs,
) -> TextLayer:
    """Title layer whose size and breaks are fitted to the box.

    ``font_size`` is the largest size tried; the smallest is
    ``font_size * min_ratio``.
    """
    fit = fit_title_text(
        context.title,
        width=w,
        max_height=h,
        min_size=max(24, math.floor(font_size * min_ratio)),
        max_size=font_size,
    )
    return create_title_layer(x, y, w, h, fit.text, color, font_size=fit.font_size, **kwargs)


def subtitle_and_passage(context: GeneratorContext) -> str:
    return "\n".join(part for part in (context.subtitle, context.scripture) if part)


def build_supporting_copy(context: GeneratorContext) -> str:
    """Subtitle, passage, and description joined one per line."""
    parts = (context.subtitle, context.scripture, context.description)
    return "\n".join(part for part in parts if part and part.strip())


def wrap_copy_for_box(text: str, w: float, h: float, font_size: float) -> str:
    """Wrap each line of ``text`` to the box width and cap the total line count."""
    max_chars = chars_for_width(w, font_size, COPY_CHAR_WIDTH, 12)
    budget = max(1, math.floor(h / (font_size * COPY_LINE_HEIGHT)))
    lines: list[str] = []
    for part in text.split("\n"):
        remaining = budget - len(lines)
        if remaining <= 0:
            break
        wrapped = clamp_wrapped_copy(part, max_chars, remaining)
        if wrapped:
            lines.extend(wrapped.split("\n"))
    return "\n".join(lines)


def supporting_copy_layer(
    context: GeneratorContext,
    x: float,
    y: float,
    w: float,
    h: float,
    color: str,
    *,
    font_size: float = 34,
    text: str | None = None,
    **kwargs,
) -> TextLayer:
    """Subtitle layer for the subtitle and passage, wrapped to its box."""
    copy = subtitle_and_passage(context) if text is None else text
    return create_subtitle_layer(
        x, y, w, h, wrap_copy_for_box(copy, w, h, font_size), color,
        font_size=font_size, **kwargs,
    )


# ── Images ───────────────────────────────────────────────────────────

def create_logo_layers(
    context: GeneratorContext,
    x: float,
    y: float,
    w: float = 180,
    h: float = 90,
) -> list[Layer]:
    """Zero or one logo image layer."""
    if not context.logo_src:
        return []
    return [ImageLayer(x=x, y=y, w=w, h=h, src=context.logo_src)]


# ── Texture ──────────────────────────────────────────────────────────

def create_gradient_band_layers(
    start: str,
    end: str,
    band_count: int,
    direction: Direction,
    rotation: float = 0,
    width: float = CANVAS_WIDTH,
    height: float = CANVAS_HEIGHT,
) -> list[Layer]:
    """Stepped gradient: ``band_count`` flat bands blending ``start`` to ``end``."""
    layers: list[Layer] = []
    for index in range(band_count):
        t = 0 if band_count <= 1 else index / (band_count - 1)
        color = mix_hex(start, end, t)
        if direction == "horizontal":
            band = height / band_count
            layers.append(rect(0, band * index, width, band, color, rotation=rotation))
        else:
            band = width / band_count
            layers.append(rect(band * index, 0, band, height, color, rotation=rotation))
    return layers


def create_noise_layers(
    rng: SeededRandom,
    count: int,
    color_a: str,
    color_b: str,
    min_size: float,
    max_size: float,
    area: tuple[float, float, float, float] | None = None,
) -> list[Layer]:
    """Tiny rotated speckles scattered over ``area`` (x, y, w, h)."""
    ax, ay, aw, ah = area if area is not None else (0, 0, CANVAS_WIDTH, CANVAS_HEIGHT)
    layers: list[Layer] = []
    for _ in range(count):
        size = rng.float(min_size, max_size)
        color = color_a if rng.bool(0.5) else color_b
        x = rng.float(ax, ax + aw - size)
        y = rng.float(ay, ay + ah - size)
        layers.append(rect(x, y, size, size, color, rotation=rng.float(-12, 12)))
    return layers
