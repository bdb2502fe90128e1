"""Built-in documents used when a stored generation output is unusable.

``build_final_design_doc`` is the export path's entry point: it prefers the
document stored with the chosen generation and only builds a fallback when
that cannot be normalized.  Fallbacks print sanitized display copy (title and
optional subtitle) and never the scripture passage.
"""

from __future__ import annotations

import logging
import math

from sermon_art.design.colors import normalize_hex
from sermon_art.design.metrics import Shape, parse_shape, shape_dimensions
from sermon_art.design.models import DesignDoc, ImageLayer, Layer, TextLayer, normalize_design_doc
from sermon_art.design.text_utils import (
    TITLE_CHAR_WIDTH,
    TITLE_LINE_HEIGHT,
    build_display_content,
    chars_for_width,
    clamp_wrapped_copy,
    normalize_whitespace,
)
from sermon_art.presets.builders import rect
from sermon_art.presets.context import PresetKey, ProjectInput, normalize_logo_path

logger = logging.getLogger(__name__)

CLEAN_FALLBACK_BACKGROUND = "#F8F6F1"
DEFAULT_FALLBACK_BACKGROUND = "#FFFFFF"
CLEAN_TITLE_LEADING = 1.16
CLEAN_SUBTITLE_LEADING = 1.3

# Per-shape knobs for the clean minimal fallback.
_CLEAN_TITLE_CHARS = {Shape.WIDE: 16, Shape.SQUARE: 13, Shape.TALL: 14}
_CLEAN_SUBTITLE_CHARS = {Shape.WIDE: 32, Shape.SQUARE: 24, Shape.TALL: 24}
_CLEAN_TITLE_SIZE = {Shape.WIDE: 136, Shape.SQUARE: 108, Shape.TALL: 122}
_CLEAN_SUBTITLE_SIZE = {Shape.WIDE: 39, Shape.SQUARE: 33, Shape.TALL: 36}
_CLEAN_MARGIN_X = {Shape.WIDE: 138, Shape.SQUARE: 102, Shape.TALL: 146}
_CLEAN_RULE_WIDTH = {Shape.WIDE: 240, Shape.SQUARE: 170, Shape.TALL: 210}


def _palette_entry(palette: list[str], index: int, fallback: str) -> str:
    if index < len(palette):
        return normalize_hex(palette[index]) or fallback
    return fallback


def _line_count(text: str) -> int:
    return len(text.split("\n")) if text else 0


def build_clean_minimal_fallback(
    project: ProjectInput,
    option_index: int = 0,
    shape: str | Shape = Shape.WIDE,
) -> DesignDoc:
    """Shape-aware clean minimal document with ``option_index % 3`` accents."""
    shape = parse_shape(shape)
    width, height = shape_dimensions(shape)
    tall = shape is Shape.TALL
    content = build_display_content(project.series_title, project.series_subtitle)
    logo_src = normalize_logo_path(project.logo_path)

    margin_x = _CLEAN_MARGIN_X[shape]
    margin_y = 168 if tall else 112
    text_x = round(width * 0.14) if tall else margin_x
    text_w = round(width * {Shape.WIDE: 0.42, Shape.SQUARE: 0.5, Shape.TALL: 0.72}[shape])

    title_text = clamp_wrapped_copy(content.title, _CLEAN_TITLE_CHARS[shape], 3)
    subtitle_text = ""
    if content.subtitle:
        subtitle_text = clamp_wrapped_copy(
            normalize_whitespace(content.subtitle).upper(), _CLEAN_SUBTITLE_CHARS[shape], 2)

    title_size = _CLEAN_TITLE_SIZE[shape]
    subtitle_size = _CLEAN_SUBTITLE_SIZE[shape]
    variant = option_index % 3
    accent = _palette_entry(project.palette, 1, "#334155")
    soft_accent = _palette_entry(project.palette, 2, "#E2E8F0")
    title_lines = max(1, _line_count(title_text))
    subtitle_lines = _line_count(subtitle_text)

    layers: list[Layer] = [
        rect(text_x, margin_y - (52 if tall else 44), _CLEAN_RULE_WIDTH[shape], 2, "#CBD5E1"),
        TextLayer(
            x=text_x, y=margin_y, w=text_w,
            h=max(180, round(title_lines * title_size * CLEAN_TITLE_LEADING)),
            text=title_text,
            font_size=title_size, font_family="Arial", font_weight=800,
            color="#0F172A",
        ),
    ]

    if variant == 1:
        layers += [
            rect(round(width * (0.77 if shape is Shape.WIDE else 0.8)),
                 round(height * (0.34 if tall else 0.2)),
                 12 if tall else 14,
                 round(height * (0.42 if tall else 0.56)),
                 accent),
            rect(round(width * 0.74),
                 round(height * (0.74 if tall else 0.69)),
                 {Shape.WIDE: 240, Shape.SQUARE: 200, Shape.TALL: 160}[shape], 6,
                 accent),
        ]
    elif variant == 2:
        wide = shape is Shape.WIDE
        layers.append(rect(
            round(width * (0.63 if wide else 0.58)),
            round(height * (0.68 if tall else 0.56)),
            round(width * (0.3 if wide else 0.34)),
            round(height * (0.3 if wide else 0.26)),
            soft_accent, stroke=accent, stroke_width=1,
        ))

    current_y = margin_y + title_lines * title_size * CLEAN_TITLE_LEADING + (56 if tall else 42)
    if subtitle_text:
        layers.append(TextLayer(
            x=text_x, y=current_y, w=text_w,
            h=max(64, round(subtitle_lines * subtitle_size * CLEAN_SUBTITLE_LEADING)),
            text=subtitle_text,
            font_size=subtitle_size, font_family="Arial", font_weight=600,
            color="#334155",
        ))

    if logo_src:
        layers.append(ImageLayer(
            x=text_x, y=height - margin_y + (4 if tall else 8),
            w=170 if tall else 184, h=66 if tall else 70,
            src=logo_src,
        ))

    return DesignDoc(width=width, height=height, background=CLEAN_FALLBACK_BACKGROUND,
                     layers=tuple(layers))


def build_default_fallback(project: ProjectInput) -> DesignDoc:
    """Wide title card used for every preset other than clean minimal."""
    primary = _palette_entry(project.palette, 0, "#0F172A")
    accent = _palette_entry(project.palette, 1, "#1E293B")
    content = build_display_content(project.series_title, project.series_subtitle)
    logo_src = normalize_logo_path(project.logo_path)

    title = clamp_wrapped_copy(
        content.title,
        chars_for_width(980, 72, TITLE_CHAR_WIDTH, 8),
        max(1, math.floor(180 / (72 * TITLE_LINE_HEIGHT))),
    )
    layers: list[Layer] = [
        rect(140, 142, 260, 2, accent),
        TextLayer(x=140, y=160, w=980, h=180, text=title,
                  font_size=72, font_family="Arial", font_weight=700, color=primary),
    ]
    if content.subtitle:
        layers.append(TextLayer(x=140, y=340, w=980, h=90, text=content.subtitle,
                                font_size=36, font_family="Arial", font_weight=500,
                                color=accent))
    if logo_src:
        layers.append(ImageLayer(x=1570, y=130, w=220, h=120, src=logo_src))

    return DesignDoc(width=1920, height=1080, background=DEFAULT_FALLBACK_BACKGROUND,
                     layers=tuple(layers))


def build_fallback_design_doc(
    project: ProjectInput,
    preset_key: str,
    option_index: int = 0,
    shape: str | Shape = Shape.WIDE,
) -> DesignDoc:
    if preset_key == PresetKey.TYPE_CLEAN_MIN.value:
        return build_clean_minimal_fallback(project, option_index, shape)
    return build_default_fallback(project)


def build_final_design_doc(
    output: object,
    project: ProjectInput,
    preset_key: str,
    option_index: int = 0,
    shape: str | Shape = Shape.WIDE,
) -> DesignDoc:
    """Resolve the document to export from a stored generation output.

    ``output`` may be a generation output mapping with a ``designDoc`` entry
    or a bare document mapping.
    """
    if isinstance(output, dict):
        nested = normalize_design_doc(output.get("designDoc"))
        if nested is not None:
            return nested

    direct = normalize_design_doc(output)
    if direct is not None:
        return direct

    logger.info("Stored output for %s is unusable; building fallback document", preset_key)
    return build_fallback_design_doc(project, preset_key, option_index, shape)
