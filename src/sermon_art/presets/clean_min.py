"""Grid-disciplined clean minimal preset, built once per aspect ratio.

Every shape gets its own document from its own RNG stream
(``seed ^ metrics.seed_salt``), laid out on that shape's column grid from
the metrics table.  The option slot picks one of three text-block
treatments: a left rule, a centered rule, or an inset card.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sermon_art.design.colors import (
    choose_accent,
    darken_hex,
    is_dark,
    lighten_hex,
    mix_hex,
    palette_color,
)
from sermon_art.design.metrics import Shape, ShapeMetrics, SHAPE_METRICS
from sermon_art.design.models import DesignDoc, ImageLayer, Layer, TextAlign, TextLayer
from sermon_art.design.rng import SeededRandom
from sermon_art.design.text_utils import (
    chars_for_width,
    clamp_wrapped_copy,
    fit_title_text,
)
from sermon_art.presets.builders import create_noise_layers, rect
from sermon_art.presets.context import GeneratorContext, GeneratorOutput

logger = logging.getLogger(__name__)

VARIANT_LEFT_RULE = 0
VARIANT_CENTERED_RULE = 1
VARIANT_INSET_CARD = 2

TEXT_INSET = 36
CARD_PADDING = 44
SIDE_DESCRIPTION_LINES = 8
COPY_LINE_HEIGHT = 1.25


@dataclass(frozen=True)
class CleanPalette:
    background: str
    panel: str
    text_primary: str
    text_secondary: str
    text_muted: str
    accent: str
    grid: str


def build_palette_set(palette: tuple[str, ...] | list[str]) -> CleanPalette:
    """Derive the full clean-min palette from the dominant swatch."""
    base = palette_color(palette, 0, "#0F172A")
    dark = is_dark(base)
    background = darken_hex(base, 0.16) if dark else lighten_hex(base, 0.16)
    accent = choose_accent(palette, background)
    if dark:
        return CleanPalette(
            background=background,
            panel=mix_hex(background, "#FFFFFF", 0.04),
            text_primary="#F8FAFC",
            text_secondary=mix_hex("#FFFFFF", accent, 0.28),
            text_muted=mix_hex("#FFFFFF", background, 0.38),
            accent=accent,
            grid=mix_hex(background, "#FFFFFF", 0.15),
        )
    return CleanPalette(
        background=background,
        panel=mix_hex(background, "#FFFFFF", 0.58),
        text_primary="#0F172A",
        text_secondary=mix_hex("#0F172A", accent, 0.36),
        text_muted=mix_hex("#0F172A", background, 0.45),
        accent=accent,
        grid=mix_hex(background, "#0F172A", 0.12),
    )


@dataclass(frozen=True)
class _Frame:
    """Jittered margins for one shape document."""
    margin_x: int
    margin_y: int
    title_top: int


def _frame(metrics: ShapeMetrics, rng: SeededRandom) -> _Frame:
    return _Frame(
        margin_x=metrics.margin_x + rng.int(*metrics.margin_x_jitter),
        margin_y=metrics.margin_y + rng.int(*metrics.margin_y_jitter),
        title_top=metrics.title_top + rng.int(*metrics.title_top_jitter),
    )


# ── Background structure ─────────────────────────────────────────────

def _gradient_layers(metrics: ShapeMetrics, colors: CleanPalette, rng: SeededRandom) -> list[Layer]:
    """Horizontal bands that darken or lighten slightly toward both edges."""
    count = metrics.gradient_bands
    step = metrics.height / count
    if is_dark(colors.background, 0.4):
        target = lighten_hex(colors.accent, 0.4)
    else:
        target = darken_hex(colors.accent, 0.32)

    layers: list[Layer] = []
    for index in range(count):
        t = 0 if count <= 1 else index / (count - 1)
        edge = abs(0.5 - t) * 2
        blend = 0.012 + edge * 0.05 + rng.float(0, 0.01)
        layers.append(rect(0, index * step, metrics.width, step + 1,
                           mix_hex(colors.background, target, blend)))
    return layers


def _grid_layers(
    metrics: ShapeMetrics,
    frame: _Frame,
    colors: CleanPalette,
    rng: SeededRandom,
) -> list[Layer]:
    """Safe-area panel, column rules, and row rules with a little seeded jitter."""
    safe_w = metrics.span_width(frame.margin_x, metrics.columns)
    safe_h = metrics.height - frame.margin_y * 2
    layers: list[Layer] = [
        rect(frame.margin_x, frame.margin_y, safe_w, safe_h, colors.panel,
             stroke=colors.grid, stroke_width=1),
    ]

    for col in range(1, metrics.columns):
        # Wide grids only draw every other column rule.
        if metrics.columns >= 10 and col % 2:
            continue
        x = metrics.column_x(frame.margin_x, col) - metrics.gutter / 2
        layers.append(rect(x, frame.margin_y, 1, safe_h, colors.grid))

    rows = 8 if metrics.columns >= 10 else 6
    row_color = mix_hex(colors.grid, colors.panel, 0.26)
    for row in range(1, rows):
        y = frame.margin_y + (safe_h / rows) * row + rng.float(-1.2, 1.2)
        layers.append(rect(frame.margin_x, y, safe_w, 1, row_color))
    return layers


def _corner_marks(metrics: ShapeMetrics, frame: _Frame, colors: CleanPalette) -> list[Layer]:
    size = metrics.corner_size
    x = metrics.width - frame.margin_x - size - 2
    y = frame.margin_y + 20
    color = mix_hex(colors.accent, colors.text_primary, 0.34)
    return [rect(x, y, size, 2, color), rect(x + size - 2, y, 2, size, color)]


# ── Text block ───────────────────────────────────────────────────────

def _copy_layer(
    x: float, y: float, w: float, text: str, font_size: float,
    color: str, font_family: str, font_weight: int, align: TextAlign,
) -> TextLayer:
    lines = text.count("\n") + 1
    return TextLayer(
        x=x, y=y, w=w, h=lines * font_size * COPY_LINE_HEIGHT + 8,
        text=text,
        font_size=font_size,
        font_family=font_family,
        font_weight=font_weight,
        color=color,
        align=align,
    )


def _build_shape_doc(
    shape: Shape,
    context: GeneratorContext,
    colors: CleanPalette,
    variant: int,
) -> DesignDoc:
    metrics = SHAPE_METRICS[shape]
    rng = SeededRandom((context.seed ^ metrics.seed_salt) & 0xFFFFFFFF)
    frame = _frame(metrics, rng)

    safe_x = frame.margin_x
    safe_w = metrics.span_width(frame.margin_x, metrics.columns)
    safe_bottom = metrics.height - frame.margin_y
    centered = variant == VARIANT_CENTERED_RULE
    carded = variant == VARIANT_INSET_CARD

    inset = TEXT_INSET + (CARD_PADDING if carded else 0)
    text_x = safe_x + inset
    if centered:
        text_w = safe_w - inset * 2
    else:
        text_w = metrics.span_width(frame.margin_x, metrics.title_span) - inset
        if carded:
            text_w -= CARD_PADDING
    align = TextAlign.CENTER if centered else TextAlign.LEFT
    side_description = metrics.show_side_description and not centered

    fit = fit_title_text(
        context.title,
        width=text_w,
        max_height=metrics.title_height,
        min_size=metrics.title_min,
        max_size=metrics.title_max,
    )
    title_y = frame.title_top
    title = TextLayer(
        x=text_x, y=title_y, w=text_w, h=metrics.title_height,
        text=fit.text,
        font_size=fit.font_size,
        font_family="Arial",
        font_weight=800,
        color=colors.text_primary,
        align=align,
    )

    subtitle = clamp_wrapped_copy(
        context.subtitle, chars_for_width(text_w, metrics.subtitle_size, 0.56, 18), 2)
    passage = clamp_wrapped_copy(
        context.scripture, chars_for_width(text_w, metrics.passage_size, 0.56, 18),
        metrics.passage_max_lines)

    copy_layers: list[Layer] = []
    y = title_y + fit.line_count * fit.line_height + metrics.meta_gap
    if subtitle:
        layer = _copy_layer(text_x, y, text_w, subtitle, metrics.subtitle_size,
                            colors.text_secondary, "Arial", 600, align)
        copy_layers.append(layer)
        y += layer.h + 12
    if passage:
        layer = _copy_layer(text_x, y, text_w, passage, metrics.passage_size,
                            colors.text_secondary, "Georgia", 500, align)
        copy_layers.append(layer)
        y += layer.h + 18

    side_layers: list[Layer] = []
    if side_description:
        side_x = metrics.column_x(frame.margin_x, metrics.side_start)
        side_w = metrics.span_width(frame.margin_x, metrics.side_span)
        description = clamp_wrapped_copy(
            context.description,
            chars_for_width(side_w - 24, metrics.description_size, 0.54, 16),
            SIDE_DESCRIPTION_LINES,
        )
        if description:
            rule_color = mix_hex(colors.accent, colors.panel, 0.34)
            side_layers = [
                rect(side_x - 14, frame.margin_y + 126, 2,
                     metrics.height - frame.margin_y * 2 - 210, rule_color),
                _copy_layer(side_x + 18, frame.margin_y + 174, side_w - 24, description,
                            metrics.description_size, colors.text_muted, "Arial", 500,
                            TextAlign.LEFT),
            ]
    else:
        description = clamp_wrapped_copy(
            context.description,
            chars_for_width(text_w, metrics.description_size, 0.54, 16),
            metrics.description_max_lines,
        )
        lines = description.count("\n") + 1
        needed = lines * metrics.description_size * COPY_LINE_HEIGHT + 8
        if description and y + needed <= safe_bottom - metrics.logo_height - 24:
            layer = _copy_layer(text_x, y, text_w, description, metrics.description_size,
                                colors.text_muted, "Arial", 500, align)
            copy_layers.append(layer)
            y += layer.h
        elif description:
            logger.debug("Dropping description on %s: no room below the text block", shape.value)

    block_bottom = y
    accents: list[Layer] = []
    if variant == VARIANT_LEFT_RULE:
        accents = [
            rect(safe_x + 28, frame.margin_y + 46 + rng.float(-2, 2),
                 metrics.rule_width, 2, colors.accent),
            rect(safe_x + 12, title_y, 4, block_bottom - title_y, colors.accent),
        ]
    elif centered:
        rule_w = metrics.rule_width / 2
        accents = [
            rect((metrics.width - rule_w) / 2, title_y - 40 + rng.float(-2, 2),
                 rule_w, 3, colors.accent),
        ]
    else:
        card_x = safe_x + TEXT_INSET
        accents = [
            rect(card_x, title_y - CARD_PADDING + rng.float(-2, 2),
                 text_w + CARD_PADDING * 2,
                 block_bottom - title_y + CARD_PADDING * 2,
                 mix_hex(colors.panel, colors.accent, 0.06),
                 stroke=colors.accent, stroke_width=2),
        ]

    layers: list[Layer] = [
        *_gradient_layers(metrics, colors, rng),
        *_grid_layers(metrics, frame, colors, rng),
        *create_noise_layers(
            rng,
            metrics.noise_count,
            mix_hex(colors.background, colors.text_primary, 0.08),
            mix_hex(colors.background, colors.accent, 0.08),
            1,
            metrics.noise_max,
            area=(
                frame.margin_x + 8,
                frame.margin_y + 8,
                metrics.width - frame.margin_x * 2 - 16,
                metrics.height - frame.margin_y * 2 - 16,
            ),
        ),
        *accents,
        title,
        *copy_layers,
        *side_layers,
        *_corner_marks(metrics, frame, colors),
    ]
    if context.logo_src:
        layers.append(ImageLayer(
            x=metrics.width - frame.margin_x - metrics.logo_width - 10,
            y=metrics.height - frame.margin_y - metrics.logo_height - 10,
            w=metrics.logo_width,
            h=metrics.logo_height,
            src=context.logo_src,
        ))

    return DesignDoc(
        width=metrics.width,
        height=metrics.height,
        background=colors.background,
        layers=tuple(layers),
    )


def generate_type_clean_min(context: GeneratorContext) -> GeneratorOutput:
    colors = build_palette_set(context.palette)
    variant = context.option_index % 3
    by_shape = {shape: _build_shape_doc(shape, context, colors, variant) for shape in Shape}
    return GeneratorOutput(
        design_doc=by_shape[Shape.WIDE],
        design_doc_by_shape=by_shape,
        notes=(
            "Clean minimal template with seeded grid rhythm, safe-margin hierarchy, "
            "and shape-specific title fitting."
        ),
    )
