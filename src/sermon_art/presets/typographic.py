"""Type-led presets: editorial, black and white, brutalist, text system, Swiss grid."""

from __future__ import annotations

from typing import Literal

from sermon_art.design.colors import darken_hex, lighten_hex, mix_hex, palette_color
from sermon_art.design.metrics import CANVAS_HEIGHT, CANVAS_WIDTH
from sermon_art.design.models import Layer
from sermon_art.presets.builders import (
    build_supporting_copy,
    create_base_doc,
    create_logo_layers,
    fitted_title_layer,
    rect,
    supporting_copy_layer,
)
from sermon_art.presets.context import GeneratorContext, GeneratorOutput

TypeVariant = Literal["editorial", "bw", "brutalist", "system"]

_TYPE_NOTES: dict[str, str] = {
    "editorial": "Editorial serif hierarchy with restrained accent rule.",
    "bw": "Black and white high-contrast typographic hierarchy.",
    "brutalist": "Brutalist type stack with heavy edge bars.",
    "system": "Text system rhythm template for repeatable weekly variants.",
}


def generate_type_preset(context: GeneratorContext, variant: TypeVariant) -> GeneratorOutput:
    rng = context.rng
    if variant == "bw":
        ink, paper, accent = "#000000", "#FFFFFF", "#111827"
    else:
        ink = darken_hex(palette_color(context.palette, 0, "#0F172A"), 0.15)
        paper = lighten_hex(palette_color(context.palette, 2, "#F8FAFC"), 0.1)
        accent = palette_color(context.palette, 3, "#2563EB")

    family = "Georgia" if variant == "editorial" else "Arial"
    layers: list[Layer] = []

    if variant == "brutalist":
        edge = darken_hex(accent, 0.16)
        layers += [
            rect(0, 0, CANVAS_WIDTH, 220, accent),
            rect(0, CANVAS_HEIGHT - 220, CANVAS_WIDTH, 220, edge),
        ]
    elif variant == "system":
        rule = mix_hex(ink, paper, 0.7)
        for index in range(10):
            layers.append(rect(120, 120 + index * 80 + rng.int(-4, 4), 1680, 1, rule))
    elif variant == "editorial":
        layers.append(rect(180, 130, 26, 820, accent))

    brutalist = variant == "brutalist"
    layers.append(fitted_title_layer(
        context, 230, 270 if brutalist else 240, 1460, 330, ink,
        font_size=112 + rng.int(-10, 10),
        font_family=family,
        font_weight=900 if brutalist else 700,
        rotation=rng.float(-1.5, 1.5) if brutalist else 0,
    ))

    copy_color = mix_hex(ink, accent, 0.25)
    if variant == "system":
        # The text system stacks the description under subtitle and passage.
        layers.append(supporting_copy_layer(
            context, 236, 640, 1320, 260, copy_color,
            font_size=30, font_family=family, text=build_supporting_copy(context),
        ))
    else:
        layers.append(supporting_copy_layer(
            context, 236, 640, 1320, 180, copy_color, font_family=family,
        ))
    layers += create_logo_layers(context, 1570, 80, 210, 92)

    return GeneratorOutput(create_base_doc(paper, layers), _TYPE_NOTES[variant])


def generate_type_editorial(context: GeneratorContext) -> GeneratorOutput:
    return generate_type_preset(context, "editorial")


def generate_type_bw_high_contrast(context: GeneratorContext) -> GeneratorOutput:
    return generate_type_preset(context, "bw")


def generate_type_brutalist(context: GeneratorContext) -> GeneratorOutput:
    return generate_type_preset(context, "brutalist")


def generate_type_text_system(context: GeneratorContext) -> GeneratorOutput:
    return generate_type_preset(context, "system")


def generate_type_swiss_grid(context: GeneratorContext) -> GeneratorOutput:
    """Twelve-column poster grid with seeded margins, row height, and title offset."""
    rng = context.rng
    base = "#F8FAFC"
    ink = darken_hex(palette_color(context.palette, 0, "#0F172A"), 0.22)
    accent = palette_color(context.palette, 3, "#2563EB")
    warm = palette_color(context.palette, 4, "#F59E0B")

    columns, gutter = 12, 18
    left = 86 + rng.int(-18, 18)
    top = 76 + rng.int(-14, 14)
    right, bottom = 90, 86
    usable_width = CANVAS_WIDTH - left - right
    column_width = (usable_width - gutter * (columns - 1)) / columns
    step = column_width + gutter
    row_height = 66 + rng.int(-4, 6)

    layers: list[Layer] = []
    column_rule = mix_hex("#CBD5E1", ink, 0.2)
    for col in range(columns + 1):
        x = left + col * step - gutter / 2
        layers.append(rect(x, top, 1, CANVAS_HEIGHT - top - bottom, column_rule))

    row_rule = mix_hex("#CBD5E1", ink, 0.22)
    for row in range(13):
        layers.append(rect(left, top + row * row_height, usable_width, 1, row_rule))

    offset = rng.int(0, 2)
    title_x = left + step * (1 + offset)
    title_w = step * (8 - offset) - gutter

    layers += [
        rect(left, top, step * 2 - gutter, row_height * 2.4, accent),
        rect(left + step * 9, top + row_height * 8, step * 3 - gutter, row_height * 3, warm),
        fitted_title_layer(
            context, title_x, top + row_height * 1.5, title_w, row_height * 5, ink,
            font_size=112 + rng.int(-10, 10), font_weight=800,
        ),
        supporting_copy_layer(
            context, title_x, top + row_height * 8, title_w, row_height * 2.8,
            mix_hex(ink, accent, 0.32), font_size=32, font_weight=600,
        ),
        *create_logo_layers(context, CANVAS_WIDTH - 280, CANVAS_HEIGHT - 146, 190, 84),
    ]

    return GeneratorOutput(
        create_base_doc(base, layers),
        "Swiss grid poster system with seeded grid offsets and typographic rhythm changes.",
    )
