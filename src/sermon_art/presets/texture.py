"""Textured print presets: stone, engraved, and riso with misregistered title."""

from __future__ import annotations

from typing import Literal

from sermon_art.design.colors import darken_hex, lighten_hex, mix_hex, palette_color
from sermon_art.design.metrics import CANVAS_HEIGHT, CANVAS_WIDTH
from sermon_art.design.models import Layer
from sermon_art.design.text_utils import fit_title_text
from sermon_art.presets.builders import (
    create_base_doc,
    create_logo_layers,
    create_noise_layers,
    create_title_layer,
    fitted_title_layer,
    rect,
    supporting_copy_layer,
)
from sermon_art.presets.context import GeneratorContext, GeneratorOutput

TextureVariant = Literal["stone", "engraved"]


def generate_texture_preset(context: GeneratorContext, variant: TextureVariant) -> GeneratorOutput:
    rng = context.rng
    stone = variant == "stone"
    base = "#E2E8F0" if stone else "#F7F4ED"
    ink = darken_hex(palette_color(context.palette, 0, "#334155"), 0.2)
    accent = palette_color(context.palette, 4, "#F59E0B")
    family = "Arial" if stone else "Georgia"

    layers: list[Layer] = [
        rect(90, 90, 1740, 900, mix_hex(base, ink, 0.15 if stone else 0.08),
             stroke=mix_hex(ink, "#FFFFFF", 0.34), stroke_width=2,
             rotation=rng.float(-2, 2)),
        *create_noise_layers(
            rng,
            660 if stone else 740,
            mix_hex(ink, base, 0.5),
            mix_hex(accent, base, 0.65),
            1,
            5 if stone else 3,
            area=(100, 100, 1720, 880),
        ),
        fitted_title_layer(context, 180, 240, 1320, 320, ink,
                           font_size=102, font_family=family),
        supporting_copy_layer(context, 186, 600, 1200, 190, mix_hex(ink, accent, 0.28),
                              font_size=32, font_family=family),
        *create_logo_layers(context, 1570, 84, 206, 90),
    ]

    notes = (
        "Stone-modern textured field with seeded scale and contrast."
        if stone
        else "Engraved illustration texture with etched grain pattern."
    )
    return GeneratorOutput(create_base_doc(base, layers), notes)


def generate_texture_stone_modern(context: GeneratorContext) -> GeneratorOutput:
    return generate_texture_preset(context, "stone")


def generate_illus_engraved(context: GeneratorContext) -> GeneratorOutput:
    return generate_texture_preset(context, "engraved")


def generate_texture_print_riso(context: GeneratorContext) -> GeneratorOutput:
    """Three offset ink sheets, riso grain, and a title printed twice out of register."""
    rng = context.rng
    paper = "#F5F1E8"
    ink_a = palette_color(context.palette, 0, "#1E3A8A")
    ink_b = palette_color(context.palette, 4, "#EA580C")
    ink_c = palette_color(context.palette, 5, "#16A34A")
    dark_ink = darken_hex(ink_a, 0.32)

    layers: list[Layer] = [
        rect(110, 120, 1680, 840, lighten_hex(ink_a, 0.4), stroke="#000000",
             rotation=rng.float(-3, 3)),
    ]
    x, y = 130 + rng.int(-14, 16), 110 + rng.int(-14, 14)
    layers.append(rect(x, y, 1680, 840, lighten_hex(ink_b, 0.36), stroke="#000000",
                       rotation=rng.float(-3, 3)))
    x, y = 118 + rng.int(-18, 18), 124 + rng.int(-18, 18)
    layers.append(rect(x, y, 1680, 840, lighten_hex(ink_c, 0.4), stroke="#000000",
                       rotation=rng.float(-3, 3)))

    layers += [
        *create_noise_layers(
            rng,
            580 + rng.int(0, 180),
            mix_hex(dark_ink, paper, 0.4),
            mix_hex(ink_b, paper, 0.56),
            1,
            4,
            area=(90, 90, CANVAS_WIDTH - 180, CANVAS_HEIGHT - 180),
        ),
        rect(260, 264, 1280, 520, paper,
             stroke=mix_hex(dark_ink, paper, 0.42), stroke_width=3),
    ]

    # Both passes share one fit so the misregistration is a pure offset.
    fit = fit_title_text(context.title, width=1180, max_height=260, min_size=62, max_size=104)
    dx, dy = rng.int(-8, 8), rng.int(-8, 8)
    layers += [
        create_title_layer(312 + dx, 336 + dy, 1180, 260, fit.text,
                           mix_hex(ink_b, dark_ink, 0.2),
                           font_size=fit.font_size, font_weight=800),
        create_title_layer(306, 330, 1180, 260, fit.text, dark_ink,
                           font_size=fit.font_size, font_weight=800),
        supporting_copy_layer(context, 314, 640, 1140, 130, darken_hex(ink_a, 0.2),
                              font_size=32, font_weight=600),
        *create_logo_layers(context, 1540, 148, 200, 92),
    ]

    return GeneratorOutput(
        create_base_doc(paper, layers),
        "Riso-style print composition with seeded misregistration and grain intensity variation.",
    )
