"""Flat illustration preset: a hill-and-sun scene from plain rectangles."""

from __future__ import annotations

from sermon_art.design.colors import lighten_hex, mix_hex, palette_color
from sermon_art.design.metrics import CANVAS_WIDTH
from sermon_art.design.models import Layer
from sermon_art.presets.builders import (
    create_base_doc,
    create_logo_layers,
    fitted_title_layer,
    rect,
    supporting_copy_layer,
)
from sermon_art.presets.context import GeneratorContext, GeneratorOutput


def generate_illus_flat_min(context: GeneratorContext) -> GeneratorOutput:
    rng = context.rng
    sky = lighten_hex(palette_color(context.palette, 2, "#E2E8F0"), 0.2)
    hill_a = palette_color(context.palette, 5, "#22C55E")
    hill_b = palette_color(context.palette, 3, "#0EA5E9")
    ground = mix_hex(hill_a, "#0F172A", 0.4)
    sun = palette_color(context.palette, 4, "#F59E0B")
    ink = "#0F172A"

    horizon = 620 + rng.int(-50, 60)

    layers: list[Layer] = [
        rect(-200, horizon - 80, 1160, 640, hill_a, rotation=rng.float(-8, 6)),
        rect(640, horizon - 110, 1500, 700, hill_b, rotation=rng.float(-7, 7)),
        rect(-80, horizon + 120, CANVAS_WIDTH + 200, 520, ground),
        rect(1430 + rng.int(-90, 90), 132 + rng.int(-40, 50), 210, 210, sun,
             rotation=rng.float(0, 45)),
        # Two standing slabs read as a doorway on the horizon.
        rect(900, 460, 230, 460, mix_hex(ground, "#000000", 0.15),
             rotation=rng.float(-5, 5)),
        rect(1030, 340, 160, 620, mix_hex(ground, "#000000", 0.24),
             rotation=rng.float(-5, 5)),
        fitted_title_layer(context, 150, 150, 980, 250, ink,
                           font_size=112 + rng.int(-10, 8), font_weight=800),
        supporting_copy_layer(context, 154, 410, 800, 170, mix_hex(ink, hill_b, 0.34),
                              font_weight=600),
        *create_logo_layers(context, CANVAS_WIDTH - 280, 72, 190, 88),
    ]

    return GeneratorOutput(
        create_base_doc(sky, layers),
        "Flat minimal illustration scene built from editable geometric layers.",
    )
