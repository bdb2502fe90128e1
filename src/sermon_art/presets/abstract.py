"""Abstract and geometric presets: gradient, mark, flow field, negative-space shapes."""

from __future__ import annotations

from typing import Literal

from sermon_art.design.colors import darken_hex, lighten_hex, mix_hex, palette_color
from sermon_art.design.metrics import CANVAS_HEIGHT, CANVAS_WIDTH
from sermon_art.design.models import Layer
from sermon_art.presets.builders import (
    create_base_doc,
    create_gradient_band_layers,
    create_logo_layers,
    fitted_title_layer,
    rect,
    supporting_copy_layer,
)
from sermon_art.presets.context import GeneratorContext, GeneratorOutput

AbstractVariant = Literal["gradient", "mark"]


def generate_abstract_preset(context: GeneratorContext, variant: AbstractVariant) -> GeneratorOutput:
    rng = context.rng
    base = darken_hex(palette_color(context.palette, 0, "#0F172A"), 0.1)
    accent_a = palette_color(context.palette, 3, "#38BDF8")
    accent_b = palette_color(context.palette, 5, "#22C55E")
    mark = variant == "mark"
    layers: list[Layer] = []

    if variant == "gradient":
        direction = "horizontal" if rng.bool(0.5) else "vertical"
        layers += create_gradient_band_layers(
            mix_hex(base, accent_a, 0.24),
            mix_hex(base, accent_b, 0.34),
            band_count=24,
            direction=direction,
            rotation=rng.float(-8, 8),
        )
    else:
        ring = mix_hex(accent_a, "#FFFFFF", 0.1)
        for index in range(5):
            layers.append(rect(
                220 + index * 130, 110 + index * 42, 440 + index * 110, 72, ring,
                rotation=30 + index * 7,
            ))
        layers.append(rect(
            210, 210, 420, 420,
            mix_hex(accent_b, base, 0.35),
            stroke=mix_hex(accent_a, "#FFFFFF", 0.2), stroke_width=4,
            rotation=rng.float(-8, 8),
        ))

    layers += [
        fitted_title_layer(
            context, 700 if mark else 170, 250, 1040 if mark else 1480, 300, "#FFFFFF",
            font_size=102 + rng.int(-8, 10),
        ),
        supporting_copy_layer(
            context, 706 if mark else 176, 620, 980 if mark else 1320, 180,
            mix_hex("#FFFFFF", accent_a, 0.22), font_size=32,
        ),
        *create_logo_layers(context, 1570, 78, 206, 90),
    ]

    notes = (
        "Abstract mark-led composition with geometric icon system."
        if mark
        else "Modern abstract gradient field with seeded angle and stop variation."
    )
    return GeneratorOutput(create_base_doc(base, layers), notes)


def generate_abstract_gradient_modern(context: GeneratorContext) -> GeneratorOutput:
    return generate_abstract_preset(context, "gradient")


def generate_mark_icon_abstract(context: GeneratorContext) -> GeneratorOutput:
    return generate_abstract_preset(context, "mark")


def generate_abstract_flow_field(context: GeneratorContext) -> GeneratorOutput:
    """Organic blobs under a field of tilted lines, with a text panel on the left."""
    rng = context.rng
    base = darken_hex(palette_color(context.palette, 0, "#0F172A"), 0.2)
    accent_a = palette_color(context.palette, 3, "#06B6D4")
    accent_b = palette_color(context.palette, 4, "#F97316")
    accent_c = palette_color(context.palette, 5, "#22C55E")
    layers: list[Layer] = []

    for _ in range(8 + rng.int(0, 4)):
        blob_w = rng.float(240, 560)
        blob_h = rng.float(140, 360)
        fill = rng.pick([
            mix_hex(accent_a, base, rng.float(0.45, 0.75)),
            mix_hex(accent_b, base, rng.float(0.4, 0.72)),
            mix_hex(accent_c, base, rng.float(0.4, 0.7)),
        ])
        x = rng.float(-120, CANVAS_WIDTH - 120)
        y = rng.float(-100, CANVAS_HEIGHT - 80)
        layers.append(rect(x, y, blob_w, blob_h, fill, rotation=rng.float(-34, 34)))

    line_count = 34 + rng.int(0, 14)
    tilt = rng.float(-20, 20)
    for index in range(line_count):
        y = (CANVAS_HEIGHT / line_count) * index + rng.float(-14, 14)
        color = lighten_hex(
            mix_hex(base, "#FFFFFF", rng.float(0.12, 0.25)), rng.float(0.02, 0.12))
        height = rng.float(2, 8)
        layers.append(rect(-60, y, CANVAS_WIDTH + 120, height, color,
                           rotation=tilt + rng.float(-9, 9)))

    panel = mix_hex(base, "#FFFFFF", 0.1)
    layers.append(rect(120, 130, 920, 820, panel,
                       stroke=lighten_hex(panel, 0.24), stroke_width=2,
                       rotation=rng.float(-3, 3)))

    title_y = 220 + rng.int(-18, 16)
    layers += [
        fitted_title_layer(context, 180, title_y, 760, 360, "#FFFFFF",
                           font_size=96 + rng.int(-6, 8)),
        supporting_copy_layer(context, 180, 640, 760, 220,
                              mix_hex("#FFFFFF", accent_a, 0.2)),
        *create_logo_layers(context, 1600, 84, 220, 110),
    ]

    return GeneratorOutput(
        create_base_doc(base, layers),
        "Flow-field abstract with layered blobs and directional line rhythm.",
    )


def generate_geo_shapes_negative(context: GeneratorContext) -> GeneratorOutput:
    """Oversized corner forms framing a light central card."""
    rng = context.rng
    background = "#F8FAFC"
    dark = darken_hex(palette_color(context.palette, 0, "#0F172A"), 0.2)
    accent = palette_color(context.palette, 4, "#F97316")
    support = palette_color(context.palette, 3, "#2563EB")

    cx = 520 + rng.int(-70, 70)
    cy = 210 + rng.int(-50, 50)
    cw = 940 + rng.int(-80, 120)
    ch = 670 + rng.int(-70, 80)

    layers: list[Layer] = [
        rect(-180, -180, 760, 640, dark, rotation=rng.float(-16, 12)),
        rect(CANVAS_WIDTH - 620, -170, 860, 540, mix_hex(dark, accent, 0.14),
             rotation=rng.float(-14, 16)),
        rect(-120, CANVAS_HEIGHT - 360, 820, 520, mix_hex(dark, support, 0.2),
             rotation=rng.float(-10, 16)),
        rect(CANVAS_WIDTH - 760, CANVAS_HEIGHT - 350, 960, 580, lighten_hex(dark, 0.08),
             rotation=rng.float(-12, 14)),
        rect(cx, cy, cw, ch, background,
             stroke=mix_hex(dark, "#FFFFFF", 0.32), stroke_width=4,
             rotation=rng.float(-2.5, 2.5)),
        rect(cx + 56, cy + ch - 150, 260, 26, accent, rotation=rng.float(-2.2, 2.2)),
    ]

    layers += [
        fitted_title_layer(context, cx + 52, cy + 66, cw - 120, 360, dark,
                           font_size=108 + rng.int(-10, 6), font_weight=800),
        supporting_copy_layer(context, cx + 52, cy + ch - 220, cw - 120, 180,
                              mix_hex(dark, support, 0.3), font_weight=600),
        *create_logo_layers(context, CANVAS_WIDTH - 300, 76, 200, 92),
    ]

    return GeneratorOutput(
        create_base_doc(background, layers),
        "Negative-space geometry composition with oversized edge forms and central breathing room.",
    )
