"""Photo-style presets.

The "photo" is a placeholder window: flat tone rectangles sized where an
externally supplied photograph will be composited.  Variants differ in the
overlay treatment that keeps the type readable over that photo.
"""

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

PhotoVariant = Literal["veil", "landscape", "mono", "warm"]

_PHOTO_NOTES: dict[str, str] = {
    "veil": "Cinematic photo composition with readable veil overlays.",
    "landscape": "Landscape-led photo minimal composition with restrained text field.",
    "mono": "Monochrome photo treatment with accent bar interaction.",
    "warm": "Warm film tone photo treatment with editorial overlays.",
}


def generate_photo_preset(context: GeneratorContext, variant: PhotoVariant) -> GeneratorOutput:
    rng = context.rng
    dark = darken_hex(palette_color(context.palette, 0, "#0F172A"), 0.16)
    light = lighten_hex(palette_color(context.palette, 2, "#CBD5E1"), 0.18)
    accent = palette_color(context.palette, 4, "#F59E0B")
    photo_x = 70 + rng.int(-20, 20)
    photo_y = 70 + rng.int(-18, 24)
    photo_w = CANVAS_WIDTH - 140
    photo_h = CANVAS_HEIGHT - 140

    layers: list[Layer] = []
    if variant == "warm":
        layers += create_gradient_band_layers(
            mix_hex(accent, "#F59E0B", 0.4),
            mix_hex(accent, "#7C2D12", 0.25),
            band_count=18,
            direction="horizontal",
            rotation=rng.float(-3, 3),
        )

    window = mix_hex(dark, light, 0.35) if variant == "mono" else mix_hex(light, accent, 0.2)
    layers += [
        rect(photo_x, photo_y, photo_w, photo_h, window,
             stroke=mix_hex(dark, light, 0.4), stroke_width=2),
        rect(photo_x + 44, photo_y + 42, photo_w - 88, photo_h - 84,
             mix_hex(dark, light, 0.3 if variant == "warm" else 0.24),
             stroke=mix_hex(dark, "#FFFFFF", 0.18), stroke_width=1),
    ]

    if variant == "veil":
        layers.append(rect(120, 180, 1640, 760, mix_hex(dark, "#000000", 0.3),
                           stroke=mix_hex(dark, "#FFFFFF", 0.1)))
    elif variant == "landscape":
        layers.append(rect(130, 640, 1660, 220, mix_hex(light, "#FFFFFF", 0.1),
                           stroke=mix_hex(dark, "#FFFFFF", 0.25), stroke_width=1))
    elif variant == "mono":
        layers.append(rect(1420, 190, 220, 620, accent))

    warm = variant == "warm"
    if variant == "landscape":
        copy_color = mix_hex(dark, accent, 0.2)
    elif warm:
        copy_color = "#FEF3C7"
    else:
        copy_color = mix_hex("#FFFFFF", accent, 0.22)
    layers += [
        fitted_title_layer(context, 160, 240, 1220, 280, "#FFFFFF",
                           font_size=92 if variant == "landscape" else 104, font_weight=800),
        supporting_copy_layer(context, 164, 660 if variant == "landscape" else 620, 1280, 180,
                              copy_color, font_size=32,
                              font_family="Georgia" if warm else "Arial"),
        *create_logo_layers(context, 1570, 78, 210, 90),
    ]

    background = "#2B1A12" if warm else dark
    return GeneratorOutput(create_base_doc(background, layers), _PHOTO_NOTES[variant])


def generate_photo_veil_cinematic(context: GeneratorContext) -> GeneratorOutput:
    return generate_photo_preset(context, "veil")


def generate_photo_landscape_min(context: GeneratorContext) -> GeneratorOutput:
    return generate_photo_preset(context, "landscape")


def generate_photo_mono_accent(context: GeneratorContext) -> GeneratorOutput:
    return generate_photo_preset(context, "mono")


def generate_photo_warm_film(context: GeneratorContext) -> GeneratorOutput:
    return generate_photo_preset(context, "warm")


def generate_photo_color_block(context: GeneratorContext) -> GeneratorOutput:
    """Photo window with a tilted color block carrying the title."""
    rng = context.rng
    background = "#111827"
    tone = mix_hex(palette_color(context.palette, 0, "#334155"), "#94A3B8", 0.35)
    block = palette_color(context.palette, 4, "#F97316")
    secondary = palette_color(context.palette, 3, "#38BDF8")
    px = 160 + rng.int(-30, 40)
    py = 90 + rng.int(-20, 24)
    pw = 1220 + rng.int(-90, 120)
    ph = 900 + rng.int(-70, 80)

    layers: list[Layer] = [
        rect(px, py, pw, ph, tone, stroke=lighten_hex(tone, 0.12), stroke_width=2),
        rect(px + 36, py + 32, pw - 72, ph - 64, mix_hex(tone, "#000000", 0.2),
             stroke=mix_hex(tone, "#FFFFFF", 0.12), stroke_width=1),
        rect(px + pw - 560, py + ph - 360, 620, 330, block,
             stroke=darken_hex(block, 0.18), stroke_width=2, rotation=rng.float(-6, 6)),
        rect(px + pw - 610, py + 120, 360, 64, secondary, rotation=rng.float(-4, 4)),
        fitted_title_layer(context, px + pw - 520, py + ph - 320, 520, 220, "#111827",
                           font_size=90 + rng.int(-6, 8), font_weight=800),
        supporting_copy_layer(context, px + pw - 520, py + ph - 100, 520, 80,
                              darken_hex(block, 0.6), font_size=30, font_weight=600),
        *create_logo_layers(context, CANVAS_WIDTH - 278, 74, 194, 88),
    ]

    return GeneratorOutput(
        create_base_doc(background, layers),
        "Photo-window composition with interacting color-block typography treatment.",
    )
