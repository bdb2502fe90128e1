"""Liturgical season preset.

The season is read from the series copy when it names one ("Advent",
"Lenten", "Easter").  Otherwise the seed picks one, so undated series still
get a stable seasonal color per option.
"""

from __future__ import annotations

import logging

from sermon_art.design.colors import mix_hex
from sermon_art.design.models import Layer
from sermon_art.design.season import LiturgicalSeason, detect_season
from sermon_art.presets.builders import (
    create_base_doc,
    create_gradient_band_layers,
    create_logo_layers,
    fitted_title_layer,
    rect,
    supporting_copy_layer,
)
from sermon_art.presets.context import GeneratorContext, GeneratorOutput

logger = logging.getLogger(__name__)


def resolve_season(context: GeneratorContext) -> tuple[LiturgicalSeason, bool]:
    """Return the season and whether it was detected from the copy."""
    season = detect_season(context.title, context.subtitle, context.scripture, context.description)
    if season is not None:
        return season, True
    return context.rng.pick(list(LiturgicalSeason)), False


def generate_seasonal_liturgical(context: GeneratorContext) -> GeneratorOutput:
    rng = context.rng
    season, detected = resolve_season(context)
    logger.debug("Seasonal preset using %s (detected=%s)", season.label, detected)
    color = season.color
    base = mix_hex("#0F172A", color, 0.2)

    layers: list[Layer] = [
        *create_gradient_band_layers(
            mix_hex(base, color, 0.25),
            mix_hex(base, "#FFFFFF", 0.08),
            band_count=20,
            direction="vertical",
            rotation=rng.float(-4, 4),
        ),
        rect(200, 120, 1520, 840, mix_hex(base, "#000000", 0.2),
             stroke=mix_hex(color, "#FFFFFF", 0.3), stroke_width=2),
        rect(270, 214, 180, 8, mix_hex(color, "#FFFFFF", 0.45)),
        fitted_title_layer(context, 270, 260, 1380, 300, "#FFFFFF",
                           font_size=102, font_family="Georgia"),
        supporting_copy_layer(context, 276, 620, 1320, 200, mix_hex("#FFFFFF", color, 0.35),
                              font_size=32, font_family="Georgia"),
        *create_logo_layers(context, 1568, 82, 206, 90),
    ]

    source = "from series copy" if detected else "seeded"
    return GeneratorOutput(
        create_base_doc(base, layers),
        f"Season-aware liturgical palette ({season.label}, {source}) with seeded seasonal tone.",
    )
