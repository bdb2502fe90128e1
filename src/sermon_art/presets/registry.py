"""Preset registry: maps every ``PresetKey`` to its generator.

Unknown keys never raise.  They get a plain title card seeded as if the
request were for ``type_clean_min_v1``.
"""

from __future__ import annotations

import logging
from typing import Callable

from sermon_art.design.colors import palette_color
from sermon_art.design.metrics import Shape
from sermon_art.design.models import DesignDoc
from sermon_art.presets.abstract import (
    generate_abstract_flow_field,
    generate_abstract_gradient_modern,
    generate_geo_shapes_negative,
    generate_mark_icon_abstract,
)
from sermon_art.presets.builders import (
    create_base_doc,
    create_subtitle_layer,
    fitted_title_layer,
    rect,
    subtitle_and_passage,
)
from sermon_art.presets.clean_min import generate_type_clean_min
from sermon_art.presets.context import (
    GenerationRequest,
    GeneratorContext,
    GeneratorOutput,
    PresetKey,
    create_context,
    resolve_preset_key,
)
from sermon_art.presets.illustration import generate_illus_flat_min
from sermon_art.presets.photo import (
    generate_photo_color_block,
    generate_photo_landscape_min,
    generate_photo_mono_accent,
    generate_photo_veil_cinematic,
    generate_photo_warm_film,
)
from sermon_art.presets.seasonal import generate_seasonal_liturgical
from sermon_art.presets.texture import (
    generate_illus_engraved,
    generate_texture_print_riso,
    generate_texture_stone_modern,
)
from sermon_art.presets.typographic import (
    generate_type_brutalist,
    generate_type_bw_high_contrast,
    generate_type_editorial,
    generate_type_swiss_grid,
    generate_type_text_system,
)

logger = logging.getLogger(__name__)

PresetGenerator = Callable[[GeneratorContext], GeneratorOutput]

PRESET_GENERATORS: dict[PresetKey, PresetGenerator] = {
    PresetKey.MARK_ICON_ABSTRACT: generate_mark_icon_abstract,
    PresetKey.GEO_SHAPES_NEGATIVE: generate_geo_shapes_negative,
    PresetKey.ABSTRACT_FLOW_FIELD: generate_abstract_flow_field,
    PresetKey.ABSTRACT_GRADIENT_MODERN: generate_abstract_gradient_modern,
    PresetKey.TEXTURE_PRINT_RISO: generate_texture_print_riso,
    PresetKey.TEXTURE_STONE_MODERN: generate_texture_stone_modern,
    PresetKey.TYPE_BW_HIGH_CONTRAST: generate_type_bw_high_contrast,
    PresetKey.TYPE_BRUTALIST: generate_type_brutalist,
    PresetKey.TYPE_CLEAN_MIN: generate_type_clean_min,
    PresetKey.TYPE_EDITORIAL: generate_type_editorial,
    PresetKey.TYPE_SWISS_GRID: generate_type_swiss_grid,
    PresetKey.TYPE_TEXT_SYSTEM: generate_type_text_system,
    PresetKey.ILLUS_ENGRAVED: generate_illus_engraved,
    PresetKey.ILLUS_FLAT_MIN: generate_illus_flat_min,
    PresetKey.PHOTO_VEIL_CINEMATIC: generate_photo_veil_cinematic,
    PresetKey.PHOTO_LANDSCAPE_MIN: generate_photo_landscape_min,
    PresetKey.PHOTO_MONO_ACCENT: generate_photo_mono_accent,
    PresetKey.PHOTO_COLOR_BLOCK: generate_photo_color_block,
    PresetKey.PHOTO_WARM_FILM: generate_photo_warm_film,
    PresetKey.SEASONAL_LITURGICAL: generate_seasonal_liturgical,
}


def build_unknown_preset_output(request: GenerationRequest) -> GeneratorOutput:
    context = create_context(request, PresetKey.TYPE_CLEAN_MIN)
    layers = [
        rect(120, 120, 1680, 840, "#FFFFFF", stroke="#CBD5E1", stroke_width=2),
        fitted_title_layer(context, 180, 250, 1400, 260,
                           palette_color(context.palette, 0, "#0F172A"), font_size=102),
        create_subtitle_layer(186, 580, 1320, 220, subtitle_and_passage(context), "#334155"),
    ]
    return GeneratorOutput(
        create_base_doc("#F8FAFC", layers),
        f"Fallback generator used for unknown preset key: {request.preset_key}",
    )


def generate_preset_output(request: GenerationRequest) -> GeneratorOutput:
    """Run the generator for ``request.preset_key``."""
    key = resolve_preset_key(request.preset_key)
    if key is None:
        logger.warning("Unknown preset key %r; using fallback generator", request.preset_key)
        return build_unknown_preset_output(request)

    context = create_context(request, key)
    logger.debug("Generating %s option %d round %d (seed %d)",
                 key.value, request.option_index, request.round, context.seed)
    return PRESET_GENERATORS[key](context)


def generate_design_doc(request: GenerationRequest, shape: str | Shape | None = None) -> DesignDoc:
    """The document for ``shape``, or the canonical wide document."""
    output = generate_preset_output(request)
    if shape is None:
        return output.design_doc
    return output.doc_for_shape(shape)
