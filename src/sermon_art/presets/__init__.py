"""Preset generators: seeded, pure functions from a generation request to a DesignDoc."""

from sermon_art.presets.context import (
    GenerationRequest,
    GeneratorContext,
    GeneratorOutput,
    PresetKey,
    ProjectInput,
    create_context,
    option_label,
)
from sermon_art.presets.fallback import build_fallback_design_doc, build_final_design_doc
from sermon_art.presets.registry import (
    PRESET_GENERATORS,
    generate_design_doc,
    generate_preset_output,
)

__all__ = [
    "GenerationRequest",
    "GeneratorContext",
    "GeneratorOutput",
    "PRESET_GENERATORS",
    "PresetKey",
    "ProjectInput",
    "build_fallback_design_doc",
    "build_final_design_doc",
    "create_context",
    "generate_design_doc",
    "generate_preset_output",
    "option_label",
]
