"""Generation requests and the per-request context handed to generators."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum

from sermon_art.design.colors import normalize_palette
from sermon_art.design.metrics import Shape, parse_shape
from sermon_art.design.models import DesignDoc
from sermon_art.design.rng import SeededRandom, derive_preset_seed
from sermon_art.design.text_utils import UNTITLED_SERIES, normalize_whitespace


class PresetKey(str, Enum):
    """Closed set of style presets."""
    MARK_ICON_ABSTRACT = "mark_icon_abstract_v1"
    GEO_SHAPES_NEGATIVE = "geo_shapes_negative_v1"
    ABSTRACT_FLOW_FIELD = "abstract_flow_field_v1"
    ABSTRACT_GRADIENT_MODERN = "abstract_gradient_modern_v1"
    TEXTURE_PRINT_RISO = "texture_print_riso_v1"
    TEXTURE_STONE_MODERN = "texture_stone_modern_v1"
    TYPE_BW_HIGH_CONTRAST = "type_bw_high_contrast_v1"
    TYPE_BRUTALIST = "type_brutalist_v1"
    TYPE_CLEAN_MIN = "type_clean_min_v1"
    TYPE_EDITORIAL = "type_editorial_v1"
    TYPE_SWISS_GRID = "type_swiss_grid_v1"
    TYPE_TEXT_SYSTEM = "type_text_system_v1"
    ILLUS_ENGRAVED = "illus_engraved_v1"
    ILLUS_FLAT_MIN = "illus_flat_min_v1"
    PHOTO_VEIL_CINEMATIC = "photo_veil_cinematic_v1"
    PHOTO_LANDSCAPE_MIN = "photo_landscape_min_v1"
    PHOTO_MONO_ACCENT = "photo_mono_accent_v1"
    PHOTO_COLOR_BLOCK = "photo_color_block_v1"
    PHOTO_WARM_FILM = "photo_warm_film_v1"
    SEASONAL_LITURGICAL = "seasonal_liturgical_v1"


def resolve_preset_key(value: str | PresetKey) -> PresetKey | None:
    """Map a stored key string to ``PresetKey``; ``None`` when unknown."""
    if isinstance(value, PresetKey):
        return value
    try:
        return PresetKey(value)
    except ValueError:
        return None


@dataclass
class ProjectInput:
    """Series copy and brand inputs for one project."""
    series_title: str
    series_subtitle: str | None = None
    scripture_passages: str | None = None     # e.g. "Psalm 23; John 10:1-18"
    series_description: str | None = None
    logo_path: str | None = None              # public-relative, e.g. "uploads/logo.png"
    palette: list[str] = field(default_factory=list)


@dataclass
class GenerationRequest:
    project_id: str
    preset_key: str
    round: int
    option_index: int
    project: ProjectInput
    generation_id: str | None = None


@dataclass
class GeneratorContext:
    """Everything a preset generator reads.

    ``rng`` is a live stream: the order in which a generator draws from it
    is part of that generator's output.
    """
    seed: int
    rng: SeededRandom
    palette: tuple[str, ...]
    project_id: str
    generation_id: str
    preset_key: PresetKey
    round: int
    option_index: int
    option_label: str
    title: str
    subtitle: str
    scripture: str
    description: str
    logo_src: str | None


def option_label(option_index: int) -> str:
    """Label such as "Option A"; numbered past "Option Z"."""
    if 0 <= option_index < len(string.ascii_uppercase):
        return f"Option {string.ascii_uppercase[option_index]}"
    return f"Option {option_index + 1}"


def normalize_logo_path(path: str | None) -> str | None:
    if not path or not path.strip():
        return None
    path = path.strip()
    if path.startswith(("data:", "http://", "https://", "/")):
        return path
    return f"/{path}"


def create_context(request: GenerationRequest, preset_key: PresetKey) -> GeneratorContext:
    """Build the generator context, seeding the RNG for ``preset_key``."""
    seed = derive_preset_seed(
        request.project_id,
        preset_key.value,
        request.round,
        request.option_index,
        request.generation_id,
    )
    project = request.project
    label = option_label(request.option_index)
    return GeneratorContext(
        seed=seed,
        rng=SeededRandom(seed),
        palette=tuple(normalize_palette(project.palette)),
        project_id=request.project_id,
        generation_id=request.generation_id or "",
        preset_key=preset_key,
        round=request.round,
        option_index=request.option_index,
        option_label=label,
        title=normalize_whitespace(project.series_title) or UNTITLED_SERIES,
        subtitle=(project.series_subtitle or "").strip() or f"{label} | Round {request.round}",
        scripture=(project.scripture_passages or "").strip(),
        description=(project.series_description or "").strip(),
        logo_src=normalize_logo_path(project.logo_path),
    )


@dataclass(frozen=True)
class GeneratorOutput:
    """What a preset returns.

    ``design_doc`` is the canonical wide document.  Multi-shape presets also
    fill ``design_doc_by_shape`` with one document per aspect ratio.
    """
    design_doc: DesignDoc
    notes: str
    design_doc_by_shape: dict[Shape, DesignDoc] | None = None

    def doc_for_shape(self, shape: str | Shape) -> DesignDoc:
        shape = parse_shape(shape)
        if self.design_doc_by_shape and shape in self.design_doc_by_shape:
            return self.design_doc_by_shape[shape]
        return self.design_doc

    def to_dict(self) -> dict:
        data: dict = {"designDoc": self.design_doc.to_dict(), "notes": self.notes}
        if self.design_doc_by_shape:
            data["designDocByShape"] = {
                shape.value: doc.to_dict() for shape, doc in self.design_doc_by_shape.items()
            }
        return data
