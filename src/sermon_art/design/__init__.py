"""Design primitives: document model, seeded randomness, color, type fitting."""

from sermon_art.design.metrics import Shape, ShapeMetrics, get_metrics, parse_shape
from sermon_art.design.models import (
    DesignDoc,
    ImageLayer,
    Layer,
    ShapeLayer,
    TextAlign,
    TextLayer,
    normalize_design_doc,
    read_stored_design_doc,
)
from sermon_art.design.rng import SeededRandom, derive_preset_seed, hash_to_seed

__all__ = [
    "DesignDoc",
    "ImageLayer",
    "Layer",
    "SeededRandom",
    "Shape",
    "ShapeLayer",
    "ShapeMetrics",
    "TextAlign",
    "TextLayer",
    "derive_preset_seed",
    "get_metrics",
    "hash_to_seed",
    "normalize_design_doc",
    "parse_shape",
    "read_stored_design_doc",
]
