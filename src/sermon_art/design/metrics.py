"""Per-shape layout metrics shared by the multi-shape presets.

Each output aspect ratio (square, wide, tall) has a fixed canvas, margin
system, column grid, title box, type scale, and logo box.  Generators read
this table instead of hard-coding per-shape numbers, and apply their own
seeded jitter on top of the base values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sermon_art.exceptions import InvalidShapeError

# Canvas for single-shape presets.
CANVAS_WIDTH = 1920
CANVAS_HEIGHT = 1080


class Shape(str, Enum):
    SQUARE = "square"
    WIDE = "wide"
    TALL = "tall"


@dataclass(frozen=True)
class ShapeMetrics:
    """Layout constants for one aspect ratio."""
    width: int
    height: int
    margin_x: int
    margin_y: int
    margin_x_jitter: tuple[int, int]
    margin_y_jitter: tuple[int, int]
    columns: int
    gutter: int
    title_top: int
    title_top_jitter: tuple[int, int]
    title_height: int
    title_span: int
    side_start: int
    side_span: int
    show_side_description: bool
    title_min: int
    title_max: int
    subtitle_size: int
    passage_size: int
    description_size: int
    passage_max_lines: int
    description_max_lines: int
    meta_gap: int
    logo_width: int
    logo_height: int
    rule_width: int
    corner_size: int
    noise_count: int
    noise_max: float
    gradient_bands: int
    # XOR salt mixed into the preset seed so each shape has its own stream.
    seed_salt: int

    def column_width(self, margin_x: float) -> float:
        inner = self.width - margin_x * 2
        return (inner - self.gutter * (self.columns - 1)) / self.columns

    def column_x(self, margin_x: float, column: int) -> float:
        return margin_x + (self.column_width(margin_x) + self.gutter) * column

    def span_width(self, margin_x: float, span: int) -> float:
        return self.column_width(margin_x) * span + self.gutter * (span - 1)


SHAPE_METRICS: dict[Shape, ShapeMetrics] = {
    Shape.SQUARE: ShapeMetrics(
        width=1080, height=1080,
        margin_x=92, margin_y=92,
        margin_x_jitter=(-8, 8), margin_y_jitter=(-8, 8),
        columns=8, gutter=14,
        title_top=210, title_top_jitter=(-10, 14), title_height=360,
        title_span=8, side_start=0, side_span=8, show_side_description=False,
        title_min=54, title_max=112,
        subtitle_size=32, passage_size=27, description_size=22,
        passage_max_lines=2, description_max_lines=3,
        meta_gap=54,
        logo_width=176, logo_height=74,
        rule_width=290, corner_size=28,
        noise_count=42, noise_max=2.1, gradient_bands=18,
        seed_salt=173,
    ),
    Shape.WIDE: ShapeMetrics(
        width=1920, height=1080,
        margin_x=138, margin_y=86,
        margin_x_jitter=(-10, 10), margin_y_jitter=(-8, 8),
        columns=12, gutter=16,
        title_top=210, title_top_jitter=(-10, 14), title_height=340,
        title_span=7, side_start=8, side_span=4, show_side_description=True,
        title_min=64, title_max=136,
        subtitle_size=38, passage_size=32, description_size=24,
        passage_max_lines=2, description_max_lines=3,
        meta_gap=54,
        logo_width=176, logo_height=74,
        rule_width=560, corner_size=28,
        noise_count=52, noise_max=2.4, gradient_bands=18,
        seed_salt=947,
    ),
    Shape.TALL: ShapeMetrics(
        width=1080, height=1920,
        margin_x=92, margin_y=134,
        margin_x_jitter=(-6, 8), margin_y_jitter=(-12, 12),
        columns=8, gutter=12,
        title_top=300, title_top_jitter=(-16, 20), title_height=560,
        title_span=8, side_start=0, side_span=8, show_side_description=False,
        title_min=64, title_max=126,
        subtitle_size=36, passage_size=30, description_size=24,
        passage_max_lines=3, description_max_lines=4,
        meta_gap=72,
        logo_width=176, logo_height=74,
        rule_width=290, corner_size=34,
        noise_count=46, noise_max=2.1, gradient_bands=24,
        seed_salt=1489,
    ),
}


def parse_shape(value: str | Shape) -> Shape:
    """Map a caller-supplied shape name to ``Shape``.

    Raises:
        InvalidShapeError: The name is not square, wide, or tall.
    """
    if isinstance(value, Shape):
        return value
    try:
        return Shape(str(value).strip().lower())
    except ValueError:
        raise InvalidShapeError(
            f"Unknown shape {value!r}; expected one of: "
            + ", ".join(s.value for s in Shape)
        ) from None


def get_metrics(shape: str | Shape) -> ShapeMetrics:
    return SHAPE_METRICS[parse_shape(shape)]


def shape_dimensions(shape: str | Shape) -> tuple[int, int]:
    metrics = get_metrics(shape)
    return metrics.width, metrics.height
