"""Hex color utilities: normalization, blending, and WCAG contrast.

All colors leave this module as uppercase ``#RRGGBB``.  Invalid input never
raises; it resolves to a fixed dark slate so generators keep producing
well-formed documents.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Sequence

FALLBACK_PALETTE: tuple[str, ...] = (
    "#0F172A",
    "#1E293B",
    "#F8FAFC",
    "#0EA5E9",
    "#F97316",
    "#22C55E",
)

FALLBACK_RGB = (15, 23, 42)
FALLBACK_ACCENT = "#2563EB"

# Palette slots tried, in order, when looking for an accent color.
ACCENT_PREFERENCE = (3, 4, 5, 1)

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


# ── Normalization ────────────────────────────────────────────────────

def normalize_hex(value: object) -> str:
    """Return ``#RRGGBB`` for a 3- or 6-digit hex string, else ``""``."""
    if not isinstance(value, str):
        return ""
    value = value.strip()
    if not _HEX_RE.match(value):
        return ""
    if len(value) == 4:
        r, g, b = value[1], value[2], value[3]
        value = f"#{r}{r}{g}{g}{b}{b}"
    return value.upper()


def normalize_palette(values: Iterable[object] | None) -> list[str]:
    """Validate, expand, and de-duplicate a palette; fall back when empty."""
    result: list[str] = []
    for value in values or ():
        color = normalize_hex(value)
        if color and color not in result:
            result.append(color)
    return result if result else list(FALLBACK_PALETTE)


def palette_color(palette: Sequence[str], index: int, fallback: str) -> str:
    """Palette slot ``index`` or ``fallback`` when the palette is shorter."""
    if 0 <= index < len(palette) and palette[index]:
        return palette[index]
    return fallback


# ── Parsing and blending ─────────────────────────────────────────────

def parse_hex(value: str) -> tuple[int, int, int]:
    color = normalize_hex(value)
    if not color:
        return FALLBACK_RGB
    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)


def _clamp_byte(value: float) -> int:
    if not math.isfinite(value) or value < 0:
        return 0
    if value > 255:
        return 255
    return _round_half_up(value)


def to_hex(rgb: tuple[float, float, float]) -> str:
    return "#" + "".join(f"{_clamp_byte(c):02X}" for c in rgb)


def mix_hex(a: str, b: str, t: float) -> str:
    """Linear blend from ``a`` (t=0) to ``b`` (t=1); ``t`` is clamped."""
    t = max(0.0, min(1.0, t))
    ar, ag, ab = parse_hex(a)
    br, bg, bb = parse_hex(b)
    return to_hex((ar + (br - ar) * t, ag + (bg - ag) * t, ab + (bb - ab) * t))


def lighten_hex(color: str, amount: float) -> str:
    return mix_hex(color, "#FFFFFF", amount)


def darken_hex(color: str, amount: float) -> str:
    return mix_hex(color, "#000000", amount)


# ── Contrast ─────────────────────────────────────────────────────────

def _channel_to_linear(channel: int) -> float:
    c = channel / 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(color: str) -> float:
    """WCAG relative luminance in [0, 1]."""
    r, g, b = parse_hex(color)
    return (
        0.2126 * _channel_to_linear(r)
        + 0.7152 * _channel_to_linear(g)
        + 0.0722 * _channel_to_linear(b)
    )


def contrast_ratio(a: str, b: str) -> float:
    """WCAG contrast ratio between two colors, from 1.0 to 21.0."""
    la, lb = relative_luminance(a), relative_luminance(b)
    high, low = max(la, lb), min(la, lb)
    return (high + 0.05) / (low + 0.05)


def is_dark(color: str, threshold: float = 0.43) -> bool:
    return relative_luminance(color) < threshold


def choose_accent(
    palette: Sequence[str],
    background: str,
    minimum_contrast: float = 2.2,
) -> str:
    """Pick the palette accent that reads best against ``background``.

    Slots 3, 4, 5 and 1 are considered in that order, followed by a fixed
    blue; ties go to the earlier candidate.  If the winner still falls
    under ``minimum_contrast`` it is pushed toward white on dark backgrounds
    and toward black on light ones until it clears the floor.
    """
    candidates = [palette[i] for i in ACCENT_PREFERENCE if i < len(palette) and palette[i]]
    candidates.append(FALLBACK_ACCENT)

    best = max(candidates, key=lambda c: contrast_ratio(c, background))
    if contrast_ratio(best, background) >= minimum_contrast:
        return best

    dark_background = contrast_ratio("#FFFFFF", background) >= contrast_ratio("#000000", background)
    push = lighten_hex if dark_background else darken_hex
    adjusted = best
    for step in range(1, 14):
        adjusted = push(best, min(1.0, step * 0.08))
        if contrast_ratio(adjusted, background) >= minimum_contrast:
            break
    return adjusted
