"""Pure text utilities for laying copy into fixed boxes.

Provides word wrapping on a character budget, widow repair, title
font-size search, clamped supporting copy, and placeholder stripping for
display copy.  No rendering dependencies: the character budget stands in
for real font metrics (``width / (font_size * char_width)``).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

UNTITLED_SERIES = "Untitled Series"
ELLIPSIS = "…"

TITLE_CHAR_WIDTH = 0.57
TITLE_LINE_HEIGHT = 1.18
TITLE_MAX_LINES = 3
WIDOW_PENALTY = 16
# A widow fix may overflow the budget by this many characters.
WIDOW_SLACK = 4

_TRAILING_PUNCT_RE = re.compile(r"[.,;:!?-]+$")


@dataclass(frozen=True)
class TitleFit:
    """Result of fitting a title into a box."""
    text: str
    font_size: int
    line_height: int
    line_count: int


# ── Words and lines ──────────────────────────────────────────────────

def normalize_whitespace(text: str | None) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def to_words(text: str | None) -> list[str]:
    normalized = normalize_whitespace(text)
    return normalized.split(" ") if normalized else []


def wrap_words(words: list[str], max_chars: int) -> list[str]:
    """Greedy wrap; a line always takes at least one word, even if it overflows."""
    lines: list[str] = []
    current: list[str] = []
    for word in words:
        candidate = " ".join([*current, word])
        if not current or len(candidate) <= max_chars:
            current.append(word)
            continue
        lines.append(" ".join(current))
        current = [word]
    if current:
        lines.append(" ".join(current))
    return lines


def avoid_widow(lines: list[str], max_chars: int) -> list[str]:
    """Pull a word down onto a single-word last line.

    Only done when the previous line has at least three words and the new
    last line stays within ``max_chars + WIDOW_SLACK``.
    """
    if len(lines) < 2:
        return list(lines)

    result = list(lines)
    last_words = to_words(result[-1])
    previous_words = to_words(result[-2])
    if len(last_words) >= 2 or len(previous_words) < 3:
        return result

    moved = previous_words.pop()
    new_last = f"{moved} {result[-1]}".strip()
    if len(new_last) > max_chars + WIDOW_SLACK:
        return result

    result[-2] = " ".join(previous_words)
    result[-1] = new_last
    return result


def score_line_balance(lines: list[str]) -> float:
    """Sum of absolute deviations of line lengths from their mean."""
    if len(lines) <= 1:
        return 0.0
    lengths = [len(line) for line in lines]
    mean = sum(lengths) / len(lengths)
    return sum(abs(length - mean) for length in lengths)


def _truncate_last_line(lines: list[str], max_chars: int) -> list[str]:
    """Shorten the final line word by word and close it with an ellipsis."""
    last = lines[-1]
    while len(last) > max_chars - 1 and " " in last:
        last = last[: last.rindex(" ")]
    return [*lines[:-1], _TRAILING_PUNCT_RE.sub("", last) + ELLIPSIS]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


# ── Fitting ──────────────────────────────────────────────────────────

def fit_title_text(
    title: str,
    width: float,
    max_height: float,
    min_size: int,
    max_size: int,
    *,
    max_lines: int = TITLE_MAX_LINES,
    char_width: float = TITLE_CHAR_WIDTH,
    line_height_ratio: float = TITLE_LINE_HEIGHT,
) -> TitleFit:
    """Choose the font size and line breaks for a title.

    Sizes are tried from ``max_size`` down to ``min_size`` in steps of 2.
    Each candidate is wrapped on its character budget, widow-repaired, and
    rejected if it needs more than ``max_lines`` lines or more than
    ``max_height`` pixels.  Survivors are scored as
    ``5 * font_size - line_balance - widow_penalty`` and the best one wins,
    so large type is preferred but ragged or widowed breaks cost points.

    When nothing fits, the minimum size is used and the lines are cut to
    what fits, with an ellipsis on the last kept line.
    """
    words = to_words(title)
    if not words:
        return TitleFit(
            text=UNTITLED_SERIES,
            font_size=min_size,
            line_height=_round_half_up(min_size * line_height_ratio),
            line_count=1,
        )

    best: TitleFit | None = None
    best_score = -math.inf
    for font_size in range(max_size, min_size - 1, -2):
        max_chars = max(7, math.floor(width / (font_size * char_width)))
        lines = avoid_widow(wrap_words(words, max_chars), max_chars)
        if not lines or len(lines) > max_lines:
            continue

        line_height = _round_half_up(font_size * line_height_ratio)
        if len(lines) * line_height > max_height:
            continue

        penalty = WIDOW_PENALTY if len(to_words(lines[-1])) == 1 else 0
        score = font_size * 5 - score_line_balance(lines) - penalty
        if score > best_score:
            best_score = score
            best = TitleFit("\n".join(lines), font_size, line_height, len(lines))

    if best is not None:
        return best

    line_height = _round_half_up(min_size * line_height_ratio)
    max_chars = max(8, math.floor(width / (min_size * char_width)))
    lines = wrap_words(words, max_chars)
    keep = max(1, min(max_lines, math.floor(max_height / line_height)))
    if len(lines) > keep:
        lines = _truncate_last_line(lines[:keep], max_chars)
    return TitleFit("\n".join(lines), min_size, line_height, len(lines))


def clamp_wrapped_copy(text: str | None, max_chars: int, max_lines: int) -> str:
    """Wrap supporting copy and cut it to ``max_lines`` with an ellipsis."""
    words = to_words(text)
    if not words:
        return ""
    lines = avoid_widow(wrap_words(words, max_chars), max_chars)
    if len(lines) <= max_lines:
        return "\n".join(lines)
    return "\n".join(_truncate_last_line(lines[:max_lines], max_chars))


def chars_for_width(width: float, font_size: float, char_width: float, minimum: int) -> int:
    """Character budget for a box, never below ``minimum``."""
    return max(minimum, math.floor(width / (font_size * char_width)))


# ── Display copy ─────────────────────────────────────────────────────

_PLACEHOLDER_LINES = frozenset({
    "sermon series",
    "the book of",
    "book of",
    "series title",
    "series subtitle",
    "title here",
    "subtitle here",
})

_PLACEHOLDER_PATTERNS = [
    re.compile(r"\bsermon\s+series\b", re.IGNORECASE),
    re.compile(r"\bthe\s+book\s+of\b", re.IGNORECASE),
    re.compile(r"\bbook\s+of\b", re.IGNORECASE),
    re.compile(r"\bseries\s+title\b", re.IGNORECASE),
    re.compile(r"\bseries\s+subtitle\b", re.IGNORECASE),
    re.compile(r"\btitle\s+here\b", re.IGNORECASE),
    re.compile(r"\bsubtitle\s+here\b", re.IGNORECASE),
    re.compile(r"\bplaceholder\b", re.IGNORECASE),
]


@dataclass(frozen=True)
class DisplayContent:
    title: str
    subtitle: str


def comparable_line(text: str | None) -> str:
    """Lowercase, punctuation-free form used to compare two lines of copy."""
    clean = normalize_whitespace(text).lower()
    return re.sub(r"\s+", " ", re.sub(r"[^a-z0-9\s]", " ", clean)).strip()


def strip_placeholders(text: str | None) -> str:
    clean = normalize_whitespace(text)
    for pattern in _PLACEHOLDER_PATTERNS:
        clean = pattern.sub(" ", clean)
    return normalize_whitespace(clean)


def _is_placeholder(text: str) -> bool:
    return comparable_line(text) in _PLACEHOLDER_LINES


def _is_redundant(title: str, subtitle: str) -> bool:
    t, s = comparable_line(title), comparable_line(subtitle)
    if not t or not s:
        return True
    return t == s or s in t or t in s


def build_display_content(title: str | None, subtitle: str | None) -> DisplayContent:
    """Title and optional subtitle safe to print on artwork.

    Template placeholder phrases are removed; an empty title becomes
    "Untitled Series" and a subtitle that repeats the title is dropped.
    """
    title_candidate = strip_placeholders(title)
    subtitle_candidate = strip_placeholders(subtitle)
    display_title = (
        title_candidate
        if title_candidate and not _is_placeholder(title_candidate)
        else UNTITLED_SERIES
    )
    display_subtitle = (
        subtitle_candidate
        if subtitle_candidate
        and not _is_placeholder(subtitle_candidate)
        and not _is_redundant(display_title, subtitle_candidate)
        else ""
    )
    return DisplayContent(display_title, display_subtitle)
