"""Liturgical season detection and seasonal colors.

Detects the church season a sermon series belongs to from its copy and
supplies the liturgical color the seasonal preset builds its palette on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class LiturgicalSeason(Enum):
    ADVENT = "advent"
    CHRISTMAS = "christmas"
    EPIPHANY = "epiphany"
    LENT = "lent"
    EASTER = "easter"
    PENTECOST = "pentecost"       # Day of Pentecost
    ORDINARY = "ordinary"         # Time after Pentecost

    @property
    def label(self) -> str:
        return SEASON_STYLES[self].label

    @property
    def color(self) -> str:
        return SEASON_STYLES[self].color


@dataclass(frozen=True)
class SeasonStyle:
    label: str
    color: str


SEASON_STYLES: dict[LiturgicalSeason, SeasonStyle] = {
    LiturgicalSeason.ADVENT: SeasonStyle("Advent", "#1D4ED8"),
    LiturgicalSeason.CHRISTMAS: SeasonStyle("Christmas", "#B45309"),
    LiturgicalSeason.EPIPHANY: SeasonStyle("Epiphany", "#15803D"),
    LiturgicalSeason.LENT: SeasonStyle("Lent", "#6B21A8"),
    LiturgicalSeason.EASTER: SeasonStyle("Easter", "#CA8A04"),
    LiturgicalSeason.PENTECOST: SeasonStyle("Pentecost", "#B91C1C"),
    LiturgicalSeason.ORDINARY: SeasonStyle("Ordinary Time", "#14532D"),
}

# Checked in order; the first match wins.  Whole words only, so "silent"
# does not read as Lent.
_SEASON_KEYWORDS: list[tuple[LiturgicalSeason, re.Pattern[str]]] = [
    (LiturgicalSeason.ADVENT, re.compile(r"\badvent\b")),
    (LiturgicalSeason.CHRISTMAS, re.compile(r"\b(christmas|nativity|christmastide)\b")),
    (LiturgicalSeason.EPIPHANY, re.compile(
        r"\b(epiphany|baptism of our lord|transfiguration|magi)\b")),
    (LiturgicalSeason.LENT, re.compile(
        r"\b(lent|lenten|ash wednesday|holy week|palm sunday|good friday|maundy thursday)\b")),
    (LiturgicalSeason.EASTER, re.compile(r"\b(easter|eastertide|resurrection|ascension)\b")),
    (LiturgicalSeason.PENTECOST, re.compile(r"\bpentecost\b")),
    (LiturgicalSeason.ORDINARY, re.compile(r"\b(ordinary time|lectionary \d+|trinity)\b")),
]


def detect_season(*texts: str | None) -> LiturgicalSeason | None:
    """Detect the liturgical season named anywhere in the given copy.

    Examples:
        "Advent: Waiting in Hope" -> ADVENT
        "Journey to the Cross", "A Lenten series" -> LENT
        "Lectionary 32" -> ORDINARY
        "Faith in the Wilderness" -> None
    """
    haystack = " ".join(t for t in texts if t).lower()
    if not haystack.strip():
        return None
    for season, pattern in _SEASON_KEYWORDS:
        if pattern.search(haystack):
            return season
    return None
