"""Tests for liturgical season detection from series copy."""

from __future__ import annotations

import pytest

from sermon_art.design.season import SEASON_STYLES, LiturgicalSeason, detect_season


class TestDetectSeason:
    """detect_season() maps series copy to the season it names."""

    @pytest.mark.parametrize("text,expected", [
        ("Advent: Waiting in Hope", LiturgicalSeason.ADVENT),
        ("A Christmas Series", LiturgicalSeason.CHRISTMAS),
        ("Songs of the Nativity", LiturgicalSeason.CHRISTMAS),
        ("Baptism of Our Lord", LiturgicalSeason.EPIPHANY),
        ("Transfiguration", LiturgicalSeason.EPIPHANY),
        ("Forty Days of Lent", LiturgicalSeason.LENT),
        ("Ash Wednesday Reflections", LiturgicalSeason.LENT),
        ("Resurrection Life", LiturgicalSeason.EASTER),
        ("Sixth Sunday of Easter", LiturgicalSeason.EASTER),
        ("Day of Pentecost", LiturgicalSeason.PENTECOST),
        ("Lectionary 32", LiturgicalSeason.ORDINARY),
        ("Ordinary Time Parables", LiturgicalSeason.ORDINARY),
    ])
    def test_known_copy(self, text, expected):
        assert detect_season(text) is expected

    def test_case_insensitive(self):
        assert detect_season("ADVENT HOPE") is LiturgicalSeason.ADVENT

    def test_whole_words_only(self):
        assert detect_season("Silent Night, Holy Night") is None
        assert detect_season("Eastern Roads") is None

    def test_searches_every_argument(self):
        assert detect_season("Journey to the Cross", None, "A Lenten series") is LiturgicalSeason.LENT

    def test_first_listed_season_wins(self):
        assert detect_season("Christmas in Advent") is LiturgicalSeason.ADVENT

    @pytest.mark.parametrize("texts", [(), (None,), ("",), ("Faith in the Wilderness",)])
    def test_nothing_detected(self, texts):
        assert detect_season(*texts) is None


class TestSeasonStyles:

    def test_every_season_styled(self):
        assert set(SEASON_STYLES) == set(LiturgicalSeason)

    def test_label_and_color(self):
        assert LiturgicalSeason.ORDINARY.label == "Ordinary Time"
        assert LiturgicalSeason.LENT.color.startswith("#")
        assert len(LiturgicalSeason.LENT.color) == 7
