"""Tests for preset generation: determinism, seeding, and the preset registry."""

from __future__ import annotations

import pytest

from sermon_art.design.metrics import Shape, get_metrics
from sermon_art.design.models import ImageLayer, TextLayer, normalize_design_doc
from sermon_art.design.season import LiturgicalSeason
from sermon_art.design.text_utils import fit_title_text
from sermon_art.presets import (
    PRESET_GENERATORS,
    GenerationRequest,
    PresetKey,
    ProjectInput,
    create_context,
    generate_design_doc,
    generate_preset_output,
)
from sermon_art.presets.seasonal import resolve_season


def _project(**kwargs) -> ProjectInput:
    defaults = dict(
        series_title="Faith in the Wilderness",
        series_subtitle="Learning to trust God",
        scripture_passages="Psalm 23",
        palette=["#0F172A", "#F97316"],
    )
    defaults.update(kwargs)
    return ProjectInput(**defaults)


def _request(preset_key: str, option_index: int = 0, **project_kwargs) -> GenerationRequest:
    return GenerationRequest(
        project_id="proj-1",
        preset_key=preset_key,
        round=1,
        option_index=option_index,
        project=_project(**project_kwargs),
    )


ALL_KEYS = [key.value for key in PresetKey]


class TestRegistry:

    def test_every_key_registered(self):
        assert set(PRESET_GENERATORS) == set(PresetKey)


class TestEveryPreset:

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_deterministic(self, key):
        first = generate_preset_output(_request(key))
        second = generate_preset_output(_request(key))
        assert first.design_doc.to_json() == second.design_doc.to_json()
        assert first.notes == second.notes

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_options_differ(self, key):
        docs = {generate_preset_output(_request(key, i)).design_doc.to_json() for i in range(3)}
        assert len(docs) == 3

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_generation_id_changes_output(self, key):
        a = _request(key)
        b = _request(key)
        a.generation_id = "gen-a"
        b.generation_id = "gen-b"
        assert generate_design_doc(a).to_json() != generate_design_doc(b).to_json()

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_wide_document_is_drawable(self, key):
        output = generate_preset_output(_request(key))
        doc = output.design_doc
        assert (doc.width, doc.height) == (1920, 1080)
        assert doc.layers
        assert output.notes
        for layer in doc.text_layers():
            assert layer.text.strip()
            assert layer.font_size > 0

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_survives_normalization(self, key):
        doc = generate_preset_output(_request(key)).design_doc
        restored = normalize_design_doc(doc.to_dict())
        assert restored is not None
        assert len(restored.layers) == len(doc.layers)

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_title_is_printed(self, key):
        doc = generate_preset_output(_request(key)).design_doc
        joined = " ".join(layer.text.replace("\n", " ") for layer in doc.text_layers())
        assert "Wilderness" in joined.title() or "WILDERNESS" in joined

    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_logo_uses_normalized_path(self, key):
        doc = generate_preset_output(_request(key, logo_path="uploads/logo.png")).design_doc
        for layer in doc.image_layers():
            assert layer.src == "/uploads/logo.png"


class TestCleanMinimal:

    def test_end_to_end_wide(self):
        request = _request("type_clean_min_v1")
        doc = generate_design_doc(request, "wide")
        assert (doc.width, doc.height) == (1920, 1080)

        titles = [layer for layer in doc.text_layers() if layer.font_weight == 800]
        assert len(titles) == 1
        title = titles[0]
        metrics = get_metrics("wide")
        expected = fit_title_text(
            "Faith in the Wilderness",
            width=title.w,
            max_height=metrics.title_height,
            min_size=metrics.title_min,
            max_size=metrics.title_max,
        )
        assert title.text == expected.text
        assert title.font_size == expected.font_size
        assert 64 <= title.font_size <= 136

        copy = " ".join(layer.text for layer in doc.text_layers())
        assert "Learning to trust God" in copy.replace("\n", " ")
        assert "Psalm 23" in copy

    @pytest.mark.parametrize("shape,size", [
        ("square", (1080, 1080)),
        ("wide", (1920, 1080)),
        ("tall", (1080, 1920)),
    ])
    def test_document_per_shape(self, shape, size):
        output = generate_preset_output(_request("type_clean_min_v1"))
        assert set(output.design_doc_by_shape) == set(Shape)
        doc = output.doc_for_shape(shape)
        assert (doc.width, doc.height) == size

    def test_canonical_doc_is_wide(self):
        output = generate_preset_output(_request("type_clean_min_v1"))
        assert output.design_doc is output.design_doc_by_shape[Shape.WIDE]

    def test_logo_inside_canvas(self):
        output = generate_preset_output(_request("type_clean_min_v1", logo_path="logo.png"))
        for shape in Shape:
            doc = output.doc_for_shape(shape)
            logos = [layer for layer in doc.layers if isinstance(layer, ImageLayer)]
            assert len(logos) == 1
            logo = logos[0]
            assert logo.x + logo.w <= doc.width
            assert logo.y + logo.h <= doc.height

    def test_generation_id_pins_output_across_rounds(self):
        a = _request("type_clean_min_v1")
        b = _request("type_clean_min_v1")
        a.generation_id = b.generation_id = "gen-7"
        b.round = 3
        assert generate_design_doc(a).to_json() == generate_design_doc(b).to_json()


class TestSingleShapePresets:

    def test_every_shape_returns_wide_doc(self):
        output = generate_preset_output(_request("type_editorial_v1"))
        assert output.doc_for_shape("tall") is output.design_doc
        assert generate_design_doc(_request("type_editorial_v1"), "square").width == 1920


class TestUnknownPreset:

    def test_fallback_generator(self):
        output = generate_preset_output(_request("does_not_exist"))
        assert output.notes == "Fallback generator used for unknown preset key: does_not_exist"
        texts = [layer.text for layer in output.design_doc.layers if isinstance(layer, TextLayer)]
        assert texts[0] == "Faith in the Wilderness"

    def test_fallback_title_is_wrapped(self):
        long_title = " ".join(["wilderness"] * 60)
        doc = generate_preset_output(_request("does_not_exist", series_title=long_title)).design_doc
        title = doc.text_layers()[0]
        assert (title.x, title.w) == (180, 1400)
        assert 1 < len(title.lines) <= 3
        assert title.text.endswith("…")

    def test_fallback_is_deterministic(self):
        a = generate_preset_output(_request("does_not_exist")).design_doc
        b = generate_preset_output(_request("does_not_exist")).design_doc
        assert a.to_json() == b.to_json()


class TestSeasonal:

    def test_detected_from_copy(self):
        request = _request("seasonal_liturgical_v1", series_title="Advent: Waiting in Hope")
        season, detected = resolve_season(create_context(request, PresetKey.SEASONAL_LITURGICAL))
        assert season is LiturgicalSeason.ADVENT
        assert detected is True
        output = generate_preset_output(request)
        assert "Advent, from series copy" in output.notes

    def test_seeded_when_not_named(self):
        request = _request("seasonal_liturgical_v1")
        season, detected = resolve_season(create_context(request, PresetKey.SEASONAL_LITURGICAL))
        assert detected is False
        assert isinstance(season, LiturgicalSeason)
        assert "seeded" in generate_preset_output(request).notes


_ODD_TITLES = [
    "",
    "A",
    "Transfiguration" * 3 + "Wilderness",
    " ".join(["word"] * 60),
]
_ODD_PALETTES = [
    [],
    ["#zzz"],
    ["#FFFFFF", "#FFFFFF", "#FFFFFF"],
    ["#336699"] * 6,
]


def _assert_drawable(doc):
    assert doc.width > 0 and doc.height > 0
    for layer in doc.layers:
        assert layer.w >= 0
        assert layer.h >= 0
        if isinstance(layer, TextLayer):
            assert layer.font_size > 0


class TestDegenerateInput:

    @pytest.mark.parametrize("shape", [shape.value for shape in Shape])
    @pytest.mark.parametrize("title", _ODD_TITLES)
    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_odd_titles(self, key, title, shape):
        request = _request(key, option_index=-3, series_title=title)
        _assert_drawable(generate_design_doc(request, shape))

    @pytest.mark.parametrize("shape", [shape.value for shape in Shape])
    @pytest.mark.parametrize("palette", _ODD_PALETTES)
    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_odd_palettes(self, key, palette, shape):
        request = _request(key, palette=palette)
        _assert_drawable(generate_design_doc(request, shape))

    @pytest.mark.parametrize("shape", [shape.value for shape in Shape])
    @pytest.mark.parametrize("key", ALL_KEYS)
    def test_title_only(self, key, shape):
        request = GenerationRequest(
            project_id="proj-1",
            preset_key=key,
            round=1,
            option_index=0,
            project=ProjectInput(series_title="Faith in the Wilderness"),
        )
        doc = generate_design_doc(request, shape)
        _assert_drawable(doc)
        assert not doc.image_layers()
