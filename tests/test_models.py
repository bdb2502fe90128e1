"""Tests for the design document model and stored-document normalization."""

from __future__ import annotations

import json

import pytest

from sermon_art.design.models import (
    DEFAULT_BACKGROUND,
    DesignDoc,
    ImageLayer,
    ShapeLayer,
    TextAlign,
    TextLayer,
    normalize_design_doc,
    read_stored_design_doc,
)


def _sample_doc() -> DesignDoc:
    return DesignDoc(
        width=1920,
        height=1080,
        background="#0F172A",
        layers=(
            ShapeLayer(x=-40, y=10, w=200, h=20, fill="#F97316", stroke="none", rotation=12),
            TextLayer(x=100, y=200, w=800, h=300, text="Faith in the\nWilderness",
                      font_size=96, font_family="Arial", font_weight=800, color="#FFFFFF",
                      align=TextAlign.CENTER, letter_spacing=1.5),
            ImageLayer(x=1600, y=80, w=200, h=90, src="/uploads/logo.png"),
        ),
    )


class TestToDict:

    def test_shape_keys(self):
        data = _sample_doc().to_dict()
        assert data["background"] == {"color": "#0F172A"}
        shape = data["layers"][0]
        assert shape["type"] == "shape"
        assert shape["shape"] == "rect"
        assert shape["strokeWidth"] == 0
        assert shape["rotation"] == 12

    def test_text_keys(self):
        text = _sample_doc().to_dict()["layers"][1]
        assert text["fontSize"] == 96
        assert text["align"] == "center"
        assert text["letterSpacing"] == 1.5
        assert "rotation" not in text

    def test_json_is_stable(self):
        doc = _sample_doc()
        assert doc.to_json() == doc.to_json()
        assert json.loads(doc.to_json())["width"] == 1920

    def test_layer_filters(self):
        doc = _sample_doc()
        assert len(doc.text_layers()) == 1
        assert len(doc.image_layers()) == 1
        assert len(doc.shape_layers()) == 1

    def test_text_lines(self):
        assert _sample_doc().text_layers()[0].lines == ["Faith in the", "Wilderness"]


class TestNormalizeDesignDoc:

    def test_round_trip(self):
        doc = _sample_doc()
        assert normalize_design_doc(doc.to_dict()) == doc

    def test_round_trip_through_json(self):
        doc = _sample_doc()
        assert normalize_design_doc(json.loads(doc.to_json())) == doc

    @pytest.mark.parametrize("data", [None, "doc", [], 42])
    def test_non_mapping(self, data):
        assert normalize_design_doc(data) is None

    def test_no_layers(self):
        assert normalize_design_doc({"width": 100, "height": 100, "layers": []}) is None

    def test_no_layers_allowed(self):
        doc = normalize_design_doc({"width": 100, "height": 100, "layers": []}, allow_empty=True)
        assert doc == DesignDoc(width=100, height=100, background=DEFAULT_BACKGROUND)

    @pytest.mark.parametrize("size", [-400, 0, 0.5, "wide", None])
    def test_canvas_size_stays_positive(self, size):
        doc = normalize_design_doc({"width": size, "height": size,
                                    "layers": [{"type": "shape"}]})
        assert (doc.width, doc.height) == (1920, 1080)

    def test_drops_blank_text_and_image(self):
        data = {"layers": [
            {"type": "text", "text": "   "},
            {"type": "image", "src": ""},
            {"type": "circle"},
            {"type": ["shape"]},
            "junk",
            {"type": "shape"},
        ]}
        doc = normalize_design_doc(data)
        assert doc is not None
        assert len(doc.layers) == 1
        assert isinstance(doc.layers[0], ShapeLayer)

    def test_defaults(self):
        doc = normalize_design_doc({"layers": [{"type": "text", "text": "Hi"}]})
        assert (doc.width, doc.height, doc.background) == (1920, 1080, DEFAULT_BACKGROUND)
        text = doc.layers[0]
        assert text.font_family == "Arial"
        assert text.font_weight == 700
        assert text.font_size == 42
        assert text.color == "#FFFFFF"
        assert text.align is TextAlign.LEFT

    def test_colors_normalized(self):
        doc = normalize_design_doc({
            "background": {"color": "#abc"},
            "layers": [{"type": "shape", "fill": "#f97316", "stroke": "nope"}],
        })
        assert doc.background == "#AABBCC"
        assert doc.layers[0].fill == "#F97316"
        assert doc.layers[0].stroke == "#000000"

    def test_none_paint_kept(self):
        doc = normalize_design_doc({"layers": [{"type": "shape", "fill": "NONE"}]})
        assert doc.layers[0].fill == "none"

    def test_clamps(self):
        doc = normalize_design_doc({"layers": [
            {"type": "text", "text": "x", "w": -5, "rotation": 900, "letterSpacing": -100,
             "x": float("nan"), "align": "justify"},
        ]})
        text = doc.layers[0]
        assert text.w == 0
        assert text.rotation == 360
        assert text.letter_spacing == -24
        assert text.x == 0
        assert text.align is TextAlign.LEFT

    def test_negative_positions_kept(self):
        doc = normalize_design_doc({"layers": [{"type": "shape", "x": -180, "y": -170}]})
        assert (doc.layers[0].x, doc.layers[0].y) == (-180, -170)

    def test_booleans_are_not_numbers(self):
        doc = normalize_design_doc({"layers": [{"type": "shape", "w": True}]})
        assert doc.layers[0].w == 320


class TestReadStoredDesignDoc:

    def test_valid_passthrough(self):
        doc = _sample_doc()
        assert read_stored_design_doc(doc.to_dict(), "Option A") == doc

    def test_notice_doc(self):
        doc = read_stored_design_doc({"broken": True}, "Option B")
        texts = [layer.text for layer in doc.text_layers()]
        assert texts == ["Option B", "Design preview unavailable for this option."]
        assert (doc.width, doc.height) == (1920, 1080)
