"""Tests for the SVG composer."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest
from PIL import Image

from sermon_art.design.models import DesignDoc, ImageLayer, ShapeLayer, TextAlign, TextLayer
from sermon_art.presets import GenerationRequest, ProjectInput, generate_design_doc
from sermon_art.renderer.svg import build_svg, fmt

NS = {"svg": "http://www.w3.org/2000/svg"}


def _text(text="Faith in the\nWilderness", **kwargs) -> TextLayer:
    defaults = dict(x=100, y=200, w=800, h=300, text=text, font_size=80,
                    font_family="Arial", font_weight=800, color="#FFFFFF")
    defaults.update(kwargs)
    return TextLayer(**defaults)


def _doc(*layers) -> DesignDoc:
    return DesignDoc(width=1920, height=1080, background="#0F172A", layers=tuple(layers))


def _parse(svg: str) -> ET.Element:
    return ET.fromstring(svg.encode("utf-8"))


class TestFmt:

    @pytest.mark.parametrize("value,expected", [
        (12, "12"),
        (12.0, "12"),
        (0.5, "0.5"),
        (1 / 3, "0.3333"),
        (-0.0, "0"),
        (-2.25, "-2.25"),
    ])
    def test_values(self, value, expected):
        assert fmt(value) == expected


class TestBuildSvg:

    def test_root_and_background(self):
        root = _parse(build_svg(_doc(_text())))
        assert root.get("width") == "1920"
        assert root.get("viewBox") == "0 0 1920 1080"
        background = root.find("svg:rect", NS)
        assert background.get("fill") == "#0F172A"

    def test_prolog(self):
        assert build_svg(_doc(_text())).startswith('<?xml version="1.0" encoding="UTF-8"?>')

    def test_layers_in_order(self):
        doc = _doc(ShapeLayer(0, 0, 10, 10, "#FFFFFF", "none"), _text())
        groups = _parse(build_svg(doc)).findall("svg:g", NS)
        assert [g.get("id") for g in groups] == ["layer-1", "layer-2"]
        assert groups[0].find("svg:rect", NS) is not None
        assert groups[1].find("svg:text", NS) is not None

    def test_text_lines_as_tspans(self):
        text = _parse(build_svg(_doc(_text()))).find("svg:g/svg:text", NS)
        spans = text.findall("svg:tspan", NS)
        assert [s.text for s in spans] == ["Faith in the", "Wilderness"]
        assert [s.get("y") for s in spans] == ["280", "380"]
        assert text.get("text-anchor") == "start"
        assert text.get("font-weight") == "800"

    @pytest.mark.parametrize("align,x,anchor", [
        (TextAlign.CENTER, "500", "middle"),
        (TextAlign.RIGHT, "900", "end"),
    ])
    def test_alignment(self, align, x, anchor):
        text = _parse(build_svg(_doc(_text(align=align)))).find("svg:g/svg:text", NS)
        assert text.get("x") == x
        assert text.get("text-anchor") == anchor

    def test_letter_spacing(self):
        text = _parse(build_svg(_doc(_text(letter_spacing=2.5)))).find("svg:g/svg:text", NS)
        assert text.get("letter-spacing") == "2.5"

    def test_escaping(self):
        doc = _doc(_text(text='Faith & <Doubt> "Now"', font_family='Say "Hi" & Co'))
        svg = build_svg(doc)
        text = _parse(svg).find("svg:g/svg:text", NS)
        assert text.find("svg:tspan", NS).text == 'Faith & <Doubt> "Now"'
        assert text.get("font-family") == 'Say "Hi" & Co'
        assert "&amp;" in svg

    def test_rotation_about_center(self):
        rect = ShapeLayer(100, 100, 200, 50, "#FFFFFF", "none", rotation=-6.5)
        node = _parse(build_svg(_doc(rect))).find("svg:g/svg:rect", NS)
        assert node.get("transform") == "rotate(-6.5 200 125)"

    def test_no_transform_without_rotation(self):
        node = _parse(build_svg(_doc(_text()))).find("svg:g/svg:text", NS)
        assert node.get("transform") is None

    def test_without_background(self):
        root = _parse(build_svg(_doc(_text()), include_background=False))
        assert root.find("svg:rect", NS) is None

    def test_without_images(self):
        doc = _doc(ImageLayer(0, 0, 10, 10, "https://cdn.example.org/a.png"), _text())
        root = _parse(build_svg(doc, include_images=False))
        assert root.find(".//svg:image", NS) is None
        assert [g.get("id") for g in root.findall("svg:g", NS)] == ["layer-2"]

    def test_missing_image_keeps_src(self, tmp_path):
        doc = _doc(ImageLayer(10, 20, 30, 40, "/uploads/missing.png"))
        image = _parse(build_svg(doc, public_root=tmp_path)).find("svg:g/svg:image", NS)
        assert image.get("href") == "/uploads/missing.png"
        assert image.get("preserveAspectRatio") == "xMidYMid meet"

    def test_local_image_inlined(self, tmp_path):
        (tmp_path / "uploads").mkdir()
        Image.new("RGB", (2, 2)).save(tmp_path / "uploads" / "logo.png")
        doc = _doc(ImageLayer(10, 20, 30, 40, "/uploads/logo.png"))
        image = _parse(build_svg(doc, public_root=tmp_path)).find("svg:g/svg:image", NS)
        assert image.get("href").startswith("data:image/png;base64,")

    def test_repeatable(self):
        request = GenerationRequest(
            project_id="p", preset_key="type_clean_min_v1", round=1, option_index=2,
            project=ProjectInput(series_title="Faith in the Wilderness",
                                 scripture_passages="Psalm 23"),
        )
        doc = generate_design_doc(request, "tall")
        assert build_svg(doc) == build_svg(generate_design_doc(request, "tall"))
        _parse(build_svg(doc))
