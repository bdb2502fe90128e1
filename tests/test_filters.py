"""Tests for Jinja2 template filters and the raster page template."""

from __future__ import annotations

from sermon_art.renderer.filters import inline_svg, px, setup_jinja_env


class TestPx:
    def test_integer(self):
        assert px(1920) == "1920px"

    def test_integral_float(self):
        assert px(1080.0) == "1080px"

    def test_fraction(self):
        assert px(12.345) == "12.35px"


class TestInlineSvg:
    def test_strips_prolog(self):
        markup = '<?xml version="1.0" encoding="UTF-8"?>\n<svg></svg>'
        assert inline_svg(markup) == "<svg></svg>"

    def test_without_prolog(self):
        assert inline_svg("<svg></svg>") == "<svg></svg>"

    def test_empty(self):
        assert inline_svg("") == ""

    def test_only_leading_prolog_removed(self):
        markup = '<svg><text>&lt;?xml?&gt;</text></svg>'
        assert inline_svg(markup) == markup


class TestRasterTemplate:
    def test_filters_registered(self):
        env = setup_jinja_env()
        assert "px" in env.filters
        assert "inline_svg" in env.filters

    def test_page_sized_to_document(self):
        html = setup_jinja_env().get_template("raster.html").render(
            svg='<?xml version="1.0"?>\n<svg id="art"></svg>',
            width=1080, height=1920, transparent=False,
        )
        assert "width: 1080px;" in html
        assert "height: 1920px;" in html
        assert '<svg id="art"></svg>' in html
        assert "<?xml" not in html
        assert "#FFFFFF" in html

    def test_transparent_page(self):
        html = setup_jinja_env().get_template("raster.html").render(
            svg="<svg></svg>", width=10, height=10, transparent=True,
        )
        assert "background: transparent;" in html
