"""Renderers: DesignDoc -> SVG, PNG, PDF and PPTX."""

from sermon_art.renderer.pdf_engine import build_pdf_from_jpeg, render_pdf
from sermon_art.renderer.raster import (
    cover_fit,
    rasterize_svg,
    render_composite_png,
    render_composite_png_from_path,
    render_png,
)
from sermon_art.renderer.slides import build_pptx
from sermon_art.renderer.svg import build_svg

__all__ = [
    "build_pdf_from_jpeg",
    "build_pptx",
    "build_svg",
    "cover_fit",
    "rasterize_svg",
    "render_composite_png",
    "render_composite_png_from_path",
    "render_pdf",
    "render_png",
]
