"""Jinja2 template filters and environment setup."""

from __future__ import annotations

import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates" / "html"

_XML_PROLOG_RE = re.compile(r"^\s*<\?xml[^>]*\?>\s*")


def px(value: float) -> str:
    """CSS pixel length."""
    if float(value).is_integer():
        return f"{int(value)}px"
    return f"{value:.2f}px"


def inline_svg(markup: str) -> str:
    """Drop the XML prolog so SVG markup can be embedded in HTML."""
    if not markup:
        return ""
    return _XML_PROLOG_RE.sub("", markup, count=1)


def setup_jinja_env() -> Environment:
    """Create and configure the Jinja2 template environment."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,  # SVG markup is inserted verbatim; it is escaped when composed
    )
    env.filters["px"] = px
    env.filters["inline_svg"] = inline_svg
    return env
