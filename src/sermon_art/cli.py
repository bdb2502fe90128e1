"""Command-line interface: generate series artwork and re-export stored documents.

Usage:
    sermon-art presets
    sermon-art generate --title "Faith in the Wilderness" --passage "Psalm 23" \\
        --palette "#0F172A,#F97316" --preset type_clean_min_v1 --shape wide \\
        --format svg --format png
    sermon-art render output/type_clean_min_v1-wide.json --format pdf
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from sermon_art import __version__
from sermon_art.config import Settings, load_settings
from sermon_art.design.metrics import Shape
from sermon_art.design.models import DesignDoc, normalize_design_doc
from sermon_art.exceptions import AssetError, SermonArtError
from sermon_art.presets.context import GenerationRequest, PresetKey, ProjectInput
from sermon_art.presets.registry import generate_preset_output

logger = logging.getLogger(__name__)

FORMATS = ("json", "svg", "png", "pdf", "pptx")


def _parse_focal(value: str) -> tuple[float, float]:
    try:
        x, y = (float(part) for part in value.split(","))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"focal point must be X,Y fractions, got {value!r}") from exc
    return x, y


def _parse_palette(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sermon-art",
        description="Generate sermon-series artwork and export it as SVG, PNG, PDF or PPTX.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("presets", help="List preset keys.")

    def add_output_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--format", dest="formats", action="append", choices=FORMATS,
                       help="Output format; repeat for several (default: json and svg).")
        p.add_argument("--out", type=Path, default=None,
                       help="Output directory (default: SERMON_ART_OUTPUT_DIR or ./output).")
        p.add_argument("--background", type=Path, default=None,
                       help="Background raster to composite typography over (png, pdf).")
        p.add_argument("--focal", type=_parse_focal, default=None,
                       help="Focal point for cropping the background, e.g. 0.5,0.3.")

    gen = sub.add_parser("generate", help="Generate a design document from series copy.")
    gen.add_argument("--title", required=True)
    gen.add_argument("--subtitle")
    gen.add_argument("--passage", help="Scripture passages, e.g. 'Psalm 23; John 10'.")
    gen.add_argument("--description")
    gen.add_argument("--palette", help="Comma separated hex colors.")
    gen.add_argument("--logo", help="Logo path under the public root, data URI or URL.")
    gen.add_argument("--preset", default=PresetKey.TYPE_CLEAN_MIN.value)
    gen.add_argument("--project-id", default="local")
    gen.add_argument("--generation-id")
    gen.add_argument("--round", type=int, default=1)
    gen.add_argument("--option", type=int, default=0, help="Zero-based option index.")
    gen.add_argument("--shape", choices=[s.value for s in Shape], default=Shape.WIDE.value)
    add_output_args(gen)

    render = sub.add_parser("render", help="Re-export a stored design document JSON file.")
    render.add_argument("document", type=Path)
    add_output_args(render)

    return parser


def write_outputs(
    doc: DesignDoc,
    formats: list[str],
    out_dir: Path,
    stem: str,
    settings: Settings,
    *,
    background: Path | None = None,
    focal: tuple[float, float] | None = None,
) -> list[Path]:
    """Render ``doc`` in each format and write ``<stem>.<ext>`` files."""
    from sermon_art.renderer.pdf_engine import render_pdf
    from sermon_art.renderer.raster import render_composite_png_from_path, render_png
    from sermon_art.renderer.slides import build_pptx
    from sermon_art.renderer.svg import build_svg

    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for fmt in formats:
        path = out_dir / f"{stem}.{fmt}"
        if fmt == "json":
            path.write_text(doc.to_json(indent=2), encoding="utf-8")
        elif fmt == "svg":
            path.write_text(build_svg(doc, public_root=settings.public_root), encoding="utf-8")
        elif fmt == "png":
            if background is not None:
                data = render_composite_png_from_path(doc, background, focal_point=focal)
            else:
                data = render_png(doc, public_root=settings.public_root)
            path.write_bytes(data)
        elif fmt == "pdf":
            bg_bytes = None
            if background is not None:
                if not background.is_file():
                    raise AssetError(f"Background image not found: {background}")
                bg_bytes = background.read_bytes()
            path.write_bytes(render_pdf(
                doc,
                public_root=settings.public_root,
                jpeg_quality=settings.jpeg_quality,
                background=bg_bytes,
                focal_point=focal,
            ))
        elif fmt == "pptx":
            path.write_bytes(build_pptx(doc, public_root=settings.public_root))
        logger.info("Wrote %s", path)
        written.append(path)
    return written


def _cmd_presets() -> int:
    for key in PresetKey:
        print(key.value)
    return 0


def _cmd_generate(args: argparse.Namespace, settings: Settings) -> int:
    request = GenerationRequest(
        project_id=args.project_id,
        preset_key=args.preset,
        round=args.round,
        option_index=args.option,
        generation_id=args.generation_id,
        project=ProjectInput(
            series_title=args.title,
            series_subtitle=args.subtitle,
            scripture_passages=args.passage,
            series_description=args.description,
            logo_path=args.logo,
            palette=_parse_palette(args.palette),
        ),
    )
    output = generate_preset_output(request)
    doc = output.doc_for_shape(args.shape)
    logger.info("%s: %s", args.preset, output.notes)
    write_outputs(
        doc,
        args.formats or ["json", "svg"],
        args.out or settings.output_dir,
        f"{args.preset}-{args.shape}",
        settings,
        background=args.background,
        focal=args.focal,
    )
    return 0


def _cmd_render(args: argparse.Namespace, settings: Settings) -> int:
    try:
        data = json.loads(args.document.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.error("Could not read %s: %s", args.document, exc)
        return 1

    doc = normalize_design_doc(data, allow_empty=True)
    if doc is None:
        logger.error("%s is not a usable design document", args.document)
        return 1

    write_outputs(
        doc,
        args.formats or ["svg"],
        args.out or settings.output_dir,
        args.document.stem,
        settings,
        background=args.background,
        focal=args.focal,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``sermon-art`` console script."""
    settings = load_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    args = build_parser().parse_args(argv)
    try:
        if args.command == "presets":
            return _cmd_presets()
        if args.command == "generate":
            return _cmd_generate(args, settings)
        return _cmd_render(args, settings)
    except SermonArtError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
