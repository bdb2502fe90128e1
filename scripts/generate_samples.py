"""
Generate a sample of every preset in every shape for visual review.

Usage:
    pip install -e .
    python scripts/generate_samples.py           # JSON + SVG
    python scripts/generate_samples.py --png     # also PNG (needs Playwright Chromium)

Writes output/samples/<preset>/<shape>-option-<n>.{json,svg,png}.
"""

from __future__ import annotations

import sys
from pathlib import Path

from sermon_art.design.metrics import Shape
from sermon_art.presets import GenerationRequest, PresetKey, ProjectInput, generate_preset_output
from sermon_art.renderer.svg import build_svg

ROOT = Path(__file__).resolve().parents[1]
OUTPUT_DIR = ROOT / "output" / "samples"
PUBLIC_ROOT = ROOT / "public"
OPTIONS = 3

PROJECT = ProjectInput(
    series_title="Faith in the Wilderness",
    series_subtitle="Learning to trust God",
    scripture_passages="Psalm 23; Exodus 16:1-18",
    series_description=(
        "A six-week journey through the wilderness stories of Israel, and the "
        "God who provides daily bread on the way."
    ),
    palette=["#0F172A", "#F97316", "#FDE68A"],
)


def main():
    with_png = "--png" in sys.argv[1:]
    if with_png:
        from sermon_art.renderer.raster import render_png

    print("=" * 60)
    print(f"Generating {len(PresetKey)} presets x {len(Shape)} shapes x {OPTIONS} options")
    print("=" * 60)

    count = 0
    for key in PresetKey:
        preset_dir = OUTPUT_DIR / key.value
        preset_dir.mkdir(parents=True, exist_ok=True)
        for option in range(OPTIONS):
            request = GenerationRequest(
                project_id="samples",
                preset_key=key.value,
                round=1,
                option_index=option,
                project=PROJECT,
            )
            output = generate_preset_output(request)
            for shape in Shape:
                doc = output.doc_for_shape(shape)
                stem = preset_dir / f"{shape.value}-option-{option + 1}"
                stem.with_suffix(".json").write_text(doc.to_json(indent=2), encoding="utf-8")
                stem.with_suffix(".svg").write_text(
                    build_svg(doc, public_root=PUBLIC_ROOT), encoding="utf-8")
                if with_png:
                    stem.with_suffix(".png").write_bytes(render_png(doc, public_root=PUBLIC_ROOT))
                count += 1
        print(f"  {key.value}: {output.notes}")

    print("\n" + "=" * 60)
    print(f"Done! {count} documents in: {OUTPUT_DIR}")
    print("=" * 60)


if __name__ == "__main__":
    main()
