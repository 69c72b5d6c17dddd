#!/usr/bin/env python3
"""
Basic ocrparagraphs Usage Example

This example demonstrates the core workflow:
1. Build an OcrResult from engine output
2. Rebuild paragraphs with default settings
3. Tune options and place a footer marker
4. Correct honorifics against a second engine
5. Load options from YAML
"""

import logging
from pathlib import Path

from ocrparagraphs import (
    OcrResult,
    RebuildOptions,
    TypoOptions,
    load_options,
    rebuild_observations,
    rebuild_paragraphs,
)
from ocrparagraphs.adapters import surya_page_to_observations

PAGE = {
    "dpi": {"width": 2480, "height": 3508, "x": 300, "y": 300},
    "horizontalLines": [{"x": 1480, "y": 2900, "width": 800, "height": 4}],
    "observations": [
        {"bbox": {"x": 1300, "y": 400, "width": 980, "height": 60}, "text": "بسم الله"},
        {"bbox": {"x": 200, "y": 402, "width": 1050, "height": 60}, "text": "الرحمن الرحيم"},
        {"bbox": {"x": 1100, "y": 490, "width": 1180, "height": 60}, "text": "الحمد لله"},
        {"bbox": {"x": 200, "y": 3000, "width": 2080, "height": 60}, "text": "(١) حاشية"},
    ],
}


def main():
    logging.basicConfig(level=logging.INFO)

    # ─────────────────────────────────────────────────────────────────────────
    # 1. Build the input
    # ─────────────────────────────────────────────────────────────────────────

    result = OcrResult.from_dict(PAGE)
    print(f"Fragments: {len(result.observations)}")
    print(f"  Image: {result.image.width}x{result.image.height}px")
    print(f"  Resolution: {result.resolution.x} DPI")

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Rebuild with defaults
    # ─────────────────────────────────────────────────────────────────────────

    print(rebuild_paragraphs(result))

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Custom options
    # ─────────────────────────────────────────────────────────────────────────

    options = RebuildOptions(
        footer_symbol="___",  # Marker placed where the footnote rule sits
        width_tolerance=0.8,  # Lines under 80% of the widest end a paragraph
        check_indices=True,  # Fail loudly on clustering gaps
    )

    for paragraph in rebuild_observations(result, options):
        box = paragraph.bbox
        print(f"[{box.x:.0f},{box.y:.0f} {box.width:.0f}x{box.height:.0f}] {paragraph.text}")

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Typo correction against a second engine
    # ─────────────────────────────────────────────────────────────────────────

    surya_page = {
        "text_lines": [
            {"bbox": [1300, 400, 2280, 460], "text": "بسم الله"},
            {"bbox": [200, 402, 1250, 462], "text": "الرحمن الرحيم"},
            {"bbox": [1100, 490, 2280, 550], "text": "الحمد لله ﷺ"},
            {"bbox": [200, 3000, 2280, 3060], "text": "(١) حاشية"},
        ]
    }
    result = OcrResult(
        image=result.image,
        observations=result.observations,
        resolution=result.resolution,
        horizontal_lines=result.horizontal_lines,
        alternate_observations=tuple(surya_page_to_observations(surya_page)),
    )
    options = RebuildOptions(typo=TypoOptions(typo_symbols=("ﷺ",)))
    print(rebuild_paragraphs(result, options))

    # ─────────────────────────────────────────────────────────────────────────
    # 5. Options from YAML
    # ─────────────────────────────────────────────────────────────────────────

    config_path = Path("ocrparagraphs.yaml")
    if config_path.exists():
        options = load_options(config_path)
        print(rebuild_paragraphs(result, options))


if __name__ == "__main__":
    main()
