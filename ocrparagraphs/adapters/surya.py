"""
Adapter for Surya OCR page results.

Surya reports each text line as ``{"bbox": [x1, y1, x2, y2], "text": ...}``
with (x1, y1) the top-left and (x2, y2) the bottom-right corner.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ocrparagraphs.models import BoundingBox, Observation


def box_from_corners(corners: Sequence[float]) -> BoundingBox:
    """Convert an [x1, y1, x2, y2] box to x/y/width/height form."""
    return BoundingBox.from_corners(corners)


def surya_page_to_observations(page: Mapping[str, Any]) -> list[Observation]:
    """Convert one Surya page result to observations, keeping line order."""
    return [
        Observation(bbox=box_from_corners(line["bbox"]), text=line["text"])
        for line in page.get("text_lines", [])
    ]
