"""
Coordinate normalization for right-to-left pages.

OCR engines report boxes measured from the left edge of the image while
Arabic text reads from the right. This module mirrors x coordinates,
snaps jittery left margins, and places the synthetic footer marker.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ocrparagraphs.models import Observation

logger = logging.getLogger(__name__)

# Snapping distance in pixels at the standard DPI
MARGIN_SNAP_PX = 5


def map_to_rtl_observations(
    observations: Sequence[Observation], image_width: float
) -> list[Observation]:
    """
    Mirror every box horizontally so x is measured from the right edge.

    Applying this twice with the same image width restores the original x.

    Args:
        observations: Fragments with left-origin boxes.
        image_width: Page width in pixels.

    Returns:
        New observations with ``x = image_width - x - width``.
    """
    return [
        o.with_bbox(o.bbox.with_x(image_width - o.bbox.x - o.bbox.width))
        for o in observations
    ]


def normalize_x(
    observations: Sequence[Observation], dpi: float, standard_dpi: float = 300
) -> list[Observation]:
    """
    Snap fragments that sit a few pixels off the leftmost margin onto it.

    The snapping threshold is 5px at ``standard_dpi`` and scales with the
    ratio of the standard DPI to the document DPI. Only x is snapped.

    Args:
        observations: Fragments to normalize.
        dpi: Horizontal DPI of the scan.
        standard_dpi: DPI at which the 5px threshold is defined.

    Returns:
        New list; fragments far from the margin are passed through as-is.
    """
    if not observations:
        return []

    threshold_px = (standard_dpi / dpi) * MARGIN_SNAP_PX
    min_x = min(o.bbox.x for o in observations)

    return [
        o.with_bbox(o.bbox.with_x(min_x)) if abs(o.bbox.x - min_x) <= threshold_px else o
        for o in observations
    ]


def apply_footer(
    paragraphs: Sequence[Observation], footer: Observation
) -> list[Observation]:
    """
    Insert the footer right after the last paragraph that starts above it.

    If every paragraph starts at or below the footer, the footer is not
    inserted and a warning is logged. Callers must not assume the footer
    always appears in the output.
    """
    insert_after = -1
    for i, paragraph in enumerate(paragraphs):
        if paragraph.bbox.y < footer.bbox.y:
            insert_after = i

    if insert_after < 0:
        logger.warning("Footer not found: no paragraph above y=%s", footer.bbox.y)
        return list(paragraphs)

    result = list(paragraphs)
    result.insert(insert_after + 1, footer)
    return result
