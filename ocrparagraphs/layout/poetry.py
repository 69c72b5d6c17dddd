"""
Poetic layout detection.

Arabic verse is typeset as rows of two hemistichs. Gap-based paragraph
heuristics would merge or split stanzas wrongly, so such pages skip
paragraph clustering and keep one paragraph per row.
"""

from __future__ import annotations

from collections.abc import Sequence

from ocrparagraphs.models import Observation

# Pages with fewer rows than this are never classified as poetic
MIN_POETIC_ROWS = 3


def is_poetic_layout(
    rows: Sequence[Sequence[Observation]],
    expected_cols: int = 2,
    min_poetic_ratio: float = 0.6,
) -> bool:
    """
    Return True if enough rows have exactly ``expected_cols`` fragments.

    Args:
        rows: Line groups, one list of fragments per row.
        expected_cols: Fragments per row in verse (2 for most Arabic poetry).
        min_poetic_ratio: Fraction of rows that must match.
    """
    if len(rows) < MIN_POETIC_ROWS:
        return False

    poetic_count = sum(1 for row in rows if len(row) == expected_cols)
    return poetic_count / len(rows) >= min_poetic_ratio


def is_observation_centered(
    observation: Observation, image_width: float, tolerance_ratio: float = 0.05
) -> bool:
    """Return True if the fragment's horizontal center is near the page center."""
    center_x, _ = observation.bbox.center
    return abs(center_x - image_width / 2) <= image_width * tolerance_ratio
