"""
Line and paragraph clustering.

Both clusterers tag each fragment with the index of the line or
paragraph it belongs to. Grouping by that index happens downstream in
ocrparagraphs.layout.grouping.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ocrparagraphs.models import IndexedObservation, Observation

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Fraction of the taller box height under which two fragments share a line.
# Kept just below 0.5 so a heading does not merge with the line under it.
LINE_HEIGHT_FACTOR = 0.49

# DPI at which pixel_tolerance is expressed
BASE_DPI = 72


# =============================================================================
# LINE CLUSTERING
# =============================================================================


def index_as_lines(
    observations: Sequence[Observation], dpi: float, pixel_tolerance: float = 5
) -> list[IndexedObservation]:
    """
    Tag fragments with a line number by clustering on vertical proximity.

    Fragments are sorted top to bottom. Each fragment is compared with the
    fragment right before it in that order; when the vertical step exceeds
    ``max(heights) * 0.49 + pixel_tolerance * dpi / 72`` a new line starts.

    Args:
        observations: Fragments in any order.
        dpi: Vertical DPI of the scan.
        pixel_tolerance: Extra slack in pixels at 72 DPI.

    Returns:
        Fragments sorted by (line index, y).
    """
    if not observations:
        return []

    by_y = sorted(observations, key=lambda o: o.bbox.y)
    if len(by_y) == 1:
        return [_tag(by_y[0], 0)]

    y_tolerance = pixel_tolerance * (dpi / BASE_DPI)

    current_line = 0
    marked = [_tag(by_y[0], current_line)]

    for prev, obs in zip(by_y, by_y[1:]):
        dy = obs.bbox.y - prev.bbox.y
        threshold = max(prev.bbox.height, obs.bbox.height) * LINE_HEIGHT_FACTOR + y_tolerance

        if dy > threshold:
            current_line += 1

        marked.append(_tag(obs, current_line))

    logger.debug("Clustered %d fragments into %d lines", len(marked), current_line + 1)
    return sorted(marked, key=lambda o: (o.index, o.bbox.y))


# =============================================================================
# PARAGRAPH CLUSTERING
# =============================================================================


def index_as_paragraphs(
    lines: Sequence[Observation],
    vertical_jump_factor: float = 2,
    width_tolerance: float = 0.85,
) -> list[IndexedObservation]:
    """
    Tag merged lines with a paragraph number.

    Two rules start a new paragraph:

    - Short line: a line narrower than ``width_tolerance`` times the widest
      line ends its paragraph, so the next line starts a new one.
    - Vertical jump: from the third line on, a gap larger than
      ``vertical_jump_factor`` times the gap before it starts a new
      paragraph. The rule only looks at transitions where both preceding
      lines are full width, so it never fires on top of a short-line break.

    Args:
        lines: Merged line observations.
        vertical_jump_factor: Gap growth that counts as a jump.
        width_tolerance: Fraction of the widest line below which a line is short.

    Returns:
        Lines sorted by (paragraph index, y).
    """
    if not lines:
        return []

    by_y = sorted(lines, key=lambda o: o.bbox.y)
    threshold_width = max(o.bbox.width for o in by_y) * width_tolerance

    def is_full_width(o: Observation) -> bool:
        return o.bbox.width >= threshold_width

    out: list[IndexedObservation] = []
    index = 0

    for i, line in enumerate(by_y):
        if i > 1:
            prev, prev_prev = by_y[i - 1], by_y[i - 2]
            if is_full_width(prev) and is_full_width(prev_prev):
                gap = line.bbox.y - prev.bbox.y
                prev_gap = prev.bbox.y - prev_prev.bbox.y
                if _is_vertical_jump(gap, prev_gap, prev.bbox.height, vertical_jump_factor):
                    index += 1

        out.append(_tag(line, index))

        if not is_full_width(line):
            index += 1

    return sorted(out, key=lambda o: (o.index, o.bbox.y))


def _is_vertical_jump(gap: float, prev_gap: float, prev_height: float, factor: float) -> bool:
    if prev_gap <= 0:
        # Two lines on the same y give no ratio to compare against;
        # fall back to the height of the previous line.
        return gap > prev_height * factor
    return gap > prev_gap * factor


def _tag(observation: Observation, index: int) -> IndexedObservation:
    return IndexedObservation(bbox=observation.bbox, text=observation.text, index=index)


# =============================================================================
# CONTIGUITY VALIDATION
# =============================================================================


@dataclass(frozen=True)
class IndexValidation:
    """Outcome of an index contiguity check."""

    is_valid: bool
    index_count: int  # Number of distinct indices seen
    missing: tuple[int, ...] = ()  # Indices absent from 0..max
    unexpected: tuple[int, ...] = ()  # Indices outside 0..max (negative)

    def __bool__(self) -> bool:
        return self.is_valid


def validate_index_contiguity(indexed: Sequence[IndexedObservation]) -> IndexValidation:
    """
    Check that clustering indices form a gapless 0..N range.

    This is a development aid. It never raises; callers decide what to do
    with an invalid result.
    """
    seen = {o.index for o in indexed}
    if not seen:
        return IndexValidation(is_valid=True, index_count=0)

    expected = set(range(max(seen) + 1))
    missing = tuple(sorted(expected - seen))
    unexpected = tuple(sorted(seen - expected))

    return IndexValidation(
        is_valid=not missing and not unexpected,
        index_count=len(seen),
        missing=missing,
        unexpected=unexpected,
    )
