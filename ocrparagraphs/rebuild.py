"""
Paragraph reconstruction orchestrator.

This module provides the main entry points that turn an OcrResult into
reading-order paragraphs by wiring together:
1. Coordinate normalization (RTL flip, margin snapping)
2. Line clustering and merging
3. Optional typo correction against an alternate transcription
4. Poetic layout detection / paragraph clustering
5. Footer insertion
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ocrparagraphs.config import RebuildOptions
from ocrparagraphs.exceptions import IndexContiguityError
from ocrparagraphs.layout.grouping import group_by_index, merge, sort_horizontally
from ocrparagraphs.layout.indexing import (
    index_as_lines,
    index_as_paragraphs,
    validate_index_contiguity,
)
from ocrparagraphs.layout.normalization import (
    apply_footer,
    map_to_rtl_observations,
    normalize_x,
)
from ocrparagraphs.layout.poetry import is_poetic_layout
from ocrparagraphs.models import IndexedObservation, Observation, OcrResult
from ocrparagraphs.text.typos import reconcile

logger = logging.getLogger(__name__)


def rebuild_observations(
    result: OcrResult, options: RebuildOptions | None = None
) -> list[Observation]:
    """
    Rebuild reading-order paragraphs with their bounding boxes.

    Boxes in the output are in RTL-normalized coordinates: x is measured
    from the right edge of the page.

    Args:
        result: OCR output for one page.
        options: Tuning knobs (uses defaults if None).

    Returns:
        One observation per paragraph, top to bottom, with the footer
        marker spliced in when one was requested and could be placed.
    """
    if options is None:
        options = RebuildOptions()

    if not result.observations:
        return []

    dpi_x = result.resolution.x or options.fallback_dpi
    dpi_y = result.resolution.y or options.fallback_dpi

    line_groups = _line_groups(result.observations, result.image.width, dpi_x, dpi_y, options)
    lines = merge(line_groups)

    if result.alternate_observations and options.typo.typo_symbols:
        lines = _correct_typos(result, lines, dpi_x, dpi_y, options)

    if is_poetic_layout(line_groups, options.poetic_columns, options.min_poetic_ratio):
        logger.debug("Poetic layout detected; keeping %d lines as paragraphs", len(lines))
        paragraphs = lines
    else:
        marked = index_as_paragraphs(
            lines, options.vertical_jump_factor, options.width_tolerance
        )
        _check_indices(marked, "paragraph", options)
        paragraphs = merge(group_by_index(marked))

    if options.footer_symbol and result.horizontal_lines:
        lowest = max(result.horizontal_lines, key=lambda b: b.y)
        (footer,) = map_to_rtl_observations(
            [Observation(bbox=lowest, text=options.footer_symbol)], result.image.width
        )
        paragraphs = apply_footer(paragraphs, footer)

    logger.debug(
        "Rebuilt %d fragments into %d paragraphs", len(result.observations), len(paragraphs)
    )
    return paragraphs


def rebuild_paragraphs(result: OcrResult, options: RebuildOptions | None = None) -> str:
    """
    Rebuild reading-order paragraphs as plain text, one paragraph per line.

    Example:
        >>> text = rebuild_paragraphs(OcrResult.from_dict(data))
        >>> print(text)
    """
    return "\n".join(o.text for o in rebuild_observations(result, options))


def _line_groups(
    observations: Sequence[Observation],
    image_width: float,
    dpi_x: float,
    dpi_y: float,
    options: RebuildOptions,
) -> list[list[Observation]]:
    """Flip, snap and cluster fragments into horizontally sorted line groups."""
    normalized = normalize_x(
        map_to_rtl_observations(observations, image_width), dpi_x, options.standard_dpi_x
    )
    marked = index_as_lines(normalized, dpi_y, options.pixel_tolerance)
    _check_indices(marked, "line", options)
    return sort_horizontally(group_by_index(marked))


def _correct_typos(
    result: OcrResult,
    lines: list[Observation],
    dpi_x: float,
    dpi_y: float,
    options: RebuildOptions,
) -> list[Observation]:
    alternate_lines = merge(
        _line_groups(result.alternate_observations, result.image.width, dpi_x, dpi_y, options)
    )

    if len(alternate_lines) != len(lines):
        logger.warning(
            "Skipping typo correction: alternate transcription has %d lines, primary has %d",
            len(alternate_lines),
            len(lines),
        )
        return lines

    return reconcile(alternate_lines, lines, options.typo)


def _check_indices(
    marked: Sequence[IndexedObservation], stage: str, options: RebuildOptions
) -> None:
    if not options.check_indices:
        return

    validation = validate_index_contiguity(marked)
    if not validation:
        raise IndexContiguityError(
            f"{stage} indices are not contiguous; missing {list(validation.missing)}, "
            f"unexpected {list(validation.unexpected)}"
        )
