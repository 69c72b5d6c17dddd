"""
Geometric reconstruction of lines and paragraphs.

Example:
    >>> from ocrparagraphs.layout import index_as_lines, group_by_index, merge
    >>> lines = merge(group_by_index(index_as_lines(observations, dpi=300)))
"""

from ocrparagraphs.layout.grouping import group_by_index, merge, sort_horizontally
from ocrparagraphs.layout.indexing import (
    IndexValidation,
    index_as_lines,
    index_as_paragraphs,
    validate_index_contiguity,
)
from ocrparagraphs.layout.normalization import (
    apply_footer,
    map_to_rtl_observations,
    normalize_x,
)
from ocrparagraphs.layout.poetry import is_observation_centered, is_poetic_layout

__all__ = [
    # Normalization
    "map_to_rtl_observations",
    "normalize_x",
    "apply_footer",
    # Clustering
    "index_as_lines",
    "index_as_paragraphs",
    "IndexValidation",
    "validate_index_contiguity",
    # Grouping
    "group_by_index",
    "sort_horizontally",
    "merge",
    # Poetry
    "is_poetic_layout",
    "is_observation_centered",
]
