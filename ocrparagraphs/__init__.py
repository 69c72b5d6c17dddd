"""
ocrparagraphs: Rebuild reading-order paragraphs from raw OCR fragments.

This library takes the flat list of text fragments an OCR engine emits
for a right-to-left (Arabic) page and reconstructs lines and paragraphs,
handling DPI-dependent tolerances, two-column verse, footnote rules and
optional correction against a second OCR engine.

Example:
    >>> import ocrparagraphs
    >>> result = ocrparagraphs.OcrResult.from_dict(data)
    >>> print(ocrparagraphs.rebuild_paragraphs(result))

    >>> options = ocrparagraphs.RebuildOptions(
    ...     footer_symbol="___",
    ...     typo=ocrparagraphs.TypoOptions(typo_symbols=("ﷺ",)),
    ... )
    >>> paragraphs = ocrparagraphs.rebuild_observations(result, options)
"""

from ocrparagraphs.config import RebuildOptions, TypoOptions, load_options
from ocrparagraphs.exceptions import (
    ConfigurationError,
    IndexContiguityError,
    ObservationMismatchError,
    OcrParagraphsError,
)
from ocrparagraphs.models import (
    BoundingBox,
    ImageSize,
    IndexedObservation,
    Observation,
    OcrResult,
    Resolution,
    union_all,
)
from ocrparagraphs.rebuild import rebuild_observations, rebuild_paragraphs

__version__ = "0.1.0"
__all__ = [
    # Main API
    "rebuild_paragraphs",
    "rebuild_observations",
    # Configuration
    "RebuildOptions",
    "TypoOptions",
    "load_options",
    # Models
    "BoundingBox",
    "Observation",
    "IndexedObservation",
    "ImageSize",
    "Resolution",
    "OcrResult",
    "union_all",
    # Exceptions
    "OcrParagraphsError",
    "ConfigurationError",
    "ObservationMismatchError",
    "IndexContiguityError",
]
