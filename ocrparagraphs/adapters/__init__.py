"""Converters from OCR engine output formats to Observations."""

from ocrparagraphs.adapters.surya import box_from_corners, surya_page_to_observations

__all__ = [
    "box_from_corners",
    "surya_page_to_observations",
]
