"""
Exception classes for ocrparagraphs.

All ocrparagraphs exceptions inherit from OcrParagraphsError,
making it easy to catch all library errors.

Example:
    >>> try:
    ...     lines = reconcile(reference, primary, options)
    ... except ocrparagraphs.ObservationMismatchError as e:
    ...     print(f"OCR passes are not aligned: {e}")
    ... except ocrparagraphs.OcrParagraphsError as e:
    ...     print(f"ocrparagraphs error: {e}")
"""


class OcrParagraphsError(Exception):
    """
    Base exception for all ocrparagraphs errors.

    Catch this to handle any ocrparagraphs-specific error.
    """

    pass


class ConfigurationError(OcrParagraphsError, ValueError):
    """
    Raised for invalid configuration.

    Example:
        >>> RebuildOptions(width_tolerance=1.5)
        ConfigurationError: width_tolerance must be between 0.0 and 1.0, got 1.5
    """

    pass


class ObservationMismatchError(OcrParagraphsError):
    """
    Raised when two OCR transcriptions cannot be paired line by line.

    The typo reconciler assumes a 1:1 correspondence between the lines of
    the reference and primary transcriptions. A length mismatch means the
    caller handed over misaligned OCR passes; no partial recovery is made.
    """

    pass


class IndexContiguityError(OcrParagraphsError):
    """
    Raised when clustering produced a gap in line or paragraph indices.

    This is only raised when RebuildOptions.check_indices is enabled.
    Otherwise gaps are tolerated and yield empty groups.
    """

    pass
