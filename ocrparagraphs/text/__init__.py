"""
Text normalization, alignment and cross-engine typo correction.

Example:
    >>> from ocrparagraphs.text import reconcile
    >>> from ocrparagraphs import TypoOptions
    >>> corrected = reconcile(reference_lines, primary_lines, TypoOptions(typo_symbols=("ﷺ",)))
"""

from ocrparagraphs.text.alignment import align_token_sequences, alignment_score
from ocrparagraphs.text.normalize import (
    extract_digits,
    has_embedded_footnote,
    is_standalone_footnote,
    normalize_arabic_text,
    tokenize_text,
)
from ocrparagraphs.text.similarity import (
    are_similar_after_normalization,
    levenshtein_distance,
    similarity,
)
from ocrparagraphs.text.typos import correct_text, reconcile

__all__ = [
    # Normalization
    "normalize_arabic_text",
    "extract_digits",
    "tokenize_text",
    "is_standalone_footnote",
    "has_embedded_footnote",
    # Similarity
    "levenshtein_distance",
    "similarity",
    "are_similar_after_normalization",
    # Alignment
    "align_token_sequences",
    "alignment_score",
    # Typo correction
    "reconcile",
    "correct_text",
]
