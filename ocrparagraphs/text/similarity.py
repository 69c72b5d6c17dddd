"""
String similarity on edit distance.

Distances come from rapidfuzz's Levenshtein implementation, which
computes the classic unit-cost edit distance with memory bounded by the
shorter string.
"""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein

from ocrparagraphs.text.normalize import normalize_arabic_text


def levenshtein_distance(text_a: str, text_b: str) -> int:
    """Return the minimum number of single-character edits between two strings."""
    return Levenshtein.distance(text_a, text_b)


def similarity(text_a: str, text_b: str) -> float:
    """
    Return ``(max_len - distance) / max_len`` in [0, 1].

    Two empty strings are identical (1.0).
    """
    max_length = max(len(text_a), len(text_b)) or 1
    return (max_length - levenshtein_distance(text_a, text_b)) / max_length


def are_similar_after_normalization(text_a: str, text_b: str, threshold: float) -> bool:
    """Compare diacritic-stripped forms of both texts against ``threshold``."""
    normalized_a = normalize_arabic_text(text_a)
    normalized_b = normalize_arabic_text(text_b)
    return similarity(normalized_a, normalized_b) >= threshold
