"""
Arabic text normalization, tokenization and footnote heuristics.

Normalization strips the parts of a token that two OCR engines tend to
disagree on without changing its meaning (diacritics, tatweel, stray
markup), so tokens can be compared on their core letters.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

# =============================================================================
# PATTERNS
# =============================================================================

HTML_TAG_PATTERN = re.compile(r"</?[^>]+>")
BASIC_TAG_PATTERN = re.compile(r"</?[a-z][^>]*?>", re.IGNORECASE)
TATWEEL_PATTERN = re.compile("\u0640")
DIACRITICS_PATTERN = re.compile("[\u0610-\u061a\u064b-\u065f\u0670\u06d6-\u06ed]")
WHITESPACE_PATTERN = re.compile(r"\s+")

# Western or Arabic-Indic digit run
DIGITS_PATTERN = re.compile("[0-9\u0660-\u0669]+")

# Bare footnote marker: (٥)  ٥  5.  (12)،
FOOTNOTE_STANDALONE_PATTERN = re.compile("\\(?[0-9\u0660-\u0669]+\\)?[\u060c.]?")

# Marker glued to a word: (٥)أخرجه
FOOTNOTE_EMBEDDED_PATTERN = re.compile("\\([0-9\u0660-\u0669]+\\)")


# =============================================================================
# NORMALIZATION
# =============================================================================


def normalize_arabic_text(text: str) -> str:
    """
    Strip markup, tatweel and diacritics, then trim whitespace.

    Example:
        >>> normalize_arabic_text("اَلسَّلَامُ عَلَيْكُمْ")
        'السلام عليكم'
    """
    text = BASIC_TAG_PATTERN.sub("", text)
    text = TATWEEL_PATTERN.sub("", text)
    text = DIACRITICS_PATTERN.sub("", text)
    return text.strip()


def extract_digits(text: str) -> str:
    """Return the first run of Western or Arabic-Indic digits, or ''."""
    match = DIGITS_PATTERN.search(text)
    return match.group(0) if match else ""


def tokenize_text(text: str, preserve_symbols: Iterable[str] = ()) -> list[str]:
    """
    Split text into tokens, isolating each preserved symbol as its own token.

    Example:
        >>> tokenize_text("محمد ﷺ رسول", ["ﷺ"])
        ['محمد', 'ﷺ', 'رسول']
    """
    if not text or not text.strip():
        return []

    processed = HTML_TAG_PATTERN.sub(" ", text)
    for symbol in preserve_symbols:
        processed = processed.replace(symbol, f" {symbol} ")

    return [token for token in WHITESPACE_PATTERN.split(processed.strip()) if token]


# =============================================================================
# FOOTNOTE HEURISTICS
# =============================================================================


def is_standalone_footnote(token: str) -> bool:
    return FOOTNOTE_STANDALONE_PATTERN.fullmatch(token) is not None


def has_embedded_footnote(token: str) -> bool:
    return FOOTNOTE_EMBEDDED_PATTERN.search(token) is not None


def select_embedded_footnote(token_a: str, token_b: str) -> list[str] | None:
    """
    Prefer the token carrying an embedded footnote marker.

    When both carry one, the shorter wins (ties go to ``token_a``).
    Returns None when neither token has an embedded marker.
    """
    a_embedded = has_embedded_footnote(token_a)
    b_embedded = has_embedded_footnote(token_b)

    if a_embedded and not b_embedded:
        return [token_a]
    if b_embedded and not a_embedded:
        return [token_b]
    if a_embedded and b_embedded:
        return [token_a if len(token_a) <= len(token_b) else token_b]
    return None


def select_standalone_footnote(token_a: str, token_b: str) -> list[str] | None:
    """
    Handle aligned pairs where a side is a bare footnote marker.

    A marker paired with ordinary text keeps both tokens, marker first.
    Two markers collapse to the shorter. Returns None when neither token
    is a bare marker.
    """
    a_marker = is_standalone_footnote(token_a)
    b_marker = is_standalone_footnote(token_b)

    if a_marker and not b_marker:
        return [token_a, token_b]
    if b_marker and not a_marker:
        return [token_b, token_a]
    if a_marker and b_marker:
        return [token_a if len(token_a) <= len(token_b) else token_b]
    return None


def fuse_footnote(result: list[str], previous: str, current: str) -> bool:
    """
    Fuse a bare marker with a neighbouring token that embeds the same marker.

    ``(٥)`` followed by ``(٥)أخرجه`` replaces the last entry of ``result``;
    ``(٥)أخرجه`` followed by ``(٥)`` drops the trailing marker.

    Returns:
        True if ``current`` was consumed, False if it still needs appending.
    """
    same_digits = extract_digits(previous) == extract_digits(current)
    if not same_digits:
        return False

    if is_standalone_footnote(previous) and has_embedded_footnote(current):
        result[-1] = current
        return True

    if has_embedded_footnote(previous) and is_standalone_footnote(current):
        return True

    return False
