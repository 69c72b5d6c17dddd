"""
Cross-engine typo correction.

Two OCR engines read the same lines. The primary transcription is
usually better, but it garbles certain glyphs (honorifics such as ﷺ)
that the reference engine reads correctly. For every line where the
reference shows one of those glyphs, both transcriptions are aligned
token by token and merged, keeping the primary's spelling wherever the
two agree.

Bounding boxes are never changed; only text is.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ocrparagraphs.config import TypoOptions
from ocrparagraphs.exceptions import ObservationMismatchError
from ocrparagraphs.models import Observation
from ocrparagraphs.text.alignment import align_token_sequences
from ocrparagraphs.text.normalize import (
    fuse_footnote,
    normalize_arabic_text,
    select_embedded_footnote,
    select_standalone_footnote,
    tokenize_text,
)
from ocrparagraphs.text.similarity import are_similar_after_normalization, similarity

logger = logging.getLogger(__name__)


def reconcile(
    reference: Sequence[Observation],
    primary: Sequence[Observation],
    options: TypoOptions,
) -> list[Observation]:
    """
    Correct primary lines against a reference transcription of the same lines.

    Args:
        reference: Lines from the reference engine.
        primary: Lines from the primary engine, paired by position.
        options: Typo symbols and similarity thresholds.

    Returns:
        Primary observations, with corrected text where the reference line
        contained a typo symbol.

    Raises:
        ObservationMismatchError: If the two sequences differ in length.
    """
    if len(reference) != len(primary):
        raise ObservationMismatchError(
            f"The two observation arrays must have the same length "
            f"(reference={len(reference)}, primary={len(primary)})"
        )

    corrected: list[Observation] = []
    changed = 0

    for ref, obs in zip(reference, primary):
        if not _contains_typo_symbol(ref.text, options.typo_symbols):
            corrected.append(obs)
            continue

        text = correct_text(obs.text, ref.text, options)
        if text != obs.text:
            changed += 1
        corrected.append(obs.with_text(text))

    logger.debug("Typo correction changed %d of %d lines", changed, len(primary))
    return corrected


def correct_text(primary_text: str, reference_text: str, options: TypoOptions) -> str:
    """Align and merge two transcriptions of one line into corrected text."""
    primary_tokens = tokenize_text(primary_text, options.typo_symbols)
    reference_tokens = tokenize_text(reference_text, options.typo_symbols)

    if not primary_tokens:
        return reference_text
    if not reference_tokens:
        return primary_text

    pairs = align_token_sequences(
        primary_tokens,
        reference_tokens,
        options.typo_symbols,
        options.similarity_threshold,
    )

    merged: list[str] = []
    for primary_token, reference_token in pairs:
        merged.extend(select_best_tokens(primary_token, reference_token, options))

    return " ".join(remove_duplicate_tokens(merged, options.high_similarity_threshold))


def select_best_tokens(
    primary_token: str | None,
    reference_token: str | None,
    options: TypoOptions,
) -> list[str]:
    """
    Choose the output token(s) for one aligned pair.

    Rules, first match wins:
    1. A gap on one side takes the other side.
    2. Identical after normalization keeps the primary (it keeps diacritics).
    3. Embedded footnote markers win; two embedded markers keep the shorter.
    4. A bare footnote marker next to text keeps both; two markers keep the shorter.
    5. A typo symbol on either side wins; if both are symbols, the one
       listed first in ``typo_symbols`` wins.
    6. Otherwise keep the primary if it is similar enough, else the reference.
    """
    if primary_token is None:
        return [reference_token] if reference_token is not None else []
    if reference_token is None:
        return [primary_token]

    normalized_primary = normalize_arabic_text(primary_token)
    normalized_reference = normalize_arabic_text(reference_token)

    if normalized_primary == normalized_reference:
        return [primary_token]

    selected = select_embedded_footnote(primary_token, reference_token)
    if selected is not None:
        return selected

    selected = select_standalone_footnote(primary_token, reference_token)
    if selected is not None:
        return selected

    symbol = next(
        (s for s in options.typo_symbols if s in (primary_token, reference_token)), None
    )
    if symbol is not None:
        return [symbol]

    if similarity(normalized_primary, normalized_reference) > options.similarity_threshold:
        return [primary_token]
    return [reference_token]


def remove_duplicate_tokens(tokens: Sequence[str], high_similarity_threshold: float) -> list[str]:
    """
    Collapse echoes left behind by merging two transcriptions.

    A token nearly identical to the previous kept token collapses into it
    (the shorter form survives). Otherwise bare footnote markers are fused
    with an adjacent token embedding the same marker.
    """
    result: list[str] = []

    for token in tokens:
        if not result:
            result.append(token)
            continue

        previous = result[-1]

        if are_similar_after_normalization(previous, token, high_similarity_threshold):
            if len(token) < len(previous):
                result[-1] = token
            continue

        if fuse_footnote(result, previous, token):
            continue

        result.append(token)

    return result


def _contains_typo_symbol(text: str, typo_symbols: Sequence[str]) -> bool:
    return any(symbol in text for symbol in typo_symbols)
