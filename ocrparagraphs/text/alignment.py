"""
Global token alignment (Needleman-Wunsch).

Aligns two token sequences from different OCR engines so that tokens
describing the same word end up paired, with None marking a token one
engine produced and the other did not.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ocrparagraphs.text.normalize import normalize_arabic_text
from ocrparagraphs.text.similarity import similarity

# =============================================================================
# SCORING
# =============================================================================

PERFECT_MATCH = 2
SOFT_MATCH = 1
GAP_PENALTY = -1
MISMATCH_PENALTY = -2

AlignedPair = tuple[str | None, str | None]


class Direction(Enum):
    """Backpointer stored in each cell of the scoring matrix."""

    DIAGONAL = "diagonal"
    UP = "up"
    LEFT = "left"


@dataclass
class _Cell:
    score: int
    direction: Direction | None


def alignment_score(
    token_a: str,
    token_b: str,
    typo_symbols: Sequence[str],
    similarity_threshold: float,
) -> int:
    """
    Score pairing two tokens.

    +2 when identical after normalization, +1 when either is a typo symbol
    or their normalized similarity reaches the threshold, -2 otherwise.
    """
    normalized_a = normalize_arabic_text(token_a)
    normalized_b = normalize_arabic_text(token_b)

    if normalized_a == normalized_b:
        return PERFECT_MATCH

    if token_a in typo_symbols or token_b in typo_symbols:
        return SOFT_MATCH
    if similarity(normalized_a, normalized_b) >= similarity_threshold:
        return SOFT_MATCH

    return MISMATCH_PENALTY


def align_token_sequences(
    tokens_a: Sequence[str],
    tokens_b: Sequence[str],
    typo_symbols: Sequence[str],
    similarity_threshold: float,
) -> list[AlignedPair]:
    """
    Globally align two token sequences.

    Ties between equally scoring moves prefer diagonal, then up, then left.

    Args:
        tokens_a: First sequence (left side of every pair).
        tokens_b: Second sequence (right side of every pair).
        typo_symbols: Tokens that always soft-match.
        similarity_threshold: Normalized similarity for a soft match.

    Returns:
        Pairs in reading order. Non-None left entries reproduce ``tokens_a``
        and non-None right entries reproduce ``tokens_b``.
    """
    len_a = len(tokens_a)
    len_b = len(tokens_b)

    matrix = [[_Cell(0, None) for _ in range(len_b + 1)] for _ in range(len_a + 1)]
    for i in range(1, len_a + 1):
        matrix[i][0] = _Cell(i * GAP_PENALTY, Direction.UP)
    for j in range(1, len_b + 1):
        matrix[0][j] = _Cell(j * GAP_PENALTY, Direction.LEFT)

    for i in range(1, len_a + 1):
        for j in range(1, len_b + 1):
            pair_score = alignment_score(
                tokens_a[i - 1], tokens_b[j - 1], typo_symbols, similarity_threshold
            )
            diagonal = matrix[i - 1][j - 1].score + pair_score
            up = matrix[i - 1][j].score + GAP_PENALTY
            left = matrix[i][j - 1].score + GAP_PENALTY

            best = max(diagonal, up, left)
            if best == diagonal:
                direction = Direction.DIAGONAL
            elif best == up:
                direction = Direction.UP
            else:
                direction = Direction.LEFT
            matrix[i][j] = _Cell(best, direction)

    return _backtrack(matrix, tokens_a, tokens_b)


def _backtrack(
    matrix: list[list[_Cell]], tokens_a: Sequence[str], tokens_b: Sequence[str]
) -> list[AlignedPair]:
    alignment: list[AlignedPair] = []
    i, j = len(tokens_a), len(tokens_b)

    while i > 0 or j > 0:
        direction = matrix[i][j].direction
        if direction is Direction.DIAGONAL:
            i -= 1
            j -= 1
            alignment.append((tokens_a[i], tokens_b[j]))
        elif direction is Direction.UP:
            i -= 1
            alignment.append((tokens_a[i], None))
        elif direction is Direction.LEFT:
            j -= 1
            alignment.append((None, tokens_b[j]))
        else:
            raise RuntimeError(f"Alignment matrix has no backpointer at ({i}, {j})")

    alignment.reverse()
    return alignment
