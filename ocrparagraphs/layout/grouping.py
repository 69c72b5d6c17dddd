"""
Grouping and merging of indexed fragments.

Turns the flat, index-tagged output of a clusterer into one merged
observation per line or paragraph.
"""

from __future__ import annotations

from collections.abc import Sequence

from ocrparagraphs.models import IndexedObservation, Observation, union_all


def group_by_index(tagged: Sequence[IndexedObservation]) -> list[list[Observation]]:
    """
    Bucket fragments by their index.

    List position is the index, so a gap in the indices yields an empty
    group at that position. Order within a bucket follows input order.
    """
    groups: list[list[Observation]] = []

    for item in tagged:
        while len(groups) <= item.index:
            groups.append([])
        groups[item.index].append(item.to_observation())

    return groups


def sort_horizontally(groups: Sequence[Sequence[Observation]]) -> list[list[Observation]]:
    """Return new groups with each group's members sorted by ascending x."""
    return [sorted(group, key=lambda o: o.bbox.x) for group in groups]


def merge(groups: Sequence[Sequence[Observation]]) -> list[Observation]:
    """
    Merge each group into a single observation.

    The merged box is the union of the members' boxes and the text is the
    members' texts joined by single spaces, in group order. A one-member
    group is returned as-is. Empty groups are skipped.
    """
    merged: list[Observation] = []

    for group in groups:
        if not group:
            continue
        if len(group) == 1:
            merged.append(group[0])
            continue

        merged.append(
            Observation(
                bbox=union_all(o.bbox for o in group),
                text=" ".join(o.text for o in group),
            )
        )

    return merged
