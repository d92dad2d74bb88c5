"""Per-position counters derived from the current available ordering."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from fantasy_draft_board.board.models import EntityRecord

RECOGNIZED_CATEGORIES: tuple[str, ...] = ("QB", "RB", "WR", "TE", "K", "DST")


def category_sequence(
    available: Sequence[EntityRecord],
    categories: Sequence[str] = RECOGNIZED_CATEGORIES,
) -> dict[str, int]:
    """Map each available player id to its 1-based position within its category.

    Players whose category is not recognized are left out of the mapping.
    """
    counts: dict[str, int] = dict.fromkeys(categories, 0)
    sequence: dict[str, int] = {}
    for record in available:
        if record.category not in counts:
            continue
        counts[record.category] += 1
        sequence[record.id] = counts[record.category]
    return sequence


def format_label(record: EntityRecord, sequence: Mapping[str, int]) -> str:
    """Display label like ``WR3``; bare category (or ``-``) when unsequenced."""
    seq = sequence.get(record.id)
    if seq is None:
        return record.category or "-"
    return f"{record.category}{seq}"


class CategorySequencer:
    """Memoizes :func:`category_sequence` on the identity of the available ordering."""

    def __init__(self, categories: Sequence[str] = RECOGNIZED_CATEGORIES) -> None:
        self._categories = tuple(categories)
        self._key: tuple[tuple[str, str], ...] | None = None
        self._cached: dict[str, int] = {}

    def __call__(self, available: Sequence[EntityRecord]) -> dict[str, int]:
        key = tuple((r.id, r.category) for r in available)
        if key != self._key:
            self._cached = category_sequence(available, self._categories)
            self._key = key
        return dict(self._cached)
