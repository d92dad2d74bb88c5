from __future__ import annotations

from typing import TYPE_CHECKING

from fantasy_draft_board.board.sequencer import RECOGNIZED_CATEGORIES

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fantasy_draft_board.board.models import EntityRecord

ALL_TAB = "ALL"
POSITION_TABS: tuple[str, ...] = (ALL_TAB, *RECOGNIZED_CATEGORIES)


def _relevance_key(record: EntityRecord, query: str) -> tuple[bool, bool, str]:
    name = record.name.lower()
    return (not name.startswith(query), query not in name, name)


def filter_available(
    available: Sequence[EntityRecord],
    tab: str = ALL_TAB,
    query: str = "",
) -> list[EntityRecord]:
    """Players shown under a position tab, narrowed by a free-text search.

    A blank query keeps rank order. Otherwise matches against name, position
    and team, and sorts names starting with the query first, then names
    containing it, then alphabetically.
    """
    needle = query.strip().lower()
    matches: list[EntityRecord] = []
    for record in available:
        if tab != ALL_TAB and record.category != tab:
            continue
        if needle:
            haystack = f"{record.name} {record.category} {record.group}".lower()
            if needle not in haystack:
                continue
        matches.append(record)

    if not needle:
        return matches
    return sorted(matches, key=lambda r: _relevance_key(r, needle))
