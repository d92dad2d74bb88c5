"""Pointer-driven reorder interaction.

A drag is a chain of immutable :class:`DragSession` values. ``begin`` captures the
dragged player and the ids visible at that moment (possibly a filtered view);
``with_target`` records the current insertion slot; ``finish`` resolves both ends
against the board's *current* available ordering and commits at most one reorder.
An abandoned or cancelled drag never touches the board.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fantasy_draft_board.board.state import DraftBoard


def insertion_index(pointer_y: float, midpoints: Sequence[float]) -> int:
    """Index of the first item whose vertical midpoint lies below the pointer.

    Returns ``len(midpoints)`` when the pointer is past every item. Midpoints must
    be ascending, as they are for a rendered list.
    """
    return bisect_right(midpoints, pointer_y)


@dataclass(frozen=True)
class DragSession:
    source_id: str
    visible_ids: tuple[str, ...]
    target_index: int

    @classmethod
    def begin(cls, source_id: str, visible_ids: Sequence[str]) -> DragSession | None:
        ids = tuple(visible_ids)
        if source_id not in ids:
            return None
        return cls(source_id=source_id, visible_ids=ids, target_index=ids.index(source_id))

    def with_target(self, target_index: int) -> DragSession:
        clamped = max(0, min(target_index, len(self.visible_ids)))
        return replace(self, target_index=clamped)

    def track(self, pointer_y: float, midpoints: Sequence[float]) -> DragSession:
        return self.with_target(insertion_index(pointer_y, midpoints))

    @property
    def before_id(self) -> str | None:
        """Visible player the source will land in front of; None means the end."""
        if self.target_index >= len(self.visible_ids):
            return None
        return self.visible_ids[self.target_index]

    def finish(self, board: DraftBoard) -> bool:
        return board.reorder_by_id(self.source_id, self.before_id)
