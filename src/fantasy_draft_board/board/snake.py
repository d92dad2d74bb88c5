"""Snake-draft geometry: mapping the flat pick log onto a rounds x slots grid."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fantasy_draft_board.board.models import GridCell

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from fantasy_draft_board.board.models import BoardSettings, EntityRecord


def pick_index_to_coordinate(pick_index: int, num_slots: int) -> tuple[int, int]:
    """Return ``(round, column)`` for a 0-based overall pick index.

    Even rounds run left to right, odd rounds right to left.
    """
    if num_slots <= 0:
        raise ValueError(f"num_slots must be positive, got {num_slots}")
    if pick_index < 0:
        raise ValueError(f"pick_index must be non-negative, got {pick_index}")
    round_index, raw = divmod(pick_index, num_slots)
    column = raw if round_index % 2 == 0 else num_slots - 1 - raw
    return round_index, column


def coordinate_to_pick_index(round_index: int, column: int, num_slots: int) -> int:
    """Inverse of :func:`pick_index_to_coordinate`."""
    if num_slots <= 0:
        raise ValueError(f"num_slots must be positive, got {num_slots}")
    if round_index < 0 or not 0 <= column < num_slots:
        raise ValueError(f"Invalid coordinate ({round_index}, {column}) for {num_slots} slots")
    raw = column if round_index % 2 == 0 else num_slots - 1 - column
    return round_index * num_slots + raw


def build_grid(
    history: Sequence[str],
    records: Mapping[str, EntityRecord],
    settings: BoardSettings,
) -> tuple[tuple[GridCell, ...], ...]:
    """Project the pick log onto a ``num_rounds x num_slots`` grid.

    Picks past the configured rounds are not rendered.
    """
    rows: list[tuple[GridCell, ...]] = []
    for round_index in range(settings.num_rounds):
        row: list[GridCell] = []
        for column in range(settings.num_slots):
            pick_index = coordinate_to_pick_index(round_index, column, settings.num_slots)
            record = records.get(history[pick_index]) if pick_index < len(history) else None
            row.append(
                GridCell(
                    round_index=round_index,
                    column=column,
                    pick_number=pick_index + 1,
                    record=record,
                    highlighted=settings.highlighted_slot == column,
                )
            )
        rows.append(tuple(row))
    return tuple(rows)


def picks_for_slot(history: Sequence[str], slot: int, num_slots: int) -> list[tuple[int, str]]:
    """Return ``(round, entity_id)`` for every pick made by one slot, in round order."""
    picks: list[tuple[int, str]] = []
    for pick_index, entity_id in enumerate(history):
        round_index, column = pick_index_to_coordinate(pick_index, num_slots)
        if column == slot:
            picks.append((round_index, entity_id))
    return picks
