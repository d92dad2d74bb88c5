from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from fantasy_draft_board.board.models import EntityRecord, ParsedEntry

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


class DraftBoard:
    """Ranked player collection plus the chronological log of picks.

    Drafting never touches ``rank``; only reorders rewrite ranks. Operations that
    cannot be resolved against the current state are rejected without mutating
    anything and report the rejection through their return value.
    """

    def __init__(self, id_factory: Callable[[], str] = _new_id) -> None:
        self._id_factory = id_factory
        self._records: dict[str, EntityRecord] = {}
        # Insertion sequence, used to break rank ties deterministically
        self._sequence: dict[str, int] = {}
        self._history: list[str] = []

    @classmethod
    def restore(
        cls,
        records: Iterable[EntityRecord],
        history: Iterable[str] = (),
        id_factory: Callable[[], str] = _new_id,
    ) -> DraftBoard:
        """Rebuild a board from persisted records and pick log.

        Log entries that do not point at a drafted record (or repeat one) are
        dropped so that undo always has something to reverse.
        """
        board = cls(id_factory=id_factory)
        for record in records:
            if record.id in board._records:
                logger.debug("Skipping duplicate record id %s", record.id)
                continue
            board._sequence[record.id] = len(board._sequence)
            board._records[record.id] = record
        seen: set[str] = set()
        for entity_id in history:
            record = board._records.get(entity_id)
            if record is None or not record.drafted or entity_id in seen:
                logger.debug("Dropping stale history entry %s", entity_id)
                continue
            seen.add(entity_id)
            board._history.append(entity_id)
        return board

    def __len__(self) -> int:
        return len(self._records)

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    def get(self, entity_id: str) -> EntityRecord | None:
        return self._records.get(entity_id)

    def replace_all(self, entries: Sequence[ParsedEntry]) -> list[EntityRecord]:
        """Swap in a freshly imported collection ranked in input order.

        Clears the pick log.
        """
        records: dict[str, EntityRecord] = {}
        for index, entry in enumerate(entries):
            entity_id = self._id_factory()
            while entity_id in records:
                entity_id = self._id_factory()
            records[entity_id] = EntityRecord(
                id=entity_id,
                name=entry.name,
                category=entry.category,
                group=entry.group,
                rank=index,
                drafted=False,
                priority=entry.priority,
            )
        self._records = records
        self._sequence = {entity_id: i for i, entity_id in enumerate(records)}
        self._history = []
        logger.debug("Replaced board with %d records", len(records))
        return self.get_all()

    def get_all(self) -> list[EntityRecord]:
        return sorted(self._records.values(), key=lambda r: (r.rank, self._sequence[r.id]))

    def get_available(self) -> list[EntityRecord]:
        return [r for r in self.get_all() if not r.drafted]

    def available_ids(self) -> list[str]:
        return [r.id for r in self.get_available()]

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Move one available player within the available ordering.

        Both indices address the available-only list. ``to_index`` uses splice
        semantics: the source is removed first, then reinserted at ``to_index``;
        anything at or past the end appends. Drafted players keep their slots and
        every rank is rewritten from the reconstructed full ordering.
        """
        full = self.get_all()
        available = [r for r in full if not r.drafted]
        if not 0 <= from_index < len(available) or to_index < 0:
            logger.debug("Rejected reorder %d -> %d (%d available)", from_index, to_index, len(available))
            return False

        moved = available.pop(from_index)
        available.insert(min(to_index, len(available)), moved)

        threaded = iter(available)
        merged = [record if record.drafted else next(threaded) for record in full]

        self._records = {record.id: record.with_rank(i) for i, record in enumerate(merged)}
        return True

    def reorder_by_id(self, source_id: str, before_id: str | None) -> bool:
        """Move ``source_id`` so it sits directly before ``before_id``.

        ``before_id=None`` moves the player to the end of the available list.
        Both ids are resolved against the current available ordering; nothing is
        committed unless both resolve.
        """
        ids = self.available_ids()
        if source_id not in ids:
            logger.debug("Reorder source %s is not available", source_id)
            return False
        from_index = ids.index(source_id)
        if before_id is None:
            to_index = len(ids)
        elif before_id in ids:
            to_index = ids.index(before_id)
        else:
            logger.debug("Reorder target %s is not available", before_id)
            return False
        if from_index < to_index:
            to_index -= 1
        return self.reorder(from_index, to_index)

    def draft(self, entity_id: str) -> EntityRecord | None:
        record = self._records.get(entity_id)
        if record is None or record.drafted:
            logger.debug("Rejected draft of %s", entity_id)
            return None
        drafted = record.with_drafted(True)
        self._records[entity_id] = drafted
        self._history.append(entity_id)
        return drafted

    def undo_last(self) -> EntityRecord | None:
        if not self._history:
            logger.debug("Nothing to undo")
            return None
        entity_id = self._history.pop()
        restored = self._records[entity_id].with_drafted(False)
        self._records[entity_id] = restored
        return restored

    def reset(self) -> None:
        """Return every player to the available pool and clear the log."""
        self._records = {entity_id: r.with_drafted(False) for entity_id, r in self._records.items()}
        self._history = []
