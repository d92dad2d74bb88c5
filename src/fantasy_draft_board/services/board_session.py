"""The draft board as the outside world sees it.

A :class:`BoardSession` bundles the ranking engine with board settings and the
auxiliary ADP/stats tables, exposes the bulk import entry points, and converts
to and from the persisted :class:`BoardDocument`.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from fantasy_draft_board.board.models import BoardDocument, BoardSettings
from fantasy_draft_board.board.sequencer import CategorySequencer
from fantasy_draft_board.board.snake import build_grid
from fantasy_draft_board.board.state import DraftBoard
from fantasy_draft_board.ingest.auxiliary import AuxiliaryKind, AuxiliaryStore
from fantasy_draft_board.ingest.line_parser import parse_lines
from fantasy_draft_board.ingest.tabular import parse_table
from fantasy_draft_board.seed import starter_text

if TYPE_CHECKING:
    from fantasy_draft_board.board.models import EntityRecord, GridCell, ParsedEntry
    from fantasy_draft_board.storage.repository import BoardRepository

logger = logging.getLogger(__name__)


class BoardSession:
    def __init__(
        self,
        board: DraftBoard | None = None,
        settings: BoardSettings | None = None,
        auxiliary: AuxiliaryStore | None = None,
    ) -> None:
        self.board = board if board is not None else DraftBoard()
        self.settings = settings or BoardSettings()
        self.auxiliary = auxiliary or AuxiliaryStore()
        self._sequencer = CategorySequencer()

    @classmethod
    def from_document(cls, document: BoardDocument) -> BoardSession:
        return cls(
            board=DraftBoard.restore(document.records, document.history),
            settings=document.settings,
            auxiliary=AuxiliaryStore(adp=dict(document.adp), stats=dict(document.stats)),
        )

    @classmethod
    def seeded(cls, settings: BoardSettings | None = None) -> BoardSession:
        session = cls(settings=settings)
        session.replace_all_from_text(starter_text())
        return session

    def snapshot(self) -> BoardDocument:
        return BoardDocument(
            records=tuple(self.board.get_all()),
            history=self.board.history,
            settings=self.settings,
            adp=self.auxiliary.adp,
            stats=self.auxiliary.stats,
        )

    def _replace(self, entries: list[ParsedEntry]) -> int:
        if not entries:
            logger.debug("Import produced no players; keeping current board")
            return 0
        self.board.replace_all(entries)
        return len(entries)

    def replace_all_from_text(self, raw_text: str) -> int:
        """Replace the board with pasted lines. Returns the number of players imported."""
        return self._replace(parse_lines(raw_text))

    def replace_all_from_table(self, raw_text: str) -> int:
        """Replace the board with a CSV that has a header row."""
        return self._replace(parse_table(raw_text))

    def merge_auxiliary_data(self, raw_text: str, kind: AuxiliaryKind) -> int:
        return self.auxiliary.merge(kind, raw_text)

    def update_settings(self, **changes: object) -> BoardSettings:
        self.settings = replace(self.settings, **changes)  # type: ignore[arg-type]
        return self.settings

    def category_sequence(self) -> dict[str, int]:
        return self._sequencer(self.board.get_available())

    def grid(self) -> tuple[tuple[GridCell, ...], ...]:
        records = {r.id: r for r in self.board.get_all()}
        return build_grid(self.board.history, records, self.settings)

    def find(self, name_or_id: str) -> EntityRecord | None:
        """Resolve a player by id, then exact name, then a unique name prefix (case-insensitive)."""
        record = self.board.get(name_or_id)
        if record is not None:
            return record
        needle = name_or_id.strip().lower()
        everyone = self.board.get_all()
        exact = [r for r in everyone if r.name.lower() == needle]
        if len(exact) == 1:
            return exact[0]
        prefixed = [r for r in everyone if r.name.lower().startswith(needle)]
        if len(prefixed) == 1:
            return prefixed[0]
        return None


def open_session(repository: BoardRepository, default_settings: BoardSettings | None = None) -> BoardSession:
    """Load the saved board, falling back to the starter list when unavailable."""
    result = repository.load()
    if result.is_err():
        logger.warning("Could not load board %s, using starter list: %s", repository.key, result.unwrap_err())
        return BoardSession.seeded(default_settings)
    document = result.unwrap()
    if document is None:
        return BoardSession.seeded(default_settings)
    return BoardSession.from_document(document)


def save_session(repository: BoardRepository, session: BoardSession) -> bool:
    return repository.save(session.snapshot())
