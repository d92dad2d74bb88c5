from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fantasy_draft_board.result import Err, Ok
from fantasy_draft_board.storage.document import decode_document, encode_document
from fantasy_draft_board.storage.protocol import StorageError

if TYPE_CHECKING:
    from fantasy_draft_board.board.models import BoardDocument
    from fantasy_draft_board.storage.protocol import KeyValueStore

logger = logging.getLogger(__name__)


class BoardRepository:
    """Reads and writes one board document under ``namespace/key``."""

    def __init__(self, store: KeyValueStore, namespace: str = "board", key: str = "default") -> None:
        self._store = store
        self._namespace = namespace
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> Ok[BoardDocument | None] | Err[StorageError]:
        """Fetch the stored board; ``Ok(None)`` when nothing has been saved yet."""
        try:
            raw = self._store.get(self._namespace, self._key)
            if raw is None:
                return Ok(None)
            return Ok(decode_document(raw))
        except StorageError as e:
            return Err(e)

    def save(self, document: BoardDocument) -> bool:
        """Persist the board. Failures are logged and reported, never raised."""
        try:
            self._store.put(self._namespace, self._key, encode_document(document))
        except StorageError as e:
            logger.warning("Failed to save board %s: %s", self._key, e)
            return False
        return True

    def list_keys(self) -> list[str]:
        try:
            return self._store.keys(self._namespace)
        except StorageError as e:
            logger.warning("Failed to list boards: %s", e)
            return []
