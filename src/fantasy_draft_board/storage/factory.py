from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from fantasy_draft_board.storage.repository import BoardRepository
from fantasy_draft_board.storage.sqlite_store import SqliteKeyValueStore

if TYPE_CHECKING:
    from fantasy_draft_board.config import AppConfig


def create_store(config: AppConfig | None = None) -> SqliteKeyValueStore:
    """Build a SqliteKeyValueStore from the app config's ``storage.db_path``."""
    if config is None:
        from fantasy_draft_board.config import create_config

        config = create_config()
    db_path = Path(str(config["storage.db_path"])).expanduser()
    return SqliteKeyValueStore(db_path)


def create_repository(config: AppConfig | None = None) -> BoardRepository:
    if config is None:
        from fantasy_draft_board.config import create_config

        config = create_config()
    return BoardRepository(
        create_store(config),
        namespace=str(config["storage.namespace"]),
        key=str(config["storage.key"]),
    )
