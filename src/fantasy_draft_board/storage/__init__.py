from fantasy_draft_board.storage.protocol import KeyValueStore, StorageError
from fantasy_draft_board.storage.sqlite_store import SqliteKeyValueStore

__all__ = ["KeyValueStore", "SqliteKeyValueStore", "StorageError"]
