from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from queue import Empty, Full, Queue
from typing import TYPE_CHECKING

from fantasy_draft_board.storage.protocol import StorageError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


class SqliteConnectionPool:
    """Small reusable pool of SQLite connections for one database file."""

    def __init__(self, db_path: Path, max_connections: int = 2) -> None:
        self._db_path = db_path
        self._pool: Queue[sqlite3.Connection] = Queue(maxsize=max_connections)
        self._schema_initialized = False

    def _ensure_initialized(self, conn: sqlite3.Connection) -> None:
        if self._schema_initialized:
            return
        conn.execute(
            "CREATE TABLE IF NOT EXISTS documents ("
            "  namespace TEXT NOT NULL,"
            "  key TEXT NOT NULL,"
            "  value TEXT NOT NULL,"
            "  PRIMARY KEY (namespace, key)"
            ")"
        )
        conn.commit()
        self._schema_initialized = True

    def _create_connection(self) -> sqlite3.Connection:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self._db_path))
        conn.execute("PRAGMA busy_timeout=5000")
        self._ensure_initialized(conn)
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Acquire a connection from the pool, returning it when done."""
        try:
            conn = self._pool.get_nowait()
        except Empty:
            conn = self._create_connection()

        try:
            yield conn
        finally:
            try:
                self._pool.put_nowait(conn)
            except Full:
                conn.close()


class SqliteKeyValueStore:
    """Namespaced string documents in a single SQLite table.

    Any SQLite or filesystem failure surfaces as :class:`StorageError`.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._pool = SqliteConnectionPool(db_path)

    def get(self, namespace: str, key: str) -> str | None:
        try:
            with self._pool.connection() as conn:
                row = conn.execute(
                    "SELECT value FROM documents WHERE namespace = ? AND key = ?",
                    (namespace, key),
                ).fetchone()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Failed to read {namespace}/{key} from {self._db_path}", cause=e) from e
        return None if row is None else row[0]

    def put(self, namespace: str, key: str, value: str) -> None:
        try:
            with self._pool.connection() as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO documents (namespace, key, value) VALUES (?, ?, ?)",
                    (namespace, key, value),
                )
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Failed to write {namespace}/{key} to {self._db_path}", cause=e) from e

    def keys(self, namespace: str) -> list[str]:
        try:
            with self._pool.connection() as conn:
                rows = conn.execute(
                    "SELECT key FROM documents WHERE namespace = ? ORDER BY key", (namespace,)
                ).fetchall()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Failed to list {namespace} in {self._db_path}", cause=e) from e
        return [row[0] for row in rows]
