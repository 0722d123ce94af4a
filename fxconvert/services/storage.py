"""Key/value storage backends for the rate cache.

The cache only ever needs three operations on string keys, so storage is
hidden behind a tiny protocol. ``SqliteStore`` persists across restarts using
the ``metadata`` table; ``InMemoryStore`` lives for the process and is what
the tests use.
"""

from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Dict, Optional, Protocol

from fxconvert.core.config import Settings
from fxconvert.db.schema import UPSERT_SQL, init_db


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class SqliteStore:
    def __init__(self, db_path: Path):
        self.db_path = db_path
        init_db(db_path)

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def get(self, key: str) -> Optional[str]:
        with closing(self._connect()) as conn:
            row = conn.execute(
                "SELECT value FROM metadata WHERE key=?", (key,)
            ).fetchone()
            return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with closing(self._connect()) as conn, conn:
            conn.execute(UPSERT_SQL, (key, value))

    def remove(self, key: str) -> None:
        with closing(self._connect()) as conn, conn:
            conn.execute("DELETE FROM metadata WHERE key=?", (key,))


def build_store(settings: Settings) -> KeyValueStore:
    if settings.storage_backend == "memory":
        return InMemoryStore()
    if settings.db_path is None:
        settings.init_post_load()
    return SqliteStore(settings.db_path)  # type: ignore[arg-type]
