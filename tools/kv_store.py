"""Key-value storage abstractions and SQLite implementation.

Values are JSON-serialisable structures stored whole under a string key. Reads
of an absent key return ``None``; callers decide what absence means.
"""
from __future__ import annotations

import asyncio
import copy
import json
import re
import sqlite3
from pathlib import Path
from typing import Any, Dict, Optional

from wardrobe_app.errors import StorageError

_TABLE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class KeyValueStore:
    """Asynchronous persistence interface keyed by string."""

    async def get_item(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    async def set_item(self, key: str, value: Any) -> Any:
        raise NotImplementedError

    async def remove_item(self, key: str) -> None:
        raise NotImplementedError


class SQLiteKeyValueStore(KeyValueStore):
    """Local SQLite-backed store holding one JSON document per key."""

    def __init__(self, database_path: str | Path = "data/virtualWardrobe.db", table_name: str = "wardrobe_data") -> None:
        if not _TABLE_NAME_PATTERN.match(table_name):
            raise ValueError(f"Invalid table name '{table_name}'")
        self.database_path = Path(database_path)
        self.table_name = table_name
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self.table_name} (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
                """
            )

    def _read(self, key: str) -> Optional[Any]:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    f"SELECT value FROM {self.table_name} WHERE key = ?",
                    (key,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(key, f"Failed to read from {self.database_path}") from exc
        if row is None:
            return None
        try:
            return json.loads(row["value"])
        except json.JSONDecodeError as exc:
            raise StorageError(key, "Stored value is not valid JSON") from exc

    def _write(self, key: str, value: Any) -> None:
        try:
            body = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StorageError(key, "Value is not JSON serialisable") from exc
        try:
            with self._connect() as conn:
                conn.execute(
                    f"INSERT INTO {self.table_name}(key, value) VALUES (?, ?)\n"
                    "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                    (key, body),
                )
        except sqlite3.Error as exc:
            raise StorageError(key, f"Failed to write to {self.database_path}") from exc

    def _delete(self, key: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute(f"DELETE FROM {self.table_name} WHERE key = ?", (key,))
        except sqlite3.Error as exc:
            raise StorageError(key, f"Failed to delete from {self.database_path}") from exc

    async def get_item(self, key: str) -> Optional[Any]:
        return await asyncio.to_thread(self._read, key)

    async def set_item(self, key: str, value: Any) -> Any:
        await asyncio.to_thread(self._write, key, value)
        return value

    async def remove_item(self, key: str) -> None:
        await asyncio.to_thread(self._delete, key)


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, mainly for tests and throwaway sessions.

    Values are deep-copied on the way in and out so callers cannot mutate the
    stored snapshot.
    """

    def __init__(self, initial: Dict[str, Any] | None = None) -> None:
        self._data: Dict[str, Any] = copy.deepcopy(initial or {})

    async def get_item(self, key: str) -> Optional[Any]:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    async def set_item(self, key: str, value: Any) -> Any:
        self._data[key] = copy.deepcopy(value)
        return value

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)


__all__ = ["KeyValueStore", "SQLiteKeyValueStore", "InMemoryKeyValueStore"]
