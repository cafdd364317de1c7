"""
Persistent key-value stores.

The pricing store only needs get(key) -> Optional[str] and set(key, value).
Reads never raise: a missing or unreadable value is None.
"""

import os
import re
from pathlib import Path
from typing import Optional, Protocol
import structlog

from exceptions import DatabaseError

logger = structlog.get_logger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class KeyValueStore(Protocol):
    """String key-value store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Process-local store. Used by tests and the "memory" backend."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKeyValueStore:
    """
    One file per key under a directory.

    Writes go to a temp file first and are moved into place with
    os.replace(), so a crash never leaves a half-written value behind.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("kv_file_read_failed", path=str(path), error=str(e))
            return None

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error("kv_file_write_failed", path=str(path), error=str(e))
            raise DatabaseError("write", str(e), {"key": key})
        logger.debug("kv_file_written", path=str(path), size=len(value))


class SupabaseKeyValueStore:
    """
    Rows of a Supabase table with "key" and "value" columns.

    Schema:
        create table kv_store (key text primary key, value text not null,
                               updated_at timestamptz default now());
    """

    def __init__(self, client, table: str = "kv_store"):
        self.db = client
        self.table = table

    def get(self, key: str) -> Optional[str]:
        try:
            result = (
                self.db.table(self.table)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.warning("kv_supabase_read_failed", key=key, error=str(e))
            return None

        if not result.data:
            return None
        value = result.data[0].get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            (
                self.db.table(self.table)
                .upsert({"key": key, "value": value}, on_conflict="key")
                .execute()
            )
        except Exception as e:
            logger.error("kv_supabase_write_failed", key=key, error=str(e))
            raise DatabaseError("upsert", str(e), {"key": key})


def create_key_value_store(backend: str, storage_dir: str = "data", table: str = "kv_store") -> KeyValueStore:
    """
    Build the store for a configured backend name.

    Args:
        backend: "file", "supabase" or "memory"
        storage_dir: Directory for the file backend
        table: Table for the supabase backend

    Raises:
        ValueError: Unknown backend
    """
    if backend == "file":
        return JsonFileKeyValueStore(storage_dir)
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "supabase":
        from config.database import get_supabase_client
        return SupabaseKeyValueStore(get_supabase_client(), table)
    raise ValueError(f"Unknown storage backend: {backend}")
