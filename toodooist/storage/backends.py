"""
Key/Value Backends.

Durable string stores behind the note store. Every backend exposes the same
two operations, read and write, and maps its native failures onto
StoreReadError / WriteFailureError so callers never see driver exceptions.

Backends:
    MemoryBackend - in-process dict, optional byte quota (tests, ephemeral boards)
    FileBackend   - one UTF-8 file per key, written atomically
    SqlBackend    - SQLAlchemy table kv_entries (SQLite by default)
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from toodooist.core.exceptions import StoreReadError, WriteFailureError
from toodooist.core.logging import get_logger
from toodooist.models.base import Base
from toodooist.models.kv_entry import KeyValueEntry

logger = get_logger(__name__)


class KeyValueBackend(ABC):
    """
    Base class for all key/value backends.

    Values are opaque strings; the note store owns the serialization.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short backend identifier used in logs."""
        ...

    @abstractmethod
    def read(self, key: str) -> str | None:
        """
        Return the value stored under key, or None when absent.

        Raises:
            StoreReadError: If the backend cannot be read
        """
        ...

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """
        Store value under key, replacing any previous value.

        Raises:
            WriteFailureError: If the backend rejects the write
        """
        ...


class MemoryBackend(KeyValueBackend):
    """In-process store. quota_bytes caps the total UTF-8 size of all values."""

    def __init__(self, quota_bytes: int | None = None) -> None:
        self._entries: dict[str, str] = {}
        self.quota_bytes = quota_bytes

    @property
    def name(self) -> str:
        return "memory"

    def read(self, key: str) -> str | None:
        return self._entries.get(key)

    def write(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            used = sum(
                len(stored.encode("utf-8"))
                for stored_key, stored in self._entries.items()
                if stored_key != key
            )
            if used + len(value.encode("utf-8")) > self.quota_bytes:
                raise WriteFailureError(
                    f"Storage quota of {self.quota_bytes} bytes exceeded"
                )
        self._entries[key] = value


class FileBackend(KeyValueBackend):
    """Stores each key as <directory>/<key>.json."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    @property
    def name(self) -> str:
        return "file"

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error("File read failed", extra={"path": str(path), "error": str(e)})
            raise StoreReadError(f"Cannot read {path}") from e

    def write(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error("File write failed", extra={"path": str(path), "error": str(e)})
            raise WriteFailureError(f"Cannot write {path}") from e


class SqlBackend(KeyValueBackend):
    """
    Stores values in the kv_entries table.

    The schema is created lazily on first access so constructing the
    backend never touches the database.
    """

    def __init__(self, url: str | None = None, engine: Engine | None = None) -> None:
        if engine is None and url is None:
            raise ValueError("SqlBackend needs a database URL or an engine")
        self._engine = engine if engine is not None else create_engine(url)
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)
        self._schema_ready = False

    @property
    def name(self) -> str:
        return "sql"

    @property
    def engine(self) -> Engine:
        return self._engine

    def _ensure_schema(self) -> None:
        if not self._schema_ready:
            Base.metadata.create_all(self._engine)
            self._schema_ready = True

    def read(self, key: str) -> str | None:
        try:
            self._ensure_schema()
            with self._session_factory() as session:
                entry = session.get(KeyValueEntry, key)
                return entry.value if entry is not None else None
        except SQLAlchemyError as e:
            logger.error("Database read failed", extra={"key": key, "error": str(e)})
            raise StoreReadError(f"Cannot read key {key!r}") from e

    def write(self, key: str, value: str) -> None:
        try:
            self._ensure_schema()
            with self._session_factory.begin() as session:
                entry = session.get(KeyValueEntry, key)
                if entry is None:
                    session.add(KeyValueEntry(key=key, value=value))
                else:
                    entry.value = value
        except SQLAlchemyError as e:
            logger.error("Database write failed", extra={"key": key, "error": str(e)})
            raise WriteFailureError(f"Cannot write key {key!r}") from e

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()
