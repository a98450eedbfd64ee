"""
Store Factory.

Builds the configured backend and note store from storage.yaml.
"""

from toodooist.core.config import get_app_config, resolve_project_path
from toodooist.core.config_schema import StorageSchema
from toodooist.core.logging import get_logger
from toodooist.storage.backends import FileBackend, KeyValueBackend, MemoryBackend, SqlBackend
from toodooist.storage.note_store import NoteStore

logger = get_logger(__name__)


def create_backend(storage: StorageSchema) -> KeyValueBackend:
    """Instantiate the backend named in the storage settings."""
    if storage.backend == "memory":
        return MemoryBackend()

    if storage.backend == "sqlite":
        db_path = resolve_project_path(storage.database_file)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Using SQLite store", extra={"path": str(db_path)})
        return SqlBackend(f"sqlite:///{db_path}")

    directory = resolve_project_path(storage.directory)
    logger.debug("Using file store", extra={"directory": str(directory)})
    return FileBackend(directory)


def get_note_store(storage: StorageSchema | None = None) -> NoteStore:
    """Create a note store from explicit settings or the application config."""
    storage = storage or get_app_config().storage
    return NoteStore(create_backend(storage), key=storage.key)
