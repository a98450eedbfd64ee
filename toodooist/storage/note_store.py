"""
Note Store.

Persistent store adapter: serializes the whole note collection to JSON under
one well-known key of a key/value backend.

Records written before rotation or position existed load with a freshly
drawn rotation and the unplaced position.
"""

from collections.abc import Sequence

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from toodooist.core.exceptions import CorruptDataError
from toodooist.core.logging import get_logger
from toodooist.schemas.note import Note
from toodooist.storage.backends import KeyValueBackend

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "toodooist_data"

_NOTE_LIST = TypeAdapter(list[Note])


class NoteStore:
    """Loads and saves the note collection through a key/value backend."""

    def __init__(self, backend: KeyValueBackend, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.backend = backend
        self.key = key

    def load(self) -> list[Note]:
        """
        Load every stored note, in stored order.

        Returns:
            The stored notes; empty when nothing has been saved yet

        Raises:
            CorruptDataError: If the stored value is not a valid note list
            StoreReadError: If the backend cannot be read
        """
        raw = self.backend.read(self.key)
        if raw is None or not raw.strip():
            return []

        try:
            notes = _NOTE_LIST.validate_json(raw)
        except PydanticValidationError as e:
            raise CorruptDataError(
                f"Stored notes under {self.key!r} are unreadable ({e.error_count()} errors)"
            ) from e

        return self._drop_duplicate_ids(notes)

    def save(self, notes: Sequence[Note]) -> None:
        """
        Persist the full collection, replacing what was stored.

        Raises:
            WriteFailureError: If the backend rejects the write
        """
        payload = _NOTE_LIST.dump_json(list(notes), by_alias=True).decode("utf-8")
        self.backend.write(self.key, payload)
        logger.debug(
            "Notes saved",
            extra={"backend": self.backend.name, "key": self.key, "count": len(notes)},
        )

    def _drop_duplicate_ids(self, notes: list[Note]) -> list[Note]:
        seen: set[int] = set()
        unique: list[Note] = []
        for note in notes:
            if note.id in seen:
                logger.warning(
                    "Duplicate note id in stored data, keeping first",
                    extra={"note_id": note.id, "key": self.key},
                )
                continue
            seen.add(note.id)
            unique.append(note)
        return unique
