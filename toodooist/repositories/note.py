"""
Note Repository.

Owns the canonical in-memory note collection and keeps the persistent store
in sync: every mutation saves the whole collection before returning.

Outcomes are returned, not raised. A failed save is reported as UNSAVED;
the in-memory change stays in place and the next successful save catches
the store up.
"""

import random
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from pydantic import ValidationError as PydanticValidationError

from toodooist.core.exceptions import (
    ApplicationError,
    CorruptDataError,
    StoreReadError,
    ValidationError,
    WriteFailureError,
)
from toodooist.core.logging import get_logger, log_with_source
from toodooist.core.utils import epoch_millis, utc_now
from toodooist.schemas.note import (
    DEFAULT_COLOR,
    UNPLACED,
    Note,
    NoteColor,
    NoteCreate,
    Position,
    random_rotation,
)
from toodooist.storage.note_store import NoteStore

logger = get_logger(__name__)

NotesListener = Callable[[tuple[Note, ...]], None]

ID_JITTER = 1000


class Outcome(str, Enum):
    """Result of a repository mutation."""

    SAVED = "saved"
    UNSAVED = "unsaved"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a mutation plus the affected note and any error."""

    outcome: Outcome
    note: Note | None = None
    error: ApplicationError | None = None

    @property
    def found(self) -> bool:
        return self.outcome in (Outcome.SAVED, Outcome.UNSAVED)

    @property
    def saved(self) -> bool:
        return self.outcome is Outcome.SAVED


class NoteRepository:
    """
    Repository for the board's notes.

    Collection order is insertion order. All mutation goes through
    create, delete and update_position.
    """

    def __init__(
        self,
        store: NoteStore,
        clock: Callable[[], datetime] = utc_now,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._rng = rng or random.Random()
        self._notes: list[Note] = []
        self._listeners: list[NotesListener] = []
        self.last_save_error: WriteFailureError | None = None

    def __len__(self) -> int:
        return len(self._notes)

    def load(self) -> int:
        """
        Replace the collection with the stored notes.

        Unreadable or corrupt storage is logged and treated as an empty
        board; it never propagates.

        Returns:
            Number of notes loaded
        """
        try:
            notes = self._store.load()
        except (CorruptDataError, StoreReadError) as e:
            log_with_source(
                logger, "storage", "warning",
                "Stored notes unusable, starting with an empty board",
                code=e.code, error=e.message,
            )
            notes = []

        self._notes = list(notes)
        logger.info("Notes loaded", extra={"count": len(self._notes)})
        self._publish()
        return len(self._notes)

    def list(self) -> tuple[Note, ...]:
        """Snapshot of all notes in insertion order."""
        return tuple(self._notes)

    def get(self, note_id: int) -> Note | None:
        """Get a note by id, or None if absent."""
        index = self._index_of(note_id)
        return self._notes[index] if index is not None else None

    def create(
        self,
        description: str,
        due_date: date | None = None,
        color: NoteColor | str = DEFAULT_COLOR,
    ) -> MutationResult:
        """
        Create a note and append it to the board.

        Args:
            description: Note text; trimmed, 1 to 120 characters
            due_date: Optional deadline
            color: Palette color, by enum, name or hex

        Returns:
            SAVED or UNSAVED result carrying the new note

        Raises:
            ValidationError: If the input is invalid. Nothing is created.
        """
        try:
            data = NoteCreate(description=description, due_date=due_date, color=color)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid note input",
                details={
                    ".".join(str(part) for part in err["loc"]): err["msg"]
                    for err in e.errors()
                },
            ) from e

        created_at = self._clock()
        note = Note(
            id=self._new_id(created_at),
            description=data.description,
            due_date=data.due_date,
            color=data.color,
            created_at=created_at,
            rotation_deg=random_rotation(self._rng),
            position=UNPLACED,
        )
        self._notes.append(note)
        logger.info("Note created", extra={"note_id": note.id, "color": note.color.name})
        return self._commit(note)

    def delete(self, note_id: int) -> MutationResult:
        """
        Remove a note.

        Returns:
            NOT_FOUND if no such note, otherwise SAVED/UNSAVED with the removed note
        """
        index = self._index_of(note_id)
        if index is None:
            logger.debug("Delete skipped, note already gone", extra={"note_id": note_id})
            return MutationResult(Outcome.NOT_FOUND)

        removed = self._notes.pop(index)
        logger.info("Note deleted", extra={"note_id": note_id})
        return self._commit(removed)

    def update_position(self, note_id: int, position: Position) -> MutationResult:
        """
        Move a note. Only the position field changes.

        Returns:
            NOT_FOUND if no such note, otherwise SAVED/UNSAVED with the moved note
        """
        index = self._index_of(note_id)
        if index is None:
            logger.debug("Move skipped, note not found", extra={"note_id": note_id})
            return MutationResult(Outcome.NOT_FOUND)

        moved = self._notes[index].with_position(position)
        self._notes[index] = moved
        logger.info(
            "Note moved",
            extra={"note_id": note_id, "x": position.x, "y": position.y},
        )
        return self._commit(moved)

    def subscribe(self, listener: NotesListener) -> Callable[[], None]:
        """
        Register a listener for the published note list.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, note: Note) -> MutationResult:
        try:
            self._store.save(self._notes)
        except WriteFailureError as e:
            self.last_save_error = e
            log_with_source(
                logger, "storage", "error",
                "Save failed, keeping unsaved changes in memory",
                code=e.code, error=e.message, count=len(self._notes),
            )
            self._publish()
            return MutationResult(Outcome.UNSAVED, note=note, error=e)

        self.last_save_error = None
        self._publish()
        return MutationResult(Outcome.SAVED, note=note)

    def _publish(self) -> None:
        snapshot = self.list()
        for listener in list(self._listeners):
            listener(snapshot)

    def _index_of(self, note_id: int) -> int | None:
        for index, note in enumerate(self._notes):
            if note.id == note_id:
                return index
        return None

    def _new_id(self, created_at: datetime) -> int:
        existing = {note.id for note in self._notes}
        base = epoch_millis(created_at)
        candidate = base + self._rng.randrange(ID_JITTER)
        while candidate in existing:
            candidate = base + self._rng.randrange(ID_JITTER)
            base += 1
        return candidate
