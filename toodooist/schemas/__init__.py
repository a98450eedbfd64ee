# Pydantic schemas package
from toodooist.schemas.note import (
    DEFAULT_COLOR,
    MAX_DESCRIPTION_LENGTH,
    UNPLACED,
    Note,
    NoteColor,
    NoteCreate,
    Position,
)

__all__ = [
    "DEFAULT_COLOR",
    "MAX_DESCRIPTION_LENGTH",
    "UNPLACED",
    "Note",
    "NoteColor",
    "NoteCreate",
    "Position",
]
