"""
Note Schemas.

Pydantic models for the sticky note, its color palette and the validated
create input. Field aliases match the persisted record layout written by
earlier versions of the board (camelCase keys, hex colors).
"""

import random
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_DESCRIPTION_LENGTH = 120
ROTATION_SPREAD_DEG = 8.0


def random_rotation(rng: random.Random | None = None) -> float:
    """Draw a note tilt uniformly from [-4, 4) degrees."""
    source = rng if rng is not None else random
    return (source.random() - 0.5) * ROTATION_SPREAD_DEG


class NoteColor(str, Enum):
    """The fixed seven-color palette. Values are the persisted hex codes."""

    ROSE = "#D6A99D"
    CREAM = "#FBF3D5"
    SAGE = "#D6DAC8"
    LAVENDER = "#ADB2D4"
    MIST = "#C7D9DD"
    MINT = "#D5E5D5"
    IVORY = "#EEF1DA"

    @classmethod
    def parse(cls, value: "str | NoteColor") -> "NoteColor":
        """Look a color up by name (case-insensitive) or hex value."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        member = cls.__members__.get(text.upper())
        if member is not None:
            return member
        for member in cls:
            if member.value.lower() == text.lower():
                return member
        raise ValueError(f"Unknown note color: {value!r}")


DEFAULT_COLOR = NoteColor.ROSE


class Position(BaseModel):
    """Note position in viewport pixels. (0, 0) means unplaced."""

    x: float = 0.0
    y: float = 0.0

    model_config = ConfigDict(frozen=True)

    @property
    def is_unplaced(self) -> bool:
        return self.x == 0 and self.y == 0

    def translated(self, dx: float, dy: float) -> "Position":
        return Position(x=self.x + dx, y=self.y + dy)


UNPLACED = Position()


class Note(BaseModel):
    """
    A sticky note on the board.

    Every field except position is fixed at creation; position changes go
    through with_position(), which returns a new instance.
    """

    id: int
    description: str = Field(min_length=1, max_length=MAX_DESCRIPTION_LENGTH)
    due_date: date | None = Field(default=None, alias="date")
    color: NoteColor
    created_at: datetime = Field(alias="createdAt")
    rotation_deg: float = Field(default_factory=lambda: random_rotation(), alias="rotation")
    position: Position = UNPLACED

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("color", mode="before")
    @classmethod
    def _parse_color(cls, value: Any) -> NoteColor:
        return NoteColor.parse(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_date_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("created_at", mode="after")
    @classmethod
    def _naive_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @field_validator("rotation_deg", mode="before")
    @classmethod
    def _missing_rotation(cls, value: Any) -> Any:
        return random_rotation() if value is None else value

    @field_validator("position", mode="before")
    @classmethod
    def _missing_position(cls, value: Any) -> Any:
        return UNPLACED if value is None else value

    @property
    def is_unplaced(self) -> bool:
        return self.position.is_unplaced

    def with_position(self, position: Position) -> "Note":
        """Return a copy of this note at a new position."""
        return self.model_copy(update={"position": position})

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted record layout."""
        return self.model_dump(mode="json", by_alias=True)


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    description: str = Field(
        ...,
        min_length=1,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="Note text, trimmed",
        examples=["Buy milk"],
    )
    due_date: date | None = Field(
        default=None,
        description="Optional deadline",
    )
    color: NoteColor = Field(
        default=DEFAULT_COLOR,
        description="Palette color name or hex value",
    )

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("color", mode="before")
    @classmethod
    def _parse_color(cls, value: Any) -> NoteColor:
        return NoteColor.parse(value)
