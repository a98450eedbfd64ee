"""
Key/Value Entry Model.

Database table behind the SQL store backend: one row per storage key,
holding the serialized value as text.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from toodooist.models.base import Base, TimestampMixin


class KeyValueEntry(TimestampMixin, Base):
    """A single stored value addressed by its key."""

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
    )
    value: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<KeyValueEntry(key={self.key!r}, size={len(self.value)})>"
