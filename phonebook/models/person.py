"""Person ORM — the single persisted entity of the phonebook.

Invariants:
    - id is a UUID primary key assigned on insert, never updated
    - name is unique (storage-level constraint, reported as a CONFLICT StorageError)
    - name and number are required by the schema (checked in PersonStore before flush)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Text, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from phonebook.db.base import Base

# Declared required by the schema, in validation order
REQUIRED_FIELDS = ("name", "number")


class Person(Base):
    __tablename__ = "persons"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        Text, nullable=False, unique=True,
    )
    number: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_json(self) -> dict:
        """Public representation: storage id exposed as a string under `id`."""
        return {"id": str(self.id), "name": self.name, "number": self.number}
