"""Person Store — PersonRepository implementation over async SQLAlchemy.

Invariants:
    - Every public method maps to exactly one storage round-trip
    - Malformed ids raise StorageError(CAST) before any query runs
    - Missing required fields raise StorageError(VALIDATION) before insert
    - Duplicate names are rejected by the unique constraint (StorageError(CONFLICT))
    - delete_by_id is idempotent: deleting an absent id is not an error

Design Decisions:
    - Explicit lifecycle (connect/close) owned by the application lifespan
    - Uniqueness enforced by the database, not by a find-then-insert pre-check,
      so concurrent creates with the same name cannot both succeed
"""

import logging

from sqlalchemy import delete, func, select

from phonebook.core.domain_types import parse_person_id
from phonebook.core.errors import StorageError, StorageErrorKind
from phonebook.infrastructure.database import DatabaseSessionManager
from phonebook.models.person import Person, REQUIRED_FIELDS

logger = logging.getLogger(__name__)


class PersonStore:
    """Storage client for Person records. Shared by all requests of one app."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        create_schema: bool = True,
    ):
        self.db = DatabaseSessionManager(
            database_url, pool_size=pool_size, max_overflow=max_overflow,
        )
        self._create_schema = create_schema

    async def connect(self) -> None:
        logger.info(f"Connecting to {self.db.safe_url}")
        if self._create_schema:
            await self.db.create_schema()
        logger.info("Connected to database")

    async def close(self) -> None:
        await self.db.dispose()
        logger.info("Database connections closed")

    @property
    def backend(self) -> str:
        """SQL dialect serving the store, e.g. `postgresql` or `sqlite`."""
        return self.db.engine.dialect.name

    async def health_check(self) -> bool:
        return await self.db.health_check()

    # ─── Reads ─────────────────────────────────────────────────────

    async def find_all(self) -> list[dict]:
        async with self.db.session() as session:
            result = await session.execute(select(Person))
            return [p.to_json() for p in result.scalars().all()]

    async def count(self) -> int:
        async with self.db.session() as session:
            result = await session.execute(
                select(func.count()).select_from(Person),
            )
            return result.scalar_one()

    async def find_by_id(self, raw_id: str) -> dict | None:
        person_id = parse_person_id(raw_id)
        async with self.db.session() as session:
            person = await session.get(Person, person_id)
            return person.to_json() if person else None

    # ─── Writes ────────────────────────────────────────────────────

    async def insert(self, name: str | None, number: str | None) -> dict:
        _validate_required({"name": name, "number": number})
        async with self.db.session() as session:
            person = Person(name=name, number=number)
            session.add(person)
            await session.commit()
            logger.info(f"Person {person.id} created")
            return person.to_json()

    async def delete_by_id(self, raw_id: str) -> bool:
        """Delete by id. Returns whether a record was actually removed."""
        person_id = parse_person_id(raw_id)
        async with self.db.session() as session:
            result = await session.execute(
                delete(Person).where(Person.id == person_id),
            )
            await session.commit()
            removed = result.rowcount > 0
            logger.info(f"Person {person_id} delete requested (removed={removed})")
            return removed


def _validate_required(fields: dict) -> None:
    """Reject records missing schema-required fields, naming every missing path."""
    missing = [
        name for name in REQUIRED_FIELDS
        if fields.get(name) is None or fields.get(name) == ""
    ]
    if not missing:
        return
    details = ", ".join(
        f"{name}: Path `{name}` is required." for name in missing
    )
    raise StorageError(
        StorageErrorKind.VALIDATION, f"Person validation failed: {details}",
    )
