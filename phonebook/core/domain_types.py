"""Domain Types — identity types shared by the storage layer and the routes.

Invariants:
    - PersonId wraps a UUID; raw client strings become PersonId only via parse_person_id
"""

from typing import NewType
from uuid import UUID

from phonebook.core.errors import StorageError, StorageErrorKind


PersonId = NewType("PersonId", UUID)


def parse_person_id(raw: str) -> PersonId:
    """Interpret a client-supplied id as a storage key or raise a CAST StorageError."""
    try:
        return PersonId(UUID(raw))
    except (ValueError, TypeError, AttributeError):
        raise StorageError(
            StorageErrorKind.CAST,
            f'Cast to UUID failed for value "{raw}" at path "id" for model "Person"',
        )
