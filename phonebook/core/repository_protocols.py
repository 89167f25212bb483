"""Boundary Protocols — contract between the routes and the storage layer.

Invariants:
    - Routes depend on PersonRepository, never on a concrete store
    - Every method may raise StorageError; no other exception type is part of the contract
    - Records cross the boundary as plain dicts: {"id": str, "name": str, "number": str}

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from typing import Protocol


class PersonRepository(Protocol):
    """Contract for person persistence — implemented by infrastructure/person_store.py."""
    async def find_all(self) -> list[dict]: ...
    async def count(self) -> int: ...
    async def find_by_id(self, raw_id: str) -> dict | None: ...
    async def insert(self, name: str | None, number: str | None) -> dict: ...
    async def delete_by_id(self, raw_id: str) -> bool: ...
