"""Root conftest — shared test configuration.

Invariants:
    - Every test gets a fresh in-memory SQLite person store
    - The module-level app in phonebook.main never points at a real database
"""

import os

# Must be set before phonebook.main is imported (it builds the module-level app)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402

from phonebook.infrastructure.person_store import PersonStore  # noqa: E402


@pytest.fixture
async def store():
    person_store = PersonStore("sqlite+aiosqlite:///:memory:")
    await person_store.connect()
    yield person_store
    await person_store.close()
