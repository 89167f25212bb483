"""Database Session Manager — SQLAlchemy error classification into StorageError kinds."""

import pytest
from sqlalchemy.exc import DataError, IntegrityError, OperationalError

from phonebook.core.errors import StorageError, StorageErrorKind
from phonebook.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def manager():
    db = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    yield db
    await db.dispose()


@pytest.mark.parametrize(
    "raised, kind",
    [
        (IntegrityError("INSERT", {}, Exception("UNIQUE")), StorageErrorKind.CONFLICT),
        (
            DataError("INSERT", {}, Exception("value too long for type")),
            StorageErrorKind.VALIDATION,
        ),
        (OperationalError("SELECT", {}, Exception("gone")), StorageErrorKind.UNAVAILABLE),
    ],
)
async def test_sqlalchemy_errors_classified(manager, raised, kind):
    with pytest.raises(StorageError) as exc_info:
        async with manager.session():
            raise raised
    assert exc_info.value.kind is kind


async def test_data_error_message_names_the_rejected_value(manager):
    with pytest.raises(StorageError) as exc_info:
        async with manager.session():
            raise DataError("INSERT", {}, Exception("value too long for type text"))
    assert exc_info.value.message == (
        "Person validation failed: value too long for type text"
    )


async def test_storage_error_passes_through_unchanged(manager):
    original = StorageError(StorageErrorKind.CAST, "bad id")
    with pytest.raises(StorageError) as exc_info:
        async with manager.session():
            raise original
    assert exc_info.value is original
