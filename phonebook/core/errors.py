"""Error Hierarchy — typed failures for the storage layer and the API surface.

Invariants:
    - StorageError is raised only by the storage layer and always carries a StorageErrorKind
    - Every PhonebookError has a code (str) and an http_status
    - to_response() produces the flat REST envelope {"error": message}
    - No driver internals leaked in user-facing messages

Design Decisions:
    - Error kind is an Enum tag, matched exhaustively in api/error_handlers.py
      (no string comparison on exception class names)
"""

from enum import Enum


class StorageErrorKind(str, Enum):
    """Failure kinds the storage layer can report."""
    CAST = "cast"                # identifier cannot be read as a storage key
    VALIDATION = "validation"    # record violates the declared schema
    CONFLICT = "conflict"        # unique constraint violated
    UNAVAILABLE = "unavailable"  # connectivity, driver or unclassified failure


class StorageError(Exception):
    """Failure raised by PersonStore / DatabaseSessionManager."""

    def __init__(self, kind: StorageErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"StorageError(kind={self.kind.value!r}, message={self.message!r})"


class PhonebookError(Exception):
    """Base exception for application-level errors with a fixed HTTP mapping."""

    def __init__(self, message: str, code: str, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.message}


class MalformedIdError(PhonebookError):
    def __init__(self):
        super().__init__("malformatted id", "MALFORMED_ID", 400)


class PersonValidationError(PhonebookError):
    def __init__(self, message: str):
        super().__init__(message, "VALIDATION_ERROR", 400)


class DuplicateNameError(PhonebookError):
    def __init__(self):
        super().__init__("name must be unique", "DUPLICATE_NAME", 400)


class UnknownEndpointError(PhonebookError):
    def __init__(self):
        super().__init__("unknown endpoint", "UNKNOWN_ENDPOINT", 404)
