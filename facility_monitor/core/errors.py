from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    DUPLICATE_IDENTIFIER = "duplicate_identifier"
    NOT_FOUND = "not_found"
    OUT_OF_RANGE = "out_of_range"
    PROTECTED_ENTITY = "protected_entity"
    CORRUPT_RECORD = "corrupt_record"
    IO_FAILURE = "io_failure"
    INVALID_INPUT = "invalid_input"
    PERMISSION_DENIED = "permission_denied"


class StoreError(Exception):
    """Base class for every failure raised or reported by the stores."""

    kind: ErrorKind

    def __init__(self, message: str, entity_id: Optional[int] = None) -> None:
        super().__init__(message)
        self.entity_id = entity_id


class DuplicateIdentifierError(StoreError):
    kind = ErrorKind.DUPLICATE_IDENTIFIER


class NotFoundError(StoreError):
    kind = ErrorKind.NOT_FOUND


class OutOfRangeError(StoreError):
    kind = ErrorKind.OUT_OF_RANGE


class ProtectedEntityError(StoreError):
    kind = ErrorKind.PROTECTED_ENTITY


class CorruptRecordError(StoreError):
    kind = ErrorKind.CORRUPT_RECORD


class IOFailureError(StoreError):
    kind = ErrorKind.IO_FAILURE


class InvalidInputError(StoreError, ValueError):
    kind = ErrorKind.INVALID_INPUT


class PermissionDeniedError(StoreError):
    kind = ErrorKind.PERMISSION_DENIED
