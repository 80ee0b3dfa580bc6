"""
Error kinds and the result type returned by engine mutators.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AVAILABILITY = "availability"
    CAPACITY = "capacity"
    PERSISTENCE = "persistence"


class EngineError(Exception):
    """Base class for every error the engine reports."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EngineError):
    """Malformed input: empty name or description, bad estimate, bad deadline."""

    kind = ErrorKind.VALIDATION


class NotFoundError(EngineError):
    """Unknown worker or task id."""

    kind = ErrorKind.NOT_FOUND


class AvailabilityError(EngineError):
    """Assignment to a worker that is marked unavailable."""

    kind = ErrorKind.AVAILABILITY


class CapacityError(EngineError):
    """Assignment would push a worker past the daily ceiling."""

    kind = ErrorKind.CAPACITY


class PersistenceError(EngineError):
    """Snapshot could not be saved or loaded."""

    kind = ErrorKind.PERSISTENCE


@dataclass
class Result(Generic[T]):
    """
    Outcome of an engine mutation.

    `error` is set when the operation was rejected and nothing changed.
    `save_error` is set when the operation succeeded in memory but the
    snapshot could not be written; the mutation stays applied.
    """

    value: Optional[T] = None
    error: Optional[EngineError] = None
    save_error: Optional[PersistenceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value, raising the error if the operation was rejected."""
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: EngineError) -> "Result[T]":
        return cls(error=error)
