"""
Result wrapper returned by domain services.

A ServiceResult is either a success carrying data, or a failure carrying a
non-empty list of human-readable messages and the kind of failure.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories understood by the transport layer."""
    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    UPSTREAM = "upstream"


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Success value XOR list of error messages.

    Build instances with ServiceResult.ok() and ServiceResult.fail().
    """
    data: Optional[T] = None
    errors: list[str] = field(default_factory=list)
    kind: Optional[ErrorKind] = None

    def __post_init__(self) -> None:
        if self.errors and self.kind is None:
            raise ValueError("A failed result needs an error kind")
        if self.kind is not None and not self.errors:
            raise ValueError("A failed result needs at least one error message")

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "ServiceResult[T]":
        """Successful result, optionally without payload."""
        return cls(data=data)

    @classmethod
    def fail(cls, kind: ErrorKind, *messages: str) -> "ServiceResult[T]":
        """Failed result with one or more messages."""
        return cls(errors=list(messages), kind=kind)

    @property
    def has_errors(self) -> bool:
        """Whether the operation failed."""
        return bool(self.errors)
