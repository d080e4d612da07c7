"""Explicit outcome type returned by every data-access operation."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Why an operation did not succeed."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID = "invalid"
    INACTIVE = "inactive"
    STORE_ERROR = "store_error"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Value-or-error outcome.

    Truthiness follows success, so `if not delete_user(...)` reads like the
    boolean contract callers expect, while `error` tells them why.
    """

    value: T | None = None
    error: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: str = "") -> "Result[T]":
        return cls(error=error, message=message)
