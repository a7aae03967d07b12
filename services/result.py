"""
Outcome type shared by every service.

Services report domain failures (missing rows, rejected input, broken
invariants) as a failed ``Result`` instead of raising. Persistence errors
are not translated; they propagate to the app-level exception handler.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INVARIANT = "invariant"


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=ServiceError(kind=kind, message=message))

    @classmethod
    def not_found(cls, message: str) -> "Result[T]":
        return cls.failure(ErrorKind.NOT_FOUND, message)
