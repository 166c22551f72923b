"""
Result type shared by every use case.

A use case never raises for an expected failure; it returns ``Return.err``
with an ``Error`` whose ``kind`` tells the transport layer how to answer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Discriminates failures independently of their message or code"""

    unauthorized = "unauthorized"
    forbidden = "forbidden"
    conflict = "conflict"
    not_found = "not_found"
    validation = "validation"
    service_unavailable = "service_unavailable"
    too_many_requests = "too_many_requests"
    internal = "internal"


@dataclass(frozen=True)
class Error:
    code: str
    message: str
    kind: ErrorKind = ErrorKind.internal


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[Error] = None

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None


class Return:
    @staticmethod
    def ok(value: T) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result:
        return Result(error=error)
