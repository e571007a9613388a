"""
Result envelope - Uniform success/failure wrapper returned by workflows.

Both the registration and the confirmation workflows return a
ResultEnvelope so callers have a single shape to branch on.
"""

from dataclasses import dataclass
from http import HTTPStatus
from typing import Generic, TypeVar

T = TypeVar("T")


def status_code(status: HTTPStatus) -> str:
    """Render an HTTP status as "<value> <NAME>", e.g. "201 CREATED"."""
    return f"{status.value} {status.name}"


@dataclass(frozen=True)
class ResultEnvelope(Generic[T]):
    """
    Immutable result of a workflow operation.

    Attributes:
        data: Payload, present only on success
        code: Status code in "<value> <NAME>" form
        message: Human-readable message
    """

    data: T | None
    code: str
    message: str

    @property
    def ok(self) -> bool:
        return self.data is not None

    @property
    def http_status(self) -> int:
        """Numeric status parsed from the code (e.g. 201)."""
        return int(self.code.split(" ", 1)[0])

    @classmethod
    def success(cls, data: T, code: str, message: str) -> "ResultEnvelope[T]":
        return cls(data=data, code=code, message=message)

    @classmethod
    def failure(cls, code: str, message: str) -> "ResultEnvelope[T]":
        return cls(data=None, code=code, message=message)
