"""
Domain errors - Failure values for registration and confirmation.

Workflows do not raise for business rule violations. Validation steps
return a Failure describing what went wrong, and the workflow turns it
into a failure envelope at its boundary.
"""

from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus

from .results import ResultEnvelope, status_code

GENERIC_ERROR_MESSAGE = "Internal server error"


class FailureKind(Enum):
    """
    Kinds of failure a workflow can report.

    Client errors:
    - DUPLICATE_EMAIL, DUPLICATE_PIN: registration uniqueness violations
    - TOKEN_NOT_FOUND: unknown, invalid or already consumed token
    - CUSTOMER_NOT_FOUND: token points at a customer that does not exist

    Server errors:
    - UNEXPECTED: store unavailable, mapping error, anything else
    """

    DUPLICATE_EMAIL = "duplicate_email"
    DUPLICATE_PIN = "duplicate_pin"
    TOKEN_NOT_FOUND = "token_not_found"
    CUSTOMER_NOT_FOUND = "customer_not_found"
    UNEXPECTED = "unexpected"

    @property
    def status(self) -> HTTPStatus:
        if self is FailureKind.UNEXPECTED:
            return HTTPStatus.INTERNAL_SERVER_ERROR
        return HTTPStatus.BAD_REQUEST


@dataclass(frozen=True)
class Failure:
    """A failed workflow step with a user-facing message."""

    kind: FailureKind
    message: str

    @property
    def code(self) -> str:
        return status_code(self.kind.status)

    def to_envelope(self) -> ResultEnvelope:
        return ResultEnvelope.failure(self.code, self.message)

    @classmethod
    def duplicate_email(cls, email: str) -> "Failure":
        return cls(FailureKind.DUPLICATE_EMAIL, f"Customer exists by email: {email}")

    @classmethod
    def duplicate_pin(cls, pin: str) -> "Failure":
        return cls(FailureKind.DUPLICATE_PIN, f"Customer exists by pin: {pin}")

    @classmethod
    def token_not_found(cls, token: str) -> "Failure":
        return cls(FailureKind.TOKEN_NOT_FOUND, f"Confirm token not found: {token}")

    @classmethod
    def customer_not_found(cls, email: str) -> "Failure":
        return cls(FailureKind.CUSTOMER_NOT_FOUND, f"Customer not found by email: {email}")

    @classmethod
    def unexpected(cls) -> "Failure":
        # Diagnostic detail goes to the logs only
        return cls(FailureKind.UNEXPECTED, GENERIC_ERROR_MESSAGE)
