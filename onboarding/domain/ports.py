"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from collections.abc import Callable
from types import TracebackType
from typing import Any, Protocol

from .models import ConfirmToken, Customer


class CustomerRepository(Protocol):
    """Port interface for customer persistence."""

    def find_by_email(self, email: str) -> Customer | None:
        """Return the customer registered with this email, if any."""
        ...

    def find_by_pin(self, pin: str) -> Customer | None:
        """Return the customer registered with this pin, if any."""
        ...

    def add(self, customer: Customer) -> Customer | None:
        """
        Persist a new customer and assign its id.

        The store enforces uniqueness of email and pin at write time,
        independently of any pre-check done by the caller.

        Returns:
            The saved customer with its id set, or None if a uniqueness
            constraint rejected the row
        """
        ...

    def enable(self, customer: Customer) -> None:
        """Mark the customer as enabled."""
        ...


class ConfirmTokenRepository(Protocol):
    """Port interface for confirmation token persistence."""

    def add(self, token: ConfirmToken) -> ConfirmToken:
        """Persist a new token."""
        ...

    def find_by_token(self, value: str) -> ConfirmToken | None:
        """Return the token with this value, if it still exists."""
        ...

    def delete(self, token: ConfirmToken) -> bool:
        """
        Delete the token.

        Returns:
            True if this call removed the token, False if it was already gone
        """
        ...


class UnitOfWork(Protocol):
    """
    Atomic unit spanning customer and token writes.

    Used as a context manager. Changes become visible to other units only
    after commit(); leaving the block without committing rolls back.
    """

    customers: CustomerRepository
    tokens: ConfirmTokenRepository

    def __enter__(self) -> "UnitOfWork": ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    def commit(self) -> None:
        """
        Make all changes of this unit durable.

        Raises:
            IntegrityError-like adapter exception if a constraint fails at commit
        """
        ...


UnitOfWorkFactory = Callable[[], UnitOfWork]


class PasswordEncoder(Protocol):
    """Port interface for one-way password hashing."""

    def encode(self, plaintext: str) -> str:
        """Return a one-way hash of the password."""
        ...


class Notifier(Protocol):
    """Port interface for confirmation message delivery."""

    def send_confirmation(self, to_email: str, html_body: str) -> None:
        """
        Send the confirmation message.

        Raises on delivery failure.

        Args:
            to_email: Recipient email address
            html_body: HTML body containing the activation link
        """
        ...


class TaskDispatcher(Protocol):
    """Port interface for fire-and-forget background work."""

    def submit(self, fn: Callable[..., Any], *args: Any) -> None:
        """Schedule fn(*args) without waiting for it or its outcome."""
        ...
