"""
Domain models - Customer, confirmation token and request/response values.
"""

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone

# 32 random bytes, url-safe base64 encoded (43 characters)
TOKEN_BYTES = 32


def normalize_email(email: str) -> str:
    """Strip whitespace and lowercase for consistent storage and lookup."""
    return email.strip().lower()


def generate_token() -> str:
    """Generate an opaque, unguessable confirmation token value."""
    return secrets.token_urlsafe(TOKEN_BYTES)


@dataclass
class Customer:
    """
    Bank customer record.

    Created disabled by registration and enabled exactly once by
    email confirmation. The password is only ever held as a hash.
    """

    name: str
    surname: str
    email: str
    pin: str
    password_hash: str
    enabled: bool = False
    id: int | None = None

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}"


@dataclass
class ConfirmToken:
    """Single-use token linking a pending customer to their email address."""

    token: str
    email: str
    customer_id: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def issue_for(cls, customer: Customer) -> "ConfirmToken":
        """Create a fresh token for a persisted customer."""
        if customer.id is None:
            raise ValueError("Cannot issue a confirm token for an unsaved customer")
        return cls(token=generate_token(), email=customer.email, customer_id=customer.id)


@dataclass(frozen=True)
class CustomerRequest:
    """Registration input as received from the request layer."""

    name: str
    surname: str
    email: str
    pin: str
    password: str

    def __repr__(self) -> str:
        return (
            f"CustomerRequest(name={self.name!r}, surname={self.surname!r}, "
            f"email={self.email!r}, pin={self.pin!r}, password='***')"
        )

    def normalized(self) -> "CustomerRequest":
        return CustomerRequest(
            name=self.name.strip(),
            surname=self.surname.strip(),
            email=normalize_email(self.email),
            pin=self.pin.strip(),
            password=self.password,
        )

    def to_customer(self, password_hash: str) -> Customer:
        """Build a disabled Customer carrying the hashed password."""
        return Customer(
            name=self.name,
            surname=self.surname,
            email=self.email,
            pin=self.pin,
            password_hash=password_hash,
            enabled=False,
        )


@dataclass(frozen=True)
class CreateCustomerResponse:
    """Payload returned by both workflows on success."""

    customer_id: int
