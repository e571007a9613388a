"""
In-memory repository adapter - Implements the persistence ports in-process.

Used for local development (REPOSITORY_BACKEND=memory) and tests. The
store mirrors the guarantees the PostgreSQL adapter gets from the
database:

- Writes are staged per unit of work and become visible only on commit.
- Inserting a customer reserves its email and pin immediately. A second
  unit inserting the same key waits until the first commits or rolls
  back, then fails if the key was committed (like ON CONFLICT DO NOTHING).
- Deleting a token claims it, so two units cannot both consume it.
"""

import itertools
import logging
import threading
from dataclasses import replace
from types import TracebackType

from onboarding.domain.models import ConfirmToken, Customer

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Committed state shared by all units of work."""

    def __init__(self) -> None:
        self.cond = threading.Condition()
        self.customers: dict[int, Customer] = {}
        self.ids_by_email: dict[str, int] = {}
        self.ids_by_pin: dict[str, int] = {}
        self.tokens: dict[str, ConfirmToken] = {}
        # key -> owning unit of work, for uncommitted inserts/deletes
        self.reserved_emails: dict[str, object] = {}
        self.reserved_pins: dict[str, object] = {}
        self.claimed_tokens: dict[str, object] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    def unit_of_work(self) -> "InMemoryUnitOfWork":
        """UnitOfWorkFactory bound to this store."""
        return InMemoryUnitOfWork(self)

    def list_customers(self) -> list[Customer]:
        """Snapshot of committed customers, ordered by id."""
        with self.cond:
            return [replace(c) for _, c in sorted(self.customers.items())]

    def list_tokens(self) -> list[ConfirmToken]:
        """Snapshot of committed tokens."""
        with self.cond:
            return [replace(t) for t in self.tokens.values()]


class InMemoryCustomerRepository:
    """Implements CustomerRepository protocol for one unit of work."""

    def __init__(self, store: InMemoryStore, unit: "InMemoryUnitOfWork") -> None:
        self._store = store
        self._unit = unit

    def find_by_email(self, email: str) -> Customer | None:
        with self._store.cond:
            for staged in self._unit.new_customers:
                if staged.email == email:
                    return replace(staged)
            customer_id = self._store.ids_by_email.get(email)
            return self._load(customer_id)

    def find_by_pin(self, pin: str) -> Customer | None:
        with self._store.cond:
            for staged in self._unit.new_customers:
                if staged.pin == pin:
                    return replace(staged)
            customer_id = self._store.ids_by_pin.get(pin)
            return self._load(customer_id)

    def add(self, customer: Customer) -> Customer | None:
        store = self._store
        with store.cond:
            store.cond.wait_for(lambda: not self._held_by_other(customer))
            if customer.email in store.ids_by_email or customer.pin in store.ids_by_pin:
                return None
            store.reserved_emails[customer.email] = self._unit
            store.reserved_pins[customer.pin] = self._unit
            customer.id = store.next_id()
            self._unit.new_customers.append(replace(customer))
        return customer

    def enable(self, customer: Customer) -> None:
        self._unit.enabled_ids.add(customer.id)
        customer.enabled = True

    def _held_by_other(self, customer: Customer) -> bool:
        email_owner = self._store.reserved_emails.get(customer.email, self._unit)
        pin_owner = self._store.reserved_pins.get(customer.pin, self._unit)
        return email_owner is not self._unit or pin_owner is not self._unit

    def _load(self, customer_id: int | None) -> Customer | None:
        if customer_id is None:
            return None
        customer = replace(self._store.customers[customer_id])
        if customer_id in self._unit.enabled_ids:
            customer.enabled = True
        return customer


class InMemoryConfirmTokenRepository:
    """Implements ConfirmTokenRepository protocol for one unit of work."""

    def __init__(self, store: InMemoryStore, unit: "InMemoryUnitOfWork") -> None:
        self._store = store
        self._unit = unit

    def add(self, token: ConfirmToken) -> ConfirmToken:
        with self._store.cond:
            if token.token in self._store.tokens or token.token in self._unit.new_tokens:
                raise ValueError("Duplicate confirm token value")
            self._unit.new_tokens[token.token] = replace(token)
        return token

    def find_by_token(self, value: str) -> ConfirmToken | None:
        if value in self._unit.deleted_tokens:
            return None
        with self._store.cond:
            token = self._unit.new_tokens.get(value) or self._store.tokens.get(value)
            return replace(token) if token is not None else None

    def delete(self, token: ConfirmToken) -> bool:
        store = self._store
        with store.cond:
            if self._unit.new_tokens.pop(token.token, None) is not None:
                return True
            if token.token not in store.tokens or token.token in store.claimed_tokens:
                return False
            store.claimed_tokens[token.token] = self._unit
            self._unit.deleted_tokens.add(token.token)
        return True


class InMemoryUnitOfWork:
    """Implements UnitOfWork protocol over an InMemoryStore."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self.new_customers: list[Customer] = []
        self.enabled_ids: set[int] = set()
        self.new_tokens: dict[str, ConfirmToken] = {}
        self.deleted_tokens: set[str] = set()
        self.customers = InMemoryCustomerRepository(store, self)
        self.tokens = InMemoryConfirmTokenRepository(store, self)

    def __enter__(self) -> "InMemoryUnitOfWork":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # No-op after commit, which already cleared the staged changes
        self._release()

    def commit(self) -> None:
        store = self._store
        with store.cond:
            for customer in self.new_customers:
                store.customers[customer.id] = replace(customer)
                store.ids_by_email[customer.email] = customer.id
                store.ids_by_pin[customer.pin] = customer.id
            for customer_id in self.enabled_ids:
                if customer_id in store.customers:
                    store.customers[customer_id].enabled = True
            store.tokens.update(self.new_tokens)
            for value in self.deleted_tokens:
                store.tokens.pop(value, None)
            self._release()

    def _release(self) -> None:
        store = self._store
        with store.cond:
            for customer in self.new_customers:
                store.reserved_emails.pop(customer.email, None)
                store.reserved_pins.pop(customer.pin, None)
            for value in self.deleted_tokens:
                store.claimed_tokens.pop(value, None)
            self.new_customers.clear()
            self.enabled_ids.clear()
            self.new_tokens.clear()
            self.deleted_tokens.clear()
            store.cond.notify_all()
