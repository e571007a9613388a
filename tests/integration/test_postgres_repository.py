"""
Integration tests for the PostgreSQL unit of work and repositories.

Tests repository operations against a real PostgreSQL database.
Requires PostgreSQL to be running; skipped otherwise.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from unittest.mock import Mock

import pytest
from psycopg_pool import ConnectionPool

from onboarding.adapters.repository.postgres import PostgresUnitOfWork
from onboarding.domain.confirmation import ConfirmationService
from onboarding.domain.models import ConfirmToken, Customer, CustomerRequest
from onboarding.domain.registration import RegistrationService

pytestmark = [pytest.mark.integration, pytest.mark.usefixtures("clean_database")]


def _customer(email: str = "a@x.com", pin: str = "111") -> Customer:
    return Customer(name="A", surname="B", email=email, pin=pin, password_hash="$2b$10$hash")


def _count(pool: ConnectionPool, table: str) -> int:
    with pool.connection() as conn, conn.cursor() as cursor:
        cursor.execute(f"SELECT COUNT(*) FROM {table}")
        return cursor.fetchone()[0]


class TestCustomerRepository:
    """Tests for PostgresCustomerRepository."""

    def test_add_assigns_id(self, pool: ConnectionPool) -> None:
        with PostgresUnitOfWork(pool) as uow:
            saved = uow.customers.add(_customer())
            uow.commit()

        assert saved.id is not None
        with PostgresUnitOfWork(pool) as uow:
            found = uow.customers.find_by_email("a@x.com")
        assert found.id == saved.id
        assert found.enabled is False

    def test_find_by_pin(self, pool: ConnectionPool) -> None:
        with PostgresUnitOfWork(pool) as uow:
            uow.customers.add(_customer())
            uow.commit()

        with PostgresUnitOfWork(pool) as uow:
            assert uow.customers.find_by_pin("111").email == "a@x.com"
            assert uow.customers.find_by_pin("999") is None

    def test_duplicate_email_returns_none(self, pool: ConnectionPool) -> None:
        with PostgresUnitOfWork(pool) as uow:
            uow.customers.add(_customer())
            uow.commit()

        with PostgresUnitOfWork(pool) as uow:
            assert uow.customers.add(_customer(pin="222")) is None

    def test_duplicate_pin_returns_none(self, pool: ConnectionPool) -> None:
        with PostgresUnitOfWork(pool) as uow:
            uow.customers.add(_customer())
            uow.commit()

        with PostgresUnitOfWork(pool) as uow:
            assert uow.customers.add(_customer(email="b@x.com")) is None

    def test_exit_without_commit_rolls_back(self, pool: ConnectionPool) -> None:
        with PostgresUnitOfWork(pool) as uow:
            uow.customers.add(_customer())

        assert _count(pool, "customers") == 0

    def test_exception_rolls_back(self, pool: ConnectionPool) -> None:
        with pytest.raises(RuntimeError), PostgresUnitOfWork(pool) as uow:
            uow.customers.add(_customer())
            raise RuntimeError("boom")

        assert _count(pool, "customers") == 0


class TestConfirmTokenRepository:
    """Tests for PostgresConfirmTokenRepository."""

    def test_add_find_delete(self, pool: ConnectionPool) -> None:
        with PostgresUnitOfWork(pool) as uow:
            customer = uow.customers.add(_customer())
            issued = uow.tokens.add(ConfirmToken.issue_for(customer))
            uow.commit()

        with PostgresUnitOfWork(pool) as uow:
            token = uow.tokens.find_by_token(issued.token)
            assert token.customer_id == customer.id
            assert token.email == "a@x.com"
            assert uow.tokens.delete(token) is True
            assert uow.tokens.delete(token) is False
            uow.commit()

        assert _count(pool, "confirm_tokens") == 0


class TestWorkflowsOnPostgres:
    """Registration and confirmation workflows against PostgreSQL."""

    def _services(self, pool: ConnectionPool) -> tuple[RegistrationService, ConfirmationService, Mock]:
        encoder = Mock()
        encoder.encode.return_value = "$2b$10$hash"
        dispatcher = Mock()
        registration = RegistrationService(
            unit_of_work=partial(PostgresUnitOfWork, pool),
            password_encoder=encoder,
            notifier=Mock(),
            dispatcher=dispatcher,
            app_host="https://bank.example.com",
        )
        confirmation = ConfirmationService(unit_of_work=partial(PostgresUnitOfWork, pool))
        return registration, confirmation, dispatcher

    def test_register_confirm_replay(self, pool: ConnectionPool) -> None:
        registration, confirmation, dispatcher = self._services(pool)

        created = registration.register(
            CustomerRequest(name="A", surname="B", email="a@x.com", pin="111", password="p")
        )
        assert created.ok
        link = dispatcher.submit.call_args[0][2]
        token = link.split("confirm-mail/")[1].split("'")[0]

        confirmed = confirmation.confirm(token)
        assert confirmed.data.customer_id == created.data.customer_id

        replay = confirmation.confirm(token)
        assert replay.code == "400 BAD_REQUEST"
        assert _count(pool, "confirm_tokens") == 0

    def test_concurrent_same_email_one_success(self, pool: ConnectionPool) -> None:
        registration, _, _ = self._services(pool)
        barrier = threading.Barrier(5)

        def attempt(i: int):
            barrier.wait()
            return registration.register(
                CustomerRequest(name="A", surname="B", email="race@x.com", pin=str(i), password="p")
            )

        with ThreadPoolExecutor(max_workers=5) as executor:
            results = list(executor.map(attempt, range(5)))

        assert sum(r.ok for r in results) == 1
        assert all(r.code == "400 BAD_REQUEST" for r in results if not r.ok)
        assert _count(pool, "customers") == 1
        assert _count(pool, "confirm_tokens") == 1
