"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- An in-memory store and unit of work factory
- Recording fakes for the dispatcher and notifier
- Services wired to those fakes
"""

from collections.abc import Callable
from typing import Any
from unittest.mock import Mock

import pytest

from onboarding.adapters.repository.memory import InMemoryStore
from onboarding.domain.confirmation import ConfirmationService
from onboarding.domain.models import CustomerRequest
from onboarding.domain.registration import RegistrationService

APP_HOST = "https://bank.example.com"


class RecordingDispatcher:
    """TaskDispatcher that queues tasks until run_all() is called."""

    def __init__(self) -> None:
        self.tasks: list[tuple[Callable[..., Any], tuple[Any, ...]]] = []

    def submit(self, fn: Callable[..., Any], *args: Any) -> None:
        self.tasks.append((fn, args))

    def run_all(self) -> None:
        tasks, self.tasks = self.tasks, []
        for fn, args in tasks:
            fn(*args)


class RecordingNotifier:
    """Notifier that keeps every message it is asked to send."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send_confirmation(self, to_email: str, html_body: str) -> None:
        self.sent.append((to_email, html_body))


def _make_request(
    email: str = "a@x.com",
    pin: str = "111",
    password: str = "p",
    name: str = "Vusal",
    surname: str = "Rahimov",
) -> CustomerRequest:
    return CustomerRequest(name=name, surname=surname, email=email, pin=pin, password=password)


@pytest.fixture
def make_request() -> Callable[..., CustomerRequest]:
    """Factory for registration requests; defaults match the walkthrough scenario."""
    return _make_request


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def encoder() -> Mock:
    encoder = Mock()
    encoder.encode.side_effect = lambda plaintext: f"hashed:{plaintext}"
    return encoder


@pytest.fixture
def registration(
    store: InMemoryStore,
    encoder: Mock,
    notifier: RecordingNotifier,
    dispatcher: RecordingDispatcher,
) -> RegistrationService:
    return RegistrationService(
        unit_of_work=store.unit_of_work,
        password_encoder=encoder,
        notifier=notifier,
        dispatcher=dispatcher,
        app_host=APP_HOST,
    )


@pytest.fixture
def confirmation(store: InMemoryStore) -> ConfirmationService:
    return ConfirmationService(unit_of_work=store.unit_of_work)
