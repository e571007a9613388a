"""
Shared fixtures for adversarial tests.

Provides services whose password hashing is deliberately slow, widening
the window between the duplicate pre-check and the insert so concurrent
registrations really overlap.
"""

import time

import pytest

from onboarding.adapters.repository.memory import InMemoryStore
from onboarding.domain.confirmation import ConfirmationService
from onboarding.domain.registration import RegistrationService

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


class SlowEncoder:
    """PasswordEncoder that sleeps before returning a fake hash."""

    def __init__(self, delay: float = 0.02) -> None:
        self._delay = delay

    def encode(self, plaintext: str) -> str:
        time.sleep(self._delay)
        return f"slow-hash:{len(plaintext)}"


@pytest.fixture
def racing_registration(store: InMemoryStore, notifier, dispatcher) -> RegistrationService:
    return RegistrationService(
        unit_of_work=store.unit_of_work,
        password_encoder=SlowEncoder(),
        notifier=notifier,
        dispatcher=dispatcher,
        app_host="https://bank.example.com",
    )


@pytest.fixture
def racing_confirmation(store: InMemoryStore) -> ConfirmationService:
    return ConfirmationService(unit_of_work=store.unit_of_work)
