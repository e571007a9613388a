"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Request

from onboarding.adapters.security import BcryptPasswordEncoder
from onboarding.adapters.smtp import ConsoleEmailSender, SMTPEmailSender
from onboarding.config.settings import Settings, get_settings
from onboarding.domain.confirmation import ConfirmationService
from onboarding.domain.ports import Notifier, TaskDispatcher, UnitOfWorkFactory
from onboarding.domain.registration import RegistrationService


def build_notifier(settings: Settings) -> Notifier:
    """Select the mail adapter configured by MAIL_BACKEND."""
    if settings.mail_backend == "smtp":
        return SMTPEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            from_address=settings.mail_from,
            from_name=settings.mail_from_name,
            username=settings.smtp_username,
            password=settings.smtp_password,
            starttls=settings.smtp_starttls,
        )
    return ConsoleEmailSender()


def get_unit_of_work(request: Request) -> UnitOfWorkFactory:
    """
    Get the unit of work factory from app state.

    The factory is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.unit_of_work


def get_dispatcher(request: Request) -> TaskDispatcher:
    """Get the background task dispatcher from app state."""
    return request.app.state.dispatcher


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together storage, hashing, mail delivery and the configured
    host used in confirmation links.
    """
    state = request.app.state
    return RegistrationService(
        unit_of_work=get_unit_of_work(request),
        password_encoder=state.password_encoder,
        notifier=state.notifier,
        dispatcher=get_dispatcher(request),
        app_host=get_settings().app_host,
    )


def get_confirmation_service(request: Request) -> ConfirmationService:
    """Create confirmation service bound to the app's storage."""
    return ConfirmationService(unit_of_work=get_unit_of_work(request))


def default_password_encoder(settings: Settings) -> BcryptPasswordEncoder:
    return BcryptPasswordEncoder(rounds=settings.bcrypt_cost)
