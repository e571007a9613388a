"""
Domain layer - Pure business logic with zero framework imports.

This package contains the registration and email confirmation
workflows for bank customers. It defines its own port interfaces for
infrastructure abstraction, keeping storage, hashing and mail delivery
outside the domain.
"""

from .confirmation import ConfirmationService
from .errors import Failure, FailureKind
from .models import ConfirmToken, CreateCustomerResponse, Customer, CustomerRequest
from .ports import (
    ConfirmTokenRepository,
    CustomerRepository,
    Notifier,
    PasswordEncoder,
    TaskDispatcher,
    UnitOfWork,
    UnitOfWorkFactory,
)
from .registration import RegistrationService
from .results import ResultEnvelope

__all__ = [
    "ConfirmToken",
    "ConfirmTokenRepository",
    "ConfirmationService",
    "CreateCustomerResponse",
    "Customer",
    "CustomerRepository",
    "CustomerRequest",
    "Failure",
    "FailureKind",
    "Notifier",
    "PasswordEncoder",
    "RegistrationService",
    "ResultEnvelope",
    "TaskDispatcher",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
