"""
Registration domain service - creates pending customers.

Registration Flow
=================

Inside one unit of work:
1. Reject the request if its email or pin is already registered
2. Map the request to a disabled Customer with a hashed password
3. Persist the customer (the store re-checks uniqueness at write time)
4. Issue and persist a ConfirmToken for the saved customer
5. Commit

After the commit succeeds, the confirmation email is handed to the
task dispatcher. The caller gets the result without waiting for the
email, and a delivery failure never reverses the committed writes.

Customer lifecycle:
    PENDING (enabled=false, token exists) -> ACTIVE (enabled=true, token gone)
"""

import logging
from dataclasses import dataclass
from http import HTTPStatus

from .errors import Failure
from .models import ConfirmToken, CreateCustomerResponse, Customer, CustomerRequest
from .notification import confirmation_body, confirmation_link
from .ports import (
    CustomerRepository,
    Notifier,
    PasswordEncoder,
    TaskDispatcher,
    UnitOfWorkFactory,
)
from .results import ResultEnvelope, status_code

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for customer registration.

    Orchestrates validation, persistence, token issuance and the
    out-of-band confirmation email.
    """

    unit_of_work: UnitOfWorkFactory
    password_encoder: PasswordEncoder
    notifier: Notifier
    dispatcher: TaskDispatcher
    app_host: str

    def register(self, raw_request: CustomerRequest) -> ResultEnvelope[CreateCustomerResponse]:
        """
        Register a new, disabled customer and send a confirmation email.

        Args:
            raw_request: Registration input (email is normalized)

        Returns:
            Success envelope with the new customer id ("201 CREATED"),
            or a failure envelope. Never raises.
        """
        try:
            request = raw_request.normalized()
            with self.unit_of_work() as uow:
                failure = self._validate(uow.customers, request)
                if failure is not None:
                    return self._reject(failure)

                customer = request.to_customer(self.password_encoder.encode(request.password))
                saved = uow.customers.add(customer)
                if saved is None:
                    # Lost a race against a concurrent registration
                    return self._reject(self._conflict_failure(uow.customers, request))

                token = uow.tokens.add(ConfirmToken.issue_for(saved))
                uow.commit()
        except Exception:
            logger.exception("Registration failed unexpectedly for email: %s", raw_request.email)
            return Failure.unexpected().to_envelope()

        logger.info("Customer registered: id=%s email=%s", saved.id, saved.email)
        self._send_confirm_mail(saved, token)

        return ResultEnvelope.success(
            CreateCustomerResponse(customer_id=saved.id),
            code=status_code(HTTPStatus.CREATED),
            message=HTTPStatus.CREATED.name,
        )

    def _validate(self, customers: CustomerRepository, request: CustomerRequest) -> Failure | None:
        if customers.find_by_email(request.email) is not None:
            return Failure.duplicate_email(request.email)
        if customers.find_by_pin(request.pin) is not None:
            return Failure.duplicate_pin(request.pin)
        return None

    def _conflict_failure(self, customers: CustomerRepository, request: CustomerRequest) -> Failure:
        """Work out which constraint rejected the insert."""
        return self._validate(customers, request) or Failure.duplicate_email(request.email)

    def _reject(self, failure: Failure) -> ResultEnvelope[CreateCustomerResponse]:
        logger.error("Registration rejected: %s", failure.message)
        return failure.to_envelope()

    def _send_confirm_mail(self, customer: Customer, token: ConfirmToken) -> None:
        link = confirmation_link(self.app_host, token.token)
        body = confirmation_body(customer, link)
        try:
            self.dispatcher.submit(self.notifier.send_confirmation, customer.email, body)
        except Exception:
            # Registration is already committed; the email is lost
            logger.exception("Could not schedule confirmation mail for customer %s", customer.id)
