"""
Confirmation domain service - activates customers by redeeming tokens.
"""

import logging
from dataclasses import dataclass
from http import HTTPStatus

from .errors import Failure
from .models import CreateCustomerResponse
from .ports import UnitOfWorkFactory
from .results import ResultEnvelope, status_code

logger = logging.getLogger(__name__)


@dataclass
class ConfirmationService:
    """
    Domain service for email confirmation.

    Token lookup, customer activation and token deletion run in one
    unit of work, so a token is redeemed at most once.
    """

    unit_of_work: UnitOfWorkFactory

    def confirm(self, token: str) -> ResultEnvelope[CreateCustomerResponse]:
        """
        Enable the customer owning the token and consume the token.

        Returns:
            Success envelope with the customer id ("200 OK"), or a failure
            envelope (TokenNotFound for unknown or already used tokens).
            Never raises.
        """
        try:
            with self.unit_of_work() as uow:
                confirm_token = uow.tokens.find_by_token(token)
                if confirm_token is None:
                    return self._reject(Failure.token_not_found(token))

                customer = uow.customers.find_by_email(confirm_token.email)
                if customer is None:
                    return self._reject(Failure.customer_not_found(confirm_token.email))

                uow.customers.enable(customer)
                if not uow.tokens.delete(confirm_token):
                    # Redeemed concurrently; leaving without commit rolls back
                    return self._reject(Failure.token_not_found(token))
                uow.commit()
        except Exception:
            logger.exception("Confirmation failed unexpectedly")
            return Failure.unexpected().to_envelope()

        logger.info("Customer confirmed: id=%s", customer.id)
        return ResultEnvelope.success(
            CreateCustomerResponse(customer_id=customer.id),
            code=status_code(HTTPStatus.OK),
            message=HTTPStatus.OK.name,
        )

    def _reject(self, failure: Failure) -> ResultEnvelope[CreateCustomerResponse]:
        logger.error("Confirmation rejected: %s", failure.message)
        return failure.to_envelope()
