"""
API v1 routes.

Defines REST endpoints for customer registration and email confirmation.
"""

from fastapi import APIRouter, Depends, Response

from onboarding.api.dependencies import get_confirmation_service, get_registration_service
from onboarding.api.models import EnvelopeResponse, RegisterRequest
from onboarding.domain.confirmation import ConfirmationService
from onboarding.domain.registration import RegistrationService

router = APIRouter(prefix="/auth", tags=["v1"])


@router.post(
    "/register",
    response_model=EnvelopeResponse,
    status_code=201,
    responses={
        400: {"model": EnvelopeResponse, "description": "Email or pin already registered"},
        422: {"description": "Validation error"},
        500: {"model": EnvelopeResponse, "description": "Unexpected failure"},
    },
    summary="Register a new customer",
    description="Create a disabled customer and send a confirmation link "
    "to the provided email address.",
)
def register(
    request_data: RegisterRequest,
    response: Response,
    service: RegistrationService = Depends(get_registration_service),
) -> EnvelopeResponse:
    """
    Register a new customer.

    The confirmation email is sent in the background; the response does
    not wait for it.
    """
    envelope = service.register(request_data.to_domain())
    response.status_code = envelope.http_status
    return EnvelopeResponse.from_envelope(envelope)


@router.get(
    "/confirm-mail/{token}",
    response_model=EnvelopeResponse,
    responses={
        400: {"model": EnvelopeResponse, "description": "Unknown or already used token"},
        500: {"model": EnvelopeResponse, "description": "Unexpected failure"},
    },
    summary="Confirm email address",
    description="Redeem the single-use token from the confirmation email "
    "to enable the customer account.",
)
def confirm_mail(
    token: str,
    response: Response,
    service: ConfirmationService = Depends(get_confirmation_service),
) -> EnvelopeResponse:
    """Enable the customer owning the token."""
    envelope = service.confirm(token)
    response.status_code = envelope.http_status
    return EnvelopeResponse.from_envelope(envelope)
