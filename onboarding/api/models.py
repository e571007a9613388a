"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from onboarding.adapters.security.bcrypt_encoder import MAX_PASSWORD_BYTES
from onboarding.domain.models import CreateCustomerResponse, CustomerRequest
from onboarding.domain.results import ResultEnvelope


class RegisterRequest(BaseModel):
    """Request model for customer registration."""

    name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    pin: str = Field(..., min_length=1, max_length=20, description="National identification number")
    password: str = Field(
        ...,
        min_length=8,
        max_length=MAX_PASSWORD_BYTES,
        description="Password (8 to 72 characters, at most 72 bytes as UTF-8)",
    )

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value

    def to_domain(self) -> CustomerRequest:
        return CustomerRequest(
            name=self.name,
            surname=self.surname,
            email=str(self.email),
            pin=self.pin,
            password=self.password,
        )


class CustomerIdResponse(BaseModel):
    """Payload carrying the customer id."""

    customer_id: int


class EnvelopeResponse(BaseModel):
    """Uniform response envelope for registration and confirmation."""

    data: CustomerIdResponse | None = None
    code: str
    message: str

    @classmethod
    def from_envelope(cls, envelope: ResultEnvelope[CreateCustomerResponse]) -> "EnvelopeResponse":
        data = None
        if envelope.data is not None:
            data = CustomerIdResponse(customer_id=envelope.data.customer_id)
        return cls(data=data, code=envelope.code, message=envelope.message)
