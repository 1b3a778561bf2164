# =============================================================================
# core/models/customer.py - Customer Schemas
# =============================================================================
# Two layers of validation:
# - CustomerInput / AddressInput describe the *shape* of a request body
#   (known keys only, all optional) so partial updates can be expressed.
# - CustomerRecord describes a *valid stored customer*. The service builds it
#   after URL normalization and merging, and reports its errors per field.
# =============================================================================

import re

from pydantic import Field, field_validator

from .base import RequestModel, ResponseModel, TimestampedResponse

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)


class AddressInput(RequestModel):
    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


class CustomerInput(RequestModel):
    """
    Body of POST /customers and PUT /customers/{id}.

    Example:
        {
            "name": "Jane Smith",
            "phone": "555-0100",
            "email": "jane@example.com",
            "address": {"line1": "1 Main St", "city": "Springfield", "state": "IL"},
            "serviceCategoryUrl": "example.com/plumbing"
        }
    """

    name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: AddressInput | None = None
    service_category_url: str | None = None
    notes: str | None = None


class Address(ResponseModel):
    line1: str = Field(..., min_length=1)
    line2: str | None = None
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip: str | None = None


class CustomerRecord(ResponseModel):
    """A customer as it may be persisted."""

    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)
    email: str | None = None
    address: Address
    service_category_url: str | None = None
    notes: str | None = None

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str | None) -> str | None:
        if value is not None and not EMAIL_PATTERN.match(value):
            raise ValueError("Please provide a valid email address")
        return value.lower() if value else value

    @field_validator("service_category_url")
    @classmethod
    def _check_url(cls, value: str | None) -> str | None:
        if value is not None and not URL_PATTERN.match(value):
            raise ValueError("Please provide a valid URL")
        return value


class CustomerResponse(TimestampedResponse):
    name: str
    phone: str
    email: str | None = None
    address: Address | None = None
    service_category_url: str | None = None
    notes: str | None = None


class CustomerSearchResult(ResponseModel):
    """Projection returned by /customers/search."""
    id: str
    name: str
    phone: str
    email: str | None = None
    address: Address | None = None
