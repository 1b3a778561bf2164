# =============================================================================
# core/models/form.py - Form Registry Schemas
# =============================================================================
# A Form is a named link to an externally hosted form. Both name and url are
# unique across all forms.
# =============================================================================

from pydantic import Field

from .base import RequestModel, TimestampedResponse


class FormUpdate(RequestModel):
    """Schema for updating a form via PUT /forms/{id}."""

    name: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=2048)


class FormUpsert(FormUpdate):
    """
    Schema for POST /forms.

    When `id` is present the request updates that form instead of creating one.

    Example:
        {"name": "Intake", "url": "https://forms.example.com/intake"}
    """

    id: str | None = Field(default=None, description="Existing form id to update")


class FormResponse(TimestampedResponse):
    name: str
    url: str
