# =============================================================================
# core/models/message_template.py - Message Template Schemas
# =============================================================================
# Reusable message templates. Creation validates required fields in the
# service layer (MissingFields) rather than in the schema, so every field is
# optional here.
# =============================================================================

from enum import Enum

from pydantic import Field

from .base import RequestModel, ResponseModel, TimestampedResponse


class TemplateType(str, Enum):
    """Kind of message a template produces."""
    ALERT = "ALERT"
    NOTIFICATION = "NOTIFICATION"
    PROMOTIONAL = "PROMOTIONAL"


class TemplateCreate(RequestModel):
    """
    Schema for creating a template.

    Example:
        {"name": "Reminder", "subject": "Your visit", "content": "See you tomorrow", "type": "NOTIFICATION"}
    """

    name: str | None = None
    subject: str | None = None
    content: str | None = None
    type: TemplateType = TemplateType.ALERT


class TemplateUpdate(RequestModel):
    """
    Partial update. Only keys present in the request body are applied.
    """

    name: str | None = None
    subject: str | None = None
    content: str | None = None
    type: TemplateType | None = None


class TemplateResponse(TimestampedResponse):
    name: str
    subject: str
    content: str
    type: TemplateType = TemplateType.ALERT


class TemplatePreview(ResponseModel):
    subject: str
    content: str


class SendTestResponse(ResponseModel):
    """Echo returned by the test-send action. Nothing is dispatched."""

    success: bool = True
    message: str = "Test message sent successfully"
    to: str | None = Field(default=None, description="Recipient the message would go to")
    template: TemplatePreview
