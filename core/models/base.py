# =============================================================================
# core/models/base.py - Shared Schema Configuration
# =============================================================================
# Records are stored with snake_case columns but exchanged with clients in
# camelCase (isActive, categoryId, createdBy, ...). Every API model derives
# from one of the two bases below so the aliasing rule lives in one place.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """
    Base for request bodies.

    - Accepts camelCase (preferred) or snake_case keys
    - Rejects unknown keys so typos fail loudly instead of being dropped
    - Trims surrounding whitespace from every string
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


class ResponseModel(BaseModel):
    """
    Base for response bodies.

    Built from store rows (snake_case), serialized by alias (camelCase).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserRef(ResponseModel):
    """Public identity of the user who created or last updated a record."""
    id: str
    name: str | None = None
    email: str | None = None


class TimestampedResponse(ResponseModel):
    """Common id + timestamp columns."""
    id: str
    created_at: datetime | None = Field(default=None, description="When the record was created")
    updated_at: datetime | None = Field(default=None, description="When the record was last mutated")


class MessageResponse(BaseModel):
    """Confirmation returned by delete endpoints."""
    message: str
    id: str
