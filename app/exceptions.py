# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every foreseeable failure is raised as an AdminDeskException subclass and
# rendered by a single handler; anything else collapses to INTERNAL_ERROR.
# =============================================================================

import logging
from typing import Any, Iterable

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class AdminDeskException(Exception):
    """
    Base exception for the AdminDesk API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "ADMINDESK_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Generic Exceptions
# =============================================================================

class ValidationFailedError(AdminDeskException):
    """Raised when input is missing or malformed. Carries a per-field message map."""

    def __init__(self, errors: dict[str, str], message: str = "Validation failed"):
        super().__init__(
            message=message,
            code="VALIDATION_FAILED",
            status_code=400,
            suggestion="Fix the fields listed in details and retry",
            details={"fields": errors},
        )
        self.errors = errors


class NotFoundError(AdminDeskException):
    """Raised when a referenced record doesn't exist."""

    def __init__(self, entity: str, record_id: str, code: str = "NOT_FOUND"):
        super().__init__(
            message=f"{entity} not found: {record_id}",
            code=code,
            status_code=404,
            suggestion=f"Check that the {entity.lower()} id is correct",
            details={"id": record_id},
        )


class DuplicateNameError(AdminDeskException):
    """Raised when a name (or name-like key) is already taken."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="DUPLICATE_NAME",
            status_code=400,
            suggestion="Choose a different name",
            details=details,
        )


class DuplicateKeyError(AdminDeskException):
    """Raised when the store reports a unique-constraint violation on a field."""

    def __init__(self, field: str):
        super().__init__(
            message=f"{field} already exists",
            code="DUPLICATE_KEY",
            status_code=400,
            suggestion=f"Use a different {field} or update the existing record",
            details={"field": field},
        )
        self.field = field


class HasDependentsError(AdminDeskException):
    """Raised when a delete is blocked by records that still reference it."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="HAS_DEPENDENTS",
            status_code=400,
            suggestion="Delete or reassign the dependent records first",
            details=details,
        )


# =============================================================================
# Taxonomy Exceptions
# =============================================================================

class CategoryNotFoundError(NotFoundError):
    """Raised when a subcategory references a category that doesn't exist."""

    def __init__(self, category_id: str):
        super().__init__("Form category", category_id, code="CATEGORY_NOT_FOUND")


# =============================================================================
# Field Definition Exceptions
# =============================================================================

class FieldDefinitionError(AdminDeskException):
    """Base class for form-field definition violations."""

    def __init__(self, message: str, code: str, index: int, suggestion: str | None = None):
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            suggestion=suggestion,
            details={"field_index": index},
        )
        self.index = index


class FieldNameRequiredError(FieldDefinitionError):
    """Raised when a field definition has no name."""

    def __init__(self, index: int):
        super().__init__(
            message="Field name is required for all fields",
            code="FIELD_NAME_REQUIRED",
            index=index,
            suggestion="Give every field a non-blank name",
        )


class FieldTypeRequiredError(FieldDefinitionError):
    """Raised when a field definition has no fieldType."""

    def __init__(self, index: int, allowed: list[str]):
        super().__init__(
            message="Field type is required for all fields",
            code="FIELD_TYPE_REQUIRED",
            index=index,
            suggestion=f"Use one of: {', '.join(allowed)}",
        )


class FieldTypeInvalidError(FieldDefinitionError):
    """Raised when a field definition uses an unknown fieldType."""

    def __init__(self, index: int, field_type: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid field type: {field_type}",
            code="FIELD_TYPE_INVALID",
            index=index,
            suggestion=f"Use one of: {', '.join(allowed)}",
        )
        self.details["field_type"] = field_type


class OptionsRequiredError(FieldDefinitionError):
    """Raised when a choice-type field has no options."""

    def __init__(self, index: int, field_type: str):
        super().__init__(
            message=f"Options are required for field type: {field_type}",
            code="OPTIONS_REQUIRED",
            index=index,
            suggestion="Provide at least one option",
        )
        self.details["field_type"] = field_type


# =============================================================================
# Customer / Template Exceptions
# =============================================================================

class QueryRequiredError(AdminDeskException):
    """Raised when a search is made without a query."""

    def __init__(self):
        super().__init__(
            message="Search query is required",
            code="QUERY_REQUIRED",
            status_code=400,
            suggestion="Pass a non-empty ?q= parameter",
        )


class MissingFieldsError(AdminDeskException):
    """Raised when required fields are absent from a create request."""

    def __init__(self, missing: list[str]):
        super().__init__(
            message=f"{', '.join(missing)} required",
            code="MISSING_FIELDS",
            status_code=400,
            suggestion="Name, subject, and content are required",
            details={"missing": missing},
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthorizedError(AdminDeskException):
    """Raised when the credential is missing, invalid or stale."""

    def __init__(self, message: str = "Not authorized to access this route"):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
            suggestion="Send a valid token as 'Authorization: Bearer <token>'",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(AdminDeskException):
    """Raised when the authenticated user's role is not allowed."""

    def __init__(self, role: str | None):
        super().__init__(
            message=f"User role {role} is not authorized to access this route",
            code="FORBIDDEN",
            status_code=403,
            details={"role": role},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def admindesk_exception_handler(
    request: Request,
    exc: AdminDeskException
) -> JSONResponse:
    """
    Convert AdminDeskException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


# =============================================================================
# Validation Error Mapping
# =============================================================================

LOCATION_PREFIXES = ("body", "query", "path", "header", "cookie")
VALUE_ERROR_PREFIX = "Value error, "


def _camel_part(part: Any) -> str:
    text = str(part)
    return to_camel(text) if "_" in text else text


def field_error_map(errors: Iterable[dict[str, Any]], default_key: str = "body") -> dict[str, str]:
    """
    Turn pydantic errors into {"dotted.camelCase.path": "message"}.

    The request-location prefix ("body", "query", ...) is dropped and the
    "Value error, " prefix pydantic puts on custom validator messages is
    stripped, so request-level and record-level failures read the same.
    The first message per path wins.

    Example:
        [{"loc": ("body", "address", "zip_code"), "msg": "Field required"}]
        -> {"address.zipCode": "Field required"}
    """
    fields: dict[str, str] = {}
    for error in errors:
        parts = [_camel_part(p) for p in error.get("loc", ()) if p not in LOCATION_PREFIXES]
        message = str(error.get("msg", "Invalid value"))
        if message.startswith(VALUE_ERROR_PREFIX):
            message = message[len(VALUE_ERROR_PREFIX):]
        fields.setdefault(".".join(parts) or default_key, message)
    return fields


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Converts pydantic errors to a per-field message map and reports them
    as VALIDATION_FAILED (400).
    """
    errors = field_error_map(exc.errors())
    return await admindesk_exception_handler(request, ValidationFailedError(errors))
