# =============================================================================
# core/models/taxonomy.py - Form Taxonomy Schemas
# =============================================================================
# These models define the API contract for the two-level form taxonomy:
# - FormCategory: top-level grouping, unique by name
# - FormSubCategory: belongs to one category, unique by (name, categoryId),
#   and carries an ordered list of field definitions
# - FieldType: the seven supported input types
#
# Field definitions are deliberately loose on input (fieldType is a plain
# string, options may be missing). The field validator turns them into
# precise errors instead of a generic 422.
# =============================================================================

from enum import Enum

from pydantic import Field

from .base import RequestModel, ResponseModel, TimestampedResponse, UserRef


class FieldType(str, Enum):
    """
    Input types a form field can take.

    SELECT, RADIO and CHECKBOX are "choice" types and need options.
    """
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    TEXTAREA = "textarea"


CHOICE_FIELD_TYPES = frozenset({FieldType.SELECT, FieldType.RADIO, FieldType.CHECKBOX})


# =============================================================================
# Field Definitions
# =============================================================================

class FieldDefinitionInput(RequestModel):
    """
    A field definition as sent by the client.

    Example:
        {"name": "Preferred day", "fieldType": "select", "options": ["Mon", "Tue"], "required": true}
    """

    name: str | None = Field(default=None, description="Label / key of the field")
    field_type: str | None = Field(default=None, description="One of the FieldType values")
    options: list[str] | None = Field(default=None, description="Choices for select/radio/checkbox")
    required: bool = Field(default=False, description="Whether the field must be filled in")


class FieldDefinition(ResponseModel):
    """A validated, normalized field definition as stored on a subcategory."""
    name: str
    field_type: FieldType
    options: list[str] = Field(default_factory=list)
    required: bool = False


# =============================================================================
# Categories
# =============================================================================

class CategoryCreate(RequestModel):
    """
    Schema for creating a form category.

    Example:
        {"name": "Plumbing", "description": "Water and drainage jobs"}
    """

    name: str = Field(..., min_length=1, max_length=255, description="Unique category name")
    description: str | None = Field(default=None, description="Optional description")


class CategoryUpdate(RequestModel):
    """Schema for updating a category. Optional fields are left untouched when omitted."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    is_active: bool | None = None


class CategoryResponse(TimestampedResponse):
    """A category annotated with creator/updater identity."""

    name: str
    description: str | None = None
    is_active: bool = True
    created_by: UserRef | None = None
    updated_by: UserRef | None = None


# =============================================================================
# Subcategories
# =============================================================================

class SubcategoryCreate(RequestModel):
    """
    Schema for creating a subcategory.

    Example:
        {
            "name": "Leak repair",
            "categoryId": "550e8400-e29b-41d4-a716-446655440000",
            "fields": [{"name": "Location", "fieldType": "text", "required": true}]
        }
    """

    name: str = Field(..., min_length=1, max_length=255)
    category_id: str = Field(..., min_length=1, description="Parent category id")
    description: str | None = None
    fields: list[FieldDefinitionInput] = Field(..., description="Ordered field definitions")


class SubcategoryUpdate(SubcategoryCreate):
    """Full replacement of a subcategory; `fields` replaces the whole list."""

    is_active: bool | None = None


class CategoryRef(ResponseModel):
    """Parent category summary embedded in subcategory responses."""
    id: str
    name: str | None = None


class SubcategoryResponse(TimestampedResponse):
    """A subcategory annotated with its parent category and creator/updater identity."""

    name: str
    category_id: str
    category: CategoryRef | None = None
    description: str | None = None
    is_active: bool = True
    fields: list[FieldDefinition] = Field(default_factory=list)
    created_by: UserRef | None = None
    updated_by: UserRef | None = None
