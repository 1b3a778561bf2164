# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - base.py: camelCase aliasing, shared response pieces
# - taxonomy.py: Form categories, subcategories and field definitions
# - form.py: Form registry schemas
# - customer.py: Customer directory schemas
# - message_template.py: Message template schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Shared
# -----------------------------------------------------------------------------
from .base import (
    MessageResponse,
    RequestModel,
    ResponseModel,
    TimestampedResponse,
    UserRef,
)

# -----------------------------------------------------------------------------
# Taxonomy Models - Categories, subcategories, field definitions
# -----------------------------------------------------------------------------
from .taxonomy import (
    CHOICE_FIELD_TYPES,
    CategoryCreate,
    CategoryRef,
    CategoryResponse,
    CategoryUpdate,
    FieldDefinition,
    FieldDefinitionInput,
    FieldType,
    SubcategoryCreate,
    SubcategoryResponse,
    SubcategoryUpdate,
)

# -----------------------------------------------------------------------------
# Form Registry
# -----------------------------------------------------------------------------
from .form import FormResponse, FormUpdate, FormUpsert

# -----------------------------------------------------------------------------
# Customer Directory
# -----------------------------------------------------------------------------
from .customer import (
    Address,
    AddressInput,
    CustomerInput,
    CustomerRecord,
    CustomerResponse,
    CustomerSearchResult,
)

# -----------------------------------------------------------------------------
# Message Templates
# -----------------------------------------------------------------------------
from .message_template import (
    SendTestResponse,
    TemplateCreate,
    TemplatePreview,
    TemplateResponse,
    TemplateType,
    TemplateUpdate,
)

__all__ = [
    # Shared
    "MessageResponse",
    "RequestModel",
    "ResponseModel",
    "TimestampedResponse",
    "UserRef",
    # Taxonomy
    "CHOICE_FIELD_TYPES",
    "CategoryCreate",
    "CategoryRef",
    "CategoryResponse",
    "CategoryUpdate",
    "FieldDefinition",
    "FieldDefinitionInput",
    "FieldType",
    "SubcategoryCreate",
    "SubcategoryResponse",
    "SubcategoryUpdate",
    # Forms
    "FormResponse",
    "FormUpdate",
    "FormUpsert",
    # Customers
    "Address",
    "AddressInput",
    "CustomerInput",
    "CustomerRecord",
    "CustomerResponse",
    "CustomerSearchResult",
    # Message templates
    "SendTestResponse",
    "TemplateCreate",
    "TemplatePreview",
    "TemplateResponse",
    "TemplateType",
    "TemplateUpdate",
]
