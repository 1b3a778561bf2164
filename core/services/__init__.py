# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .field_validation import validate_field, validate_fields
from .taxonomy_service import CategoryService, SubcategoryService
from .form_service import FormService
from .customer_service import CustomerService, normalize_service_category_url
from .message_template_service import MessageTemplateService
from .seed_service import SeedRefusedError, seed_development_data

__all__ = [
    "validate_field",
    "validate_fields",
    "CategoryService",
    "SubcategoryService",
    "FormService",
    "CustomerService",
    "normalize_service_category_url",
    "MessageTemplateService",
    "SeedRefusedError",
    "seed_development_data",
]
