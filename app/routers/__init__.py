# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - categories.py: Form category CRUD
# - subcategories.py: Form subcategory CRUD (with field definitions)
# - forms.py: Form registry CRUD
# - customers.py: Customer directory CRUD and search
# - message_templates.py: Message template CRUD and test send
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import categories
from . import subcategories
from . import forms
from . import customers
from . import message_templates

__all__ = [
    "health",
    "categories",
    "subcategories",
    "forms",
    "customers",
    "message_templates",
]
