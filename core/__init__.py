# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the HTTP layer:
# - models/: Pydantic schemas for request/response validation
# - services/: Taxonomy, forms, customers, message templates, seeding
#
# Services raise AdminDeskException subclasses and never build HTTP
# responses themselves. This keeps the logic testable without a server.
# =============================================================================
