# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the AdminDesk API:
# - fakes.py: In-memory stand-in for the Supabase client
# - test_models.py: Pydantic schema behaviour (aliases, strictness)
# - test_field_validation.py: Form field definition rules
# - test_*_service.py: Business logic against the in-memory store
# - test_auth.py: Access Guard (tokens, cookies, roles)
# - test_api.py: HTTP contract (status codes, camelCase bodies, error shape)
#
# Run tests with: poetry run pytest
# =============================================================================
