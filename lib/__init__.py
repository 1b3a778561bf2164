# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for record operations
# - utils.py: Timestamps and string helpers
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import (
    SupabaseClient,
    SupabaseClientError,
    UniqueViolationError,
    quote_filter_value,
)
from lib.utils import parse_timestamp, strip_or_none, utc_now_iso

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    "UniqueViolationError",
    "quote_filter_value",
    # Utils
    "parse_timestamp",
    "strip_or_none",
    "utc_now_iso",
]
