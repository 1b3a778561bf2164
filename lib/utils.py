# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone
from typing import Any


# =============================================================================
# Timestamps
# =============================================================================

def utc_now_iso() -> str:
    """
    Current UTC time as an ISO-8601 string.

    Used for created_at / updated_at so every mutation refreshes the
    timestamp from the application side.
    """
    return datetime.now(timezone.utc).isoformat()


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a timestamp coming back from the store.

    Accepts datetime objects and ISO strings (including a trailing 'Z').
    Naive values are assumed to be UTC.

    Example:
        parse_timestamp("2024-01-15T10:30:00Z")  # datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# =============================================================================
# Strings
# =============================================================================

def strip_or_none(value: Any) -> str | None:
    """Trim a string; blank strings and None both become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
