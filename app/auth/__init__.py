# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Access Guard: resolves a bearer token (header or cookie) to a user and
# gates mutation endpoints, optionally by role.
#
# Usage:
#   from app.auth import get_current_user, require_roles, AuthUser
# =============================================================================

from app.auth.dependencies import decode_token, get_current_user, require_roles
from app.auth.models import AuthUser, TokenPayload, UserResponse

__all__ = [
    "decode_token",
    "get_current_user",
    "require_roles",
    "AuthUser",
    "TokenPayload",
    "UserResponse",
]
