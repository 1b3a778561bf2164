# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The token is read from:
# - Authorization: Bearer <token>
# - the AUTH_COOKIE_NAME cookie, when no Authorization header is sent
#
# A valid token must still point at an existing user, and must have been
# issued after that user's last password change.
#
# The supabase client is blocking, so the dependency is a plain def and
# FastAPI runs it in the threadpool. Routers that touch the store do the same.
#
# Usage:
#   from app.auth import get_current_user, require_roles, AuthUser
#
#   @router.post("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from app.auth.models import AuthUser, TokenPayload
from app.config import settings
from app.exceptions import ForbiddenError, UnauthorizedError
from lib.supabase_client import SupabaseClient
from lib.utils import parse_timestamp

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing header is handled by the cookie fallback
security_optional = HTTPBearer(auto_error=False)


def _extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.AUTH_COOKIE_NAME) or None


def decode_token(token: str) -> TokenPayload:
    """
    Verify the token signature and expiry.

    Raises:
        UnauthorizedError: If the token is expired, malformed or unsigned by us
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return TokenPayload.model_validate(payload)
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise UnauthorizedError("Token has expired")
    except (JWTError, ValidationError) as e:
        logger.warning(f"JWT validation failed: {e}")
        raise UnauthorizedError("Not authorized to access this route. Invalid token.")


def _changed_password_after(user: dict, issued_at: Optional[int]) -> bool:
    changed_at = parse_timestamp(user.get("password_changed_at"))
    if changed_at is None or issued_at is None:
        return False
    return int(changed_at.timestamp()) > issued_at


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> AuthUser:
    """
    Resolve the request's credential to a user.

    Raises:
        UnauthorizedError: 401 if the token is missing, invalid, expired,
            belongs to a deleted user, or predates a password change
    """
    token = _extract_token(request, credentials)
    if not token:
        raise UnauthorizedError("Not authorized to access this route. No token provided.")

    payload = decode_token(token)
    user_id = payload.user_id
    if not user_id:
        logger.warning("JWT token missing 'sub' claim")
        raise UnauthorizedError("Invalid token: missing user ID")

    user = SupabaseClient.fetch_user(user_id)
    if not user:
        logger.warning(f"Token for unknown user: {user_id}")
        raise UnauthorizedError("The user belonging to this token no longer exists.")

    if _changed_password_after(user, payload.iat):
        logger.warning(f"Token issued before password change for user: {user_id}")
        raise UnauthorizedError("User recently changed password! Please log in again.")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(
        id=str(user["id"]),
        email=user.get("email"),
        name=user.get("name"),
        role=user.get("role"),
    )


def require_roles(*roles: str):
    """
    Build a dependency that only admits users whose role is in `roles`.

    Usage:
        @router.delete("/{id}")
        def remove(user: AuthUser = Depends(require_roles("admin"))):
            ...
    """

    def _check_role(user: AuthUser = Depends(get_current_user)) -> AuthUser:
        if user.role not in roles:
            logger.warning(f"User {user.id} with role {user.role} denied; needs one of {roles}")
            raise ForbiddenError(user.role)
        return user

    return _check_role
