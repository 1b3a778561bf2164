# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user resolved from an access token.

    Built from the token's subject plus the users table, so the role
    reflects the current stored value rather than what was in the token.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None


class UserResponse(BaseModel):
    """Profile returned by GET /auth/me."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None


class TokenPayload(BaseModel):
    """
    Decoded access token payload.

    `sub` is the user id; tokens minted by older clients carry it as `id`.
    """
    sub: Optional[str] = None
    id: Optional[str] = None
    iat: Optional[int] = None
    exp: Optional[int] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.sub or self.id
