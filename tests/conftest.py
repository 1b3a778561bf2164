# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Swaps the Supabase singleton for an in-memory fake (tests/fakes.py)
# - Mints access tokens with python-jose for authenticated requests
# =============================================================================

import os
import time

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-for-the-suite")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("SEED_DEV_DATA", "false")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.config import settings
from app.main import app
from lib.supabase_client import SupabaseClient
from tests.fakes import FakeSupabase


# =============================================================================
# Store
# =============================================================================

@pytest.fixture
def db():
    """A fresh in-memory store installed as the Supabase client."""
    fake = FakeSupabase()
    previous = SupabaseClient._instance
    SupabaseClient._instance = fake
    yield fake
    SupabaseClient._instance = previous


@pytest.fixture
def admin_user(db):
    """A user with the admin role."""
    return db.seed("users", {"name": "Ada Admin", "email": "ada@example.com", "role": "admin"})[0]


@pytest.fixture
def staff_user(db):
    """A user without admin rights."""
    return db.seed("users", {"name": "Sam Staff", "email": "sam@example.com", "role": "staff"})[0]


# =============================================================================
# Tokens
# =============================================================================

@pytest.fixture
def make_token():
    """
    Factory for signed access tokens.

    Example:
        token = make_token(user["id"], expires_in=-10)   # already expired
    """

    def _make(
        user_id,
        secret: str | None = None,
        expires_in: int = 3600,
        issued_at: int | None = None,
        claim: str = "sub",
    ) -> str:
        now = int(time.time()) if issued_at is None else issued_at
        payload = {claim: str(user_id), "iat": now, "exp": now + expires_in}
        return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

    return _make


@pytest.fixture
def admin_headers(admin_user, make_token):
    return {"Authorization": f"Bearer {make_token(admin_user['id'])}"}


@pytest.fixture
def staff_headers(staff_user, make_token):
    return {"Authorization": f"Bearer {make_token(staff_user['id'])}"}


# =============================================================================
# HTTP
# =============================================================================

@pytest.fixture
def client(db):
    """Test client bound to the in-memory store."""
    return TestClient(app)


@pytest.fixture
def sample_category(db, admin_user):
    """A stored category created by the admin."""
    return db.seed(
        "form_categories",
        {
            "name": "Plumbing",
            "description": "Water and drainage jobs",
            "is_active": True,
            "created_by": admin_user["id"],
        },
    )[0]


@pytest.fixture
def customer_payload():
    """A valid customer request body (camelCase, as the admin UI sends it)."""
    return {
        "name": "Jane Smith",
        "phone": "555-0100",
        "email": "Jane@Example.com",
        "address": {"line1": "1 Main St", "city": "Springfield", "state": "IL", "zip": "62701"},
        "serviceCategoryUrl": "example.com/plumbing",
        "notes": "Prefers mornings",
    }
