# =============================================================================
# core/services/seed_service.py - Development Data Seeding
# =============================================================================
# Creates a development admin user and a sample form category so a fresh
# database is usable from the admin UI.
#
# Idempotent: existing rows (matched by email / name) are reused, never
# duplicated. Refuses to run in production.
#
# Called from the app lifespan when SEED_DEV_DATA=true, or manually:
#   poetry run python scripts/seed_dev_data.py
# =============================================================================

import logging
from typing import Any

from app.config import Settings, settings as default_settings
from core.services.taxonomy_service import CATEGORY_TABLE, CategoryService, SubcategoryService
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

SAMPLE_CATEGORY = "General"
SAMPLE_SUBCATEGORY = "Contact request"
SAMPLE_FIELDS = [
    {"name": "Full name", "field_type": "text", "required": True},
    {"name": "Preferred contact", "field_type": "radio", "options": ["Phone", "Email"]},
    {"name": "Message", "field_type": "textarea"},
]


class SeedRefusedError(RuntimeError):
    """Raised when seeding is requested in a production environment."""


def _first(table: str, column: str, value: str) -> dict[str, Any] | None:
    client = SupabaseClient.get_client()
    response = client.table(table).select("*").eq(column, value).limit(1).execute()
    return response.data[0] if response.data else None


def ensure_admin_user(email: str, name: str) -> dict[str, Any]:
    """Return the admin user with this email, creating it if needed."""
    user = _first("users", "email", email)
    if user:
        logger.info(f"Seed admin user already exists: {email}")
        return user

    user = SupabaseClient.insert(
        "users",
        {"email": email, "name": name, "role": "admin", "created_at": utc_now_iso()},
    )
    logger.info(f"Seeded admin user: {user['id']} ({email})")
    return user


def ensure_sample_taxonomy(actor_id: str) -> dict[str, Any]:
    """Return the sample category, creating it and its sample subcategory if needed."""
    category = _first(CATEGORY_TABLE, "name", SAMPLE_CATEGORY)
    if category is None:
        category = CategoryService.create_category(
            SAMPLE_CATEGORY,
            actor_id=actor_id,
            description="Sample category created for development",
        )
        logger.info(f"Seeded category: {category['id']}")

    existing = SubcategoryService.list_subcategories(category_id=category["id"])
    if not any(s["name"] == SAMPLE_SUBCATEGORY for s in existing):
        SubcategoryService.create_subcategory(
            SAMPLE_SUBCATEGORY,
            category_id=category["id"],
            fields=SAMPLE_FIELDS,
            actor_id=actor_id,
        )
        logger.info(f"Seeded subcategory: {SAMPLE_SUBCATEGORY}")

    return category


def seed_development_data(config: Settings | None = None) -> dict[str, Any]:
    """
    Seed the development database.

    Returns:
        {"admin_user_id": ..., "category_id": ...}

    Raises:
        SeedRefusedError: In production
    """
    config = config or default_settings
    if config.is_production:
        raise SeedRefusedError("Refusing to seed development data in production")

    user = ensure_admin_user(config.SEED_ADMIN_EMAIL, config.SEED_ADMIN_NAME)
    category = ensure_sample_taxonomy(str(user["id"]))
    return {"admin_user_id": str(user["id"]), "category_id": str(category["id"])}
