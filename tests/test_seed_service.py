# =============================================================================
# tests/test_seed_service.py - Development Seeding Tests
# =============================================================================
# Run with: poetry run pytest tests/test_seed_service.py -v
# =============================================================================

import pytest

from app.config import Settings
from core.services.seed_service import (
    SAMPLE_CATEGORY,
    SAMPLE_SUBCATEGORY,
    SeedRefusedError,
    seed_development_data,
)

BASE = {
    "SUPABASE_URL": "https://test-project.supabase.co",
    "SUPABASE_SERVICE_KEY": "test-service-key",
    "JWT_SECRET": "a-real-secret-for-tests",
}


class TestSeedDevelopmentData:

    def test_creates_admin_and_taxonomy(self, db):
        result = seed_development_data(Settings(_env_file=None, **BASE, ENVIRONMENT="development"))

        users = db.rows("users")
        assert len(users) == 1
        assert users[0]["role"] == "admin"
        assert result["admin_user_id"] == users[0]["id"]

        categories = db.rows("form_categories")
        assert [c["name"] for c in categories] == [SAMPLE_CATEGORY]
        assert categories[0]["created_by"] == users[0]["id"]

        subcategories = db.rows("form_subcategories")
        assert [s["name"] for s in subcategories] == [SAMPLE_SUBCATEGORY]
        assert subcategories[0]["fields"][1]["options"] == ["Phone", "Email"]

    def test_idempotent(self, db):
        config = Settings(_env_file=None, **BASE, ENVIRONMENT="development")

        first = seed_development_data(config)
        second = seed_development_data(config)

        assert first == second
        assert len(db.rows("users")) == 1
        assert len(db.rows("form_categories")) == 1
        assert len(db.rows("form_subcategories")) == 1

    def test_refused_in_production(self, db):
        with pytest.raises(SeedRefusedError):
            seed_development_data(Settings(_env_file=None, **BASE, ENVIRONMENT="production"))

        assert db.rows("users") == []
