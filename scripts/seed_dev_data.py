#!/usr/bin/env python3
# =============================================================================
# scripts/seed_dev_data.py - Development Data Seeder
# =============================================================================
# Creates the development admin user and the sample form taxonomy.
# Safe to run repeatedly; refuses to run when ENVIRONMENT=production.
#
# Usage:
#   poetry run python scripts/seed_dev_data.py
#
# Prerequisites:
#   - Environment variables must be set (.env file)
# =============================================================================

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import settings
from core.services.seed_service import SeedRefusedError, seed_development_data


def main() -> int:
    """Seed the database and print what was created or reused."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")

    print("=" * 60)
    print(f"AdminDesk development seed ({settings.ENVIRONMENT})")
    print("=" * 60)

    try:
        result = seed_development_data(settings)
    except SeedRefusedError as e:
        print(f"Refused: {e}")
        return 1

    print(f"Admin user:  {settings.SEED_ADMIN_EMAIL} ({result['admin_user_id']})")
    print(f"Category id: {result['category_id']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
