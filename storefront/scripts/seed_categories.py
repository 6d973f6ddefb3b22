"""
Seed Categories Script
Creates the default catalog categories, skipping any slug that already exists.
Safe to rerun.

Usage: python -m storefront.scripts.seed_categories
"""

import logging
import sys

from supabase import Client

from storefront.config.catalog_config import DEFAULT_CATEGORIES
from storefront.database.supabase_client import SupabaseClient
from storefront.modules.categories.service import CategoryService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_categories(supabase: Client) -> int:
    """Seed default categories; returns how many were created"""
    logger.info("Seeding categories...")
    created = CategoryService(supabase).ensure_default_categories(DEFAULT_CATEGORIES)
    created_slugs = {c["slug"] for c in created}

    for category in DEFAULT_CATEGORIES:
        if category["slug"] in created_slugs:
            logger.info(f"Created category: {category['name']} (slug: {category['slug']})")
        else:
            logger.info(f"Category \"{category['name']}\" already exists (slug: {category['slug']})")

    result = supabase.table("categories").select("name, slug").order("name").execute()
    logger.info("All categories:")
    for row in result.data or []:
        logger.info(f"   - {row['name']} (slug: {row['slug']})")
    return len(created)


def main() -> int:
    try:
        created = seed_categories(SupabaseClient.get_service_client())
    except Exception as e:
        logger.error(f"Seeding categories failed: {e}")
        return 1
    logger.info(f"Categories seeded: {created} created")
    return 0


if __name__ == "__main__":
    sys.exit(main())
