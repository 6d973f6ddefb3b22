"""
Database Connection Check
Verifies the Supabase database is reachable and reports row counts for the
marketplace tables.

Usage: python -m storefront.scripts.check_db_connection
"""

import logging
import re
import sys
from typing import Dict

from supabase import Client

from storefront.config.settings import settings
from storefront.database.supabase_client import SupabaseClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TABLES = ["users", "seller_profiles", "categories", "products", "orders"]


def mask_url(url: str) -> str:
    return re.sub(r":[^:@/]+@", ":****@", url)


def count_rows(supabase: Client) -> Dict[str, int]:
    counts = {}
    for table in TABLES:
        result = supabase.table(table)\
            .select("id", count="exact")\
            .limit(1)\
            .execute()
        counts[table] = result.count or 0
    return counts


def main() -> int:
    logger.info("Testing database connection...")
    logger.info(f"SUPABASE_URL: {mask_url(settings.supabase_url) or '(not set)'}")
    try:
        counts = count_rows(SupabaseClient.get_service_client())
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        logger.error("Check SUPABASE_URL / SUPABASE_KEY and that the schema has been applied.")
        return 1

    logger.info("Database connection successful!")
    logger.info(f"Tables ({len(counts)}):")
    for table, count in counts.items():
        logger.info(f"   - {table}: {count} rows")
    return 0


if __name__ == "__main__":
    sys.exit(main())
