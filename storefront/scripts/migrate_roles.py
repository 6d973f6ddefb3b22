"""
Role Migration Script
Rewrites legacy role values on the users table: USER -> BUYER, ADMIN -> SELLER.

Usage: python -m storefront.scripts.migrate_roles
"""

import logging
import sys
from typing import Dict

from supabase import Client

from storefront.core.roles import LEGACY_ROLE_MAP
from storefront.database.supabase_client import SupabaseClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def migrate_roles(supabase: Client) -> Dict[str, int]:
    """Returns the number of users updated per legacy role"""
    logger.info("Migrating user roles...")
    updated = {}
    for legacy_role, role in LEGACY_ROLE_MAP.items():
        result = supabase.table("users")\
            .update({"role": role.value})\
            .eq("role", legacy_role)\
            .execute()
        updated[legacy_role] = len(result.data or [])
        logger.info(f"Updated {updated[legacy_role]} users from {legacy_role} to {role.value}")
    return updated


def main() -> int:
    try:
        migrate_roles(SupabaseClient.get_service_client())
    except Exception as e:
        logger.error(f"Migration error: {e}")
        if "enum" in str(e).lower() or "role" in str(e).lower():
            logger.error("The role column may not accept BUYER/SELLER yet; update the database enum first.")
        return 1
    logger.info("Migration completed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
