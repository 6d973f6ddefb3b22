"""
Seller Verification Script
Marks a seller profile as verified so its products appear on category pages.
Without an email, lists every seller profile with its verification status.

Usage: python -m storefront.scripts.verify_seller [seller-email]
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from supabase import Client

from storefront.database.supabase_client import SupabaseClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def list_sellers(supabase: Client) -> List[Dict[str, Any]]:
    result = supabase.table("seller_profiles")\
        .select("*, users(email, name)")\
        .order("created_at")\
        .execute()
    return result.data or []


def verify_seller(supabase: Client, email: str) -> Dict[str, Any]:
    """Returns the verified seller profile"""
    user_result = supabase.table("users")\
        .select("id")\
        .eq("email", email)\
        .limit(1)\
        .execute()
    if not user_result.data:
        raise LookupError(f"User with email \"{email}\" not found")

    user_id = user_result.data[0]["id"]
    profile_result = supabase.table("seller_profiles")\
        .select("*")\
        .eq("user_id", user_id)\
        .limit(1)\
        .execute()
    if not profile_result.data:
        raise LookupError(f"User \"{email}\" does not have a seller profile")

    profile = profile_result.data[0]
    supabase.table("seller_profiles")\
        .update({"verified": True})\
        .eq("id", profile["id"])\
        .execute()
    return {**profile, "verified": True}


def _log_sellers(sellers: List[Dict[str, Any]]) -> None:
    logger.info("All Sellers:")
    for index, seller in enumerate(sellers, start=1):
        status = "Verified" if seller.get("verified") else "Unverified"
        user = seller.get("users") or {}
        logger.info(f"{index}. {seller['store_name']:<30} {status}")
        logger.info(f"   Email: {user.get('email')}")
        logger.info(f"   User ID: {seller['user_id']}")
        logger.info(f"   Seller Profile ID: {seller['id']}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Verify a seller, or list sellers")
    parser.add_argument("email", nargs="?")
    args = parser.parse_args(argv)

    try:
        supabase = SupabaseClient.get_service_client()
        if not args.email:
            _log_sellers(list_sellers(supabase))
            logger.info("To verify a seller, run: python -m storefront.scripts.verify_seller <seller-email>")
            return 0
        profile = verify_seller(supabase, args.email)
    except LookupError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Seller verification failed: {e}")
        return 1

    logger.info(f"Seller \"{profile['store_name']}\" ({args.email}) has been verified!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
