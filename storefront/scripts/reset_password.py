"""
Password Reset Script
Sets a new password for one user. Requires SUPABASE_SERVICE_ROLE_KEY since
passwords live in Supabase Auth.

Usage: python -m storefront.scripts.reset_password <email> <new-password>
"""

import argparse
import logging
import sys
from typing import List, Optional

from supabase import Client

from storefront.config.settings import settings
from storefront.database.supabase_client import SupabaseClient
from storefront.modules.auth.schemas import MIN_PASSWORD_LENGTH

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def reset_password(supabase: Client, email: str, new_password: str) -> str:
    """Returns the id of the updated user"""
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    logger.info(f"Resetting password for: {email}")
    result = supabase.table("users")\
        .select("id")\
        .eq("email", email)\
        .limit(1)\
        .execute()
    if not result.data:
        raise LookupError(f"User with email \"{email}\" does not exist")

    user_id = result.data[0]["id"]
    supabase.auth.admin.update_user_by_id(user_id, {"password": new_password})
    return user_id


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Reset a user's password")
    parser.add_argument("email")
    parser.add_argument("new_password")
    args = parser.parse_args(argv)

    if not settings.supabase_service_role_key:
        logger.error("SUPABASE_SERVICE_ROLE_KEY is required to update passwords")
        return 1

    try:
        reset_password(SupabaseClient.get_service_client(), args.email, args.new_password)
    except (ValueError, LookupError) as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Password reset failed: {e}")
        return 1
    logger.info(f"Password reset successfully for {args.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
