import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException
from supabase import Client

from storefront.core.gate import Session
from storefront.core.roles import Role, parse_role
from storefront.modules.auth.schemas import (
    LoginRequest, RegisterRequest, RegisterResponse, TokenResponse
)

logger = logging.getLogger(__name__)


def _is_duplicate_error(message: str) -> bool:
    message = message.lower()
    return (
        "already registered" in message
        or "already exists" in message
        or "duplicate key" in message
    )


class AuthService:
    """
    supabase: shared client for table queries
    auth_client: per-request client for sign-up, sign-in and token checks
    admin_client: service-role client for admin auth calls
    """

    def __init__(self, supabase: Client, auth_client: Client, admin_client: Client):
        self.supabase = supabase
        self.auth_client = auth_client
        self.admin_client = admin_client

    def _find_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("users")\
            .select("id")\
            .eq("email", email)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def _get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("users")\
            .select("id, email, name, role")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def register(self, register_data: RegisterRequest, role: Role = Role.BUYER) -> RegisterResponse:
        """Register a new user: Supabase Auth holds the credentials, `users` holds the profile and role"""
        user_id = None
        try:
            if self._find_user_by_email(register_data.email):
                raise HTTPException(status_code=400, detail="Account with this email already exists")

            auth_response = self.auth_client.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": {"name": register_data.name}
                }
            })

            if not auth_response.user:
                raise HTTPException(status_code=400, detail="Failed to register user")

            user_id = auth_response.user.id
            self.supabase.table("users").insert({
                "id": user_id,
                "email": register_data.email,
                "name": register_data.name,
                "role": role.value,
                "email_verified": datetime.now(timezone.utc).isoformat(),
            }).execute()

            if role == Role.SELLER:
                self.supabase.table("seller_profiles").insert({
                    "user_id": user_id,
                    "store_name": f"{register_data.name}'s Store",
                    "verified": False,  # Requires admin approval
                }).execute()

            logger.info("Registered %s account %s", role.value, user_id)
            return RegisterResponse(
                id=user_id,
                email=register_data.email,
                name=register_data.name,
                role=role.value,
                message="Seller account created successfully" if role == Role.SELLER
                else "Account created successfully",
            )
        except HTTPException:
            raise
        except Exception as e:
            if user_id is not None:
                self._undo_registration(user_id)
            if _is_duplicate_error(str(e)):
                raise HTTPException(status_code=400, detail="Account with this email already exists")
            logger.exception("Registration failed for %s", register_data.email)
            raise HTTPException(status_code=500, detail="Internal server error")

    def _undo_registration(self, user_id: str) -> None:
        """Remove whatever a failed registration already wrote, so the email can be registered again"""
        for table, column in (("seller_profiles", "user_id"), ("users", "id")):
            try:
                self.supabase.table(table).delete().eq(column, user_id).execute()
            except Exception:
                logger.exception("Could not remove %s rows of failed registration %s", table, user_id)
        try:
            self.admin_client.auth.admin.delete_user(user_id)
        except Exception:
            logger.exception("Could not delete auth user of failed registration %s", user_id)

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.auth_client.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            profile = self._get_profile(auth_response.user.id)
            role = parse_role(profile.get("role")) if profile else None
            if role is None:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email,
                role=role.value,
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e).lower()
            if "invalid" in error_message or "credentials" in error_message:
                raise HTTPException(status_code=401, detail="Invalid email or password")
            logger.exception("Login failed for %s", login_data.email)
            raise HTTPException(status_code=500, detail="Internal server error")

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve a Supabase access token to {id, email, name, role}; 401 if it cannot be resolved"""
        try:
            user_response = self.auth_client.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            profile = self._get_profile(user.id)
            role = parse_role(profile.get("role")) if profile else None
            if role is None:
                raise HTTPException(status_code=401, detail="Unknown user")
            return {
                "id": user.id,
                "email": profile.get("email") or user.email,
                "name": profile.get("name"),
                "role": role.value,
            }
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            logger.warning("Token resolution failed: %s", e)
            raise HTTPException(status_code=401, detail="Authentication failed")

    def resolve_session(self, token: str) -> Optional[Session]:
        """Like get_current_user, but any failure means no session"""
        try:
            user_data = self.get_current_user(token)
        except HTTPException:
            return None
        return Session(user_id=user_data["id"], role=Role(user_data["role"]))

    def logout(self, token: str) -> bool:
        """Revoke the sessions behind `token`; other users are unaffected"""
        try:
            self.admin_client.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning("Sign-out failed: %s", e)
            return False
