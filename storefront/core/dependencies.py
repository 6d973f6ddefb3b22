"""
Core dependencies for route protection and role checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from fastapi.security.utils import get_authorization_scheme_param
from storefront.config.settings import settings
from storefront.core.gate import Session
from storefront.core.roles import Role
from storefront.database.supabase_client import (
    create_auth_client, get_auth_client, get_service_supabase, get_supabase
)
from storefront.modules.auth.service import AuthService
from supabase import Client
from typing import Callable, Dict, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    auth_client: Client = Depends(get_auth_client),
    admin_client: Client = Depends(get_service_supabase),
) -> AuthService:
    return AuthService(supabase, auth_client, admin_client)


def extract_token(request: Request) -> Optional[str]:
    """Bearer token from the Authorization header, falling back to the session cookie"""
    scheme, credentials = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return request.cookies.get(settings.session_cookie_name) or None


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict:
    """Any authenticated user; 401 otherwise"""
    token = credentials.credentials if credentials else extract_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_service.get_current_user(token)


def require_role(*roles: Role):
    """Factory function to create a role check dependency"""
    allowed = [role.value for role in roles]

    def check_role(user_data: Dict = Depends(get_current_user)) -> Dict:
        if user_data.get("role") not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Forbidden: required role(s): {', '.join(allowed)}"
            )
        return user_data
    return check_role


require_buyer = require_role(Role.BUYER)
require_seller = require_role(Role.SELLER)


def build_auth_service() -> AuthService:
    return AuthService(get_supabase(), create_auth_client(), get_service_supabase())


class SessionResolver:
    """
    Session resolver used by the authorization gate middleware.

    Runs outside FastAPI dependency injection, so the AuthService it uses
    comes from `auth_service_factory`, which tests may replace.
    """

    def __init__(self, auth_service_factory: Callable[[], AuthService] = build_auth_service):
        self.auth_service_factory = auth_service_factory

    def __call__(self, token: str) -> Optional[Session]:
        return self.auth_service_factory().resolve_session(token)
