from fastapi import APIRouter, Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from storefront.config.settings import settings
from storefront.core.dependencies import get_auth_service, get_current_user
from storefront.core.rate_limit import limiter
from storefront.core.roles import Role
from storefront.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    CurrentUserResponse
)
from storefront.modules.auth.service import AuthService
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new buyer"""
    return service.register(register_data, role=Role.BUYER)


@router.post("/register-seller", response_model=RegisterResponse, status_code=201)
async def register_seller(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new seller with an unverified store profile"""
    return service.register(register_data, role=Role.SELLER)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(current_user: Dict = Depends(get_current_user)):
    """Get current authenticated user and role (for frontend UI)."""
    return current_user
