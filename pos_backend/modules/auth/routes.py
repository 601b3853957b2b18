from fastapi import APIRouter, Depends, Request
from pos_backend.core.dependencies import get_auth_service, get_current_token, get_current_user_id, get_store
from pos_backend.core.limiter import limiter
from pos_backend.core.store import TenancyStore
from pos_backend.config.settings import settings
from pos_backend.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    MeResponse, MembershipSummary
)
from pos_backend.modules.auth.service import AuthService
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
@limiter.limit(settings.auth_rate_limit)
async def register(
    request: Request,
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.auth_rate_limit)
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


@router.get("/me", response_model=MeResponse)
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
    store: TenancyStore = Depends(get_store),
):
    """Get current authenticated user and the organizations they belong to."""
    memberships = store.select("org_memberships", {"user_id": current_user["id"]})
    return MeResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        user_metadata=current_user.get("user_metadata") or {},
        memberships=[MembershipSummary(**m) for m in memberships],
    )
