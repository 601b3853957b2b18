"""
Core dependencies for caller identity and policy-scoped store access
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from supabase import Client
from typing import Optional
from pos_backend.core.errors import Unauthenticated
from pos_backend.core.policy import ExecutionContext
from pos_backend.core.store import TenancyStore
from pos_backend.database.session import get_db
from pos_backend.database.supabase_client import get_supabase
from pos_backend.modules.auth.service import AuthService

# auto_error=False so a missing header surfaces as Unauthenticated (401), not 403
security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return credentials.credentials


def get_current_user_id(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def get_store(
    user_data: dict = Depends(get_current_user_id),
    db: Session = Depends(get_db)
) -> TenancyStore:
    """Store scoped to the authenticated caller; every call goes through the policy engine."""
    return TenancyStore(db, ExecutionContext.for_user(user_data["id"]))


def get_public_store(db: Session = Depends(get_db)) -> TenancyStore:
    """Store for unauthenticated callers; only public tables are visible."""
    return TenancyStore(db, ExecutionContext.anonymous())
