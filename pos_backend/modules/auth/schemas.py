from pydantic import BaseModel, EmailStr
from typing import List, Optional
from datetime import datetime


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    full_name: Optional[str] = None


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    message: str
    # None when the project requires email confirmation before a session exists
    access_token: Optional[str] = None


class MembershipSummary(BaseModel):
    org_id: str
    role: str
    created_at: datetime


class MeResponse(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: dict = {}
    memberships: List[MembershipSummary] = []
