from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from pos_backend.modules.organizations.models import OrgRole


class OrganizationUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=256)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Organization name cannot be empty")
        return v


class OrganizationResponse(BaseModel):
    id: str
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class MemberAdd(BaseModel):
    user_id: str
    role: OrgRole = OrgRole.STAFF


class MemberRoleUpdate(BaseModel):
    role: OrgRole


class MemberResponse(BaseModel):
    user_id: str
    org_id: str
    role: OrgRole
    created_at: datetime

    class Config:
        from_attributes = True
