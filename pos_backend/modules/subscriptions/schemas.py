from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class SubscriptionUpdate(BaseModel):
    plan_id: Optional[str] = None
    status: Optional[str] = None
    # Explicit null clears the period end
    period_end: Optional[datetime] = None

    @field_validator("plan_id", "status")
    @classmethod
    def validate_not_null(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("must be a non-empty string")
        return v.strip()


class SubscriptionResponse(BaseModel):
    id: str
    org_id: str
    plan_id: str
    status: str
    period_end: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True
