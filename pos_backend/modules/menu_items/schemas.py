from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime


class MenuItemCreate(BaseModel):
    org_id: str
    name: str = Field(min_length=1, max_length=256)
    price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    is_active: bool = True


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=256)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    is_active: Optional[bool] = None


class MenuItemResponse(BaseModel):
    id: str
    org_id: str
    name: str
    price: Decimal
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
