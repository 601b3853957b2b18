from pydantic import BaseModel
from typing import Any, Dict
from datetime import datetime


class PlanResponse(BaseModel):
    id: str
    name: str
    monthly_price_cents: int
    features: Dict[str, Any]
    created_at: datetime

    class Config:
        from_attributes = True
