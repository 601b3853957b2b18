from pydantic import BaseModel, Field
from typing import Optional


class ProvisionRequest(BaseModel):
    # Blank or missing falls back to the configured default name
    org_name: Optional[str] = Field(default=None, max_length=256)


class ProvisionResponse(BaseModel):
    org_id: str
    branch_id: str
