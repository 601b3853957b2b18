from pydantic import BaseModel, Field
from datetime import datetime


class BranchCreate(BaseModel):
    org_id: str
    name: str = Field(min_length=1, max_length=256)


class BranchUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=256)


class BranchResponse(BaseModel):
    id: str
    org_id: str
    name: str
    created_at: datetime

    class Config:
        from_attributes = True
