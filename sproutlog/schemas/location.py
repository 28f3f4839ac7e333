from datetime import datetime
from typing import Optional
from pydantic import BaseModel, field_validator


class LocationCreate(BaseModel):
    name: str
    description: Optional[str] = None


class LocationUpdate(LocationCreate):
    name: Optional[str] = None

    @field_validator("name")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("name cannot be null")
        return v


class LocationRead(BaseModel):
    id: int
    garden_id: int
    name: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
