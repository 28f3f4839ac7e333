from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, field_validator

from sproutlog.schemas.user import UserRef


class CollaboratorRole(str, Enum):
    viewer = "viewer"
    editor = "editor"


class GardenCreate(BaseModel):
    name: str
    description: Optional[str] = None


class GardenUpdate(GardenCreate):
    name: Optional[str] = None

    @field_validator("name")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("name cannot be null")
        return v


class GardenRead(BaseModel):
    id: int
    user_id: int
    name: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime
    # Caller's relationship to the garden: owner, editor or viewer
    role: Optional[str] = None

    model_config = {"from_attributes": True}


class CollaboratorCreate(BaseModel):
    email: EmailStr
    role: CollaboratorRole = CollaboratorRole.editor


class CollaboratorRead(BaseModel):
    id: int
    garden_id: int
    user_id: int
    role: str
    created_at: datetime
    user: UserRef

    model_config = {"from_attributes": True}
