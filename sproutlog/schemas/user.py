from datetime import datetime
from typing import Optional

from dateutil import tz
from pydantic import BaseModel, EmailStr, field_validator


class UserCreate(BaseModel):
    first_name: str
    last_name: Optional[str] = None
    email: EmailStr
    password: str


class UserUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    timezone: Optional[str] = None

    @field_validator("first_name")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("first_name cannot be null")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        # IANA name such as "America/Denver"; null clears it
        if v is not None and (not v.strip() or tz.gettz(v) is None):
            raise ValueError(f"Unknown time zone: {v}")
        return v


class UserRead(BaseModel):
    id: int
    first_name: str
    last_name: Optional[str]
    email: str
    role: str
    is_active: bool
    timezone: Optional[str]
    created_at: datetime
    last_login: Optional[datetime]

    model_config = {"from_attributes": True}


class UserRef(BaseModel):
    id: int
    first_name: str
    last_name: Optional[str] = None
    email: str

    model_config = {"from_attributes": True}


class UserStats(BaseModel):
    gardens: int
    locations: int
    active_plantings: int
    harvested_plantings: int
