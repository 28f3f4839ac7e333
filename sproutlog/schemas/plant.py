from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from sproutlog.services.lifecycle import MAX_GROWTH_DAYS


class PlantCategory(str, Enum):
    vegetable = "vegetable"
    herb = "herb"
    fruit = "fruit"


class PlantCreate(BaseModel):
    name: str
    description: Optional[str] = None
    category: PlantCategory
    days_to_sprout: int = Field(gt=0, le=MAX_GROWTH_DAYS)
    days_to_harvest: int = Field(gt=0, le=MAX_GROWTH_DAYS)
    season: str
    image_url: Optional[str] = None


class PlantUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[PlantCategory] = None
    days_to_sprout: Optional[int] = Field(default=None, gt=0, le=MAX_GROWTH_DAYS)
    days_to_harvest: Optional[int] = Field(default=None, gt=0, le=MAX_GROWTH_DAYS)
    season: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("name", "category", "days_to_sprout", "days_to_harvest", "season")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v


class PlantSummary(BaseModel):
    id: int
    name: str
    category: str
    days_to_sprout: int
    days_to_harvest: int
    season: str
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class PlantRead(PlantSummary):
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PlantListResponse(BaseModel):
    items: list[PlantSummary]
    total: int
    page: int
    per_page: int
