from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from sproutlog.schemas.plant import PlantSummary
from sproutlog.services.lifecycle import LATEST_PLANTED_DATE, PlantingStatus, describe


def _check_planted_date(value: Optional[date]) -> Optional[date]:
    if value is not None and value > LATEST_PLANTED_DATE:
        raise ValueError(f"planted_date must be on or before {LATEST_PLANTED_DATE.isoformat()}")
    return value


class PlantingCreate(BaseModel):
    garden_id: int
    plant_id: int
    location: Optional[str] = None
    location_id: Optional[int] = None
    planted_date: Optional[date] = None
    quantity: int = Field(default=1, gt=0)
    notes: Optional[str] = None

    @field_validator("planted_date")
    @classmethod
    def validate_planted_date(cls, v: Optional[date]) -> Optional[date]:
        return _check_planted_date(v)

    @model_validator(mode="after")
    def _location_given(self) -> "PlantingCreate":
        if not self.location and self.location_id is None:
            raise ValueError("Either location or location_id is required")
        return self


class PlantingUpdate(BaseModel):
    plant_id: Optional[int] = None
    location: Optional[str] = None
    location_id: Optional[int] = None
    planted_date: Optional[date] = None
    quantity: Optional[int] = Field(default=None, gt=0)
    notes: Optional[str] = None

    @field_validator("plant_id", "location", "planted_date", "quantity")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v

    @field_validator("planted_date")
    @classmethod
    def validate_planted_date(cls, v: Optional[date]) -> Optional[date]:
        return _check_planted_date(v)


class HarvestCreate(BaseModel):
    harvested_date: Optional[date] = None
    harvested_quantity: int = Field(gt=0)
    harvested_notes: Optional[str] = None


class PlantingRead(BaseModel):
    id: int
    garden_id: int
    plant_id: int
    location: str
    location_id: Optional[int] = None
    planted_date: date
    quantity: int
    notes: Optional[str] = None
    status: str
    harvested_date: Optional[date] = None
    harvested_quantity: Optional[int] = None
    harvested_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    plant: Optional[PlantSummary] = None

    # Derived on read
    current_status: Optional[PlantingStatus] = None
    elapsed_days: Optional[int] = None
    expected_sprout_date: Optional[date] = None
    expected_harvest_date: Optional[date] = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_planting(cls, planting, reference_date=None) -> "PlantingRead":
        read = cls.model_validate(planting)
        lifecycle = describe(planting, reference_date)
        read.current_status = lifecycle.status
        read.elapsed_days = lifecycle.elapsed_days
        read.expected_sprout_date = lifecycle.expected_sprout_date
        read.expected_harvest_date = lifecycle.expected_harvest_date
        return read
