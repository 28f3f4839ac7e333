from datetime import date
from typing import Optional

from pydantic import BaseModel

from sproutlog.schemas.planting import PlantingRead


class GardenStatsRead(BaseModel):
    active_plantings: int
    ready_harvest: int
    sprouting_soon: int
    plant_varieties: int

    model_config = {"from_attributes": True}


class DashboardRead(BaseModel):
    stats: GardenStatsRead
    recent_plantings: list[PlantingRead]
    upcoming_harvest: list[PlantingRead]


class TimelineEventRead(BaseModel):
    date: date
    kind: str
    planting_id: int
    title: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class TimelineRead(BaseModel):
    year: int
    month: int
    events: list[TimelineEventRead]
    upcoming: list[TimelineEventRead]
