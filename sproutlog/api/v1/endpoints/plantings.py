import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sproutlog.core.deps import (
    CurrentUser,
    ReferenceDate,
    get_accessible_garden,
    get_db,
    get_location_repository,
    get_plant_repository,
    get_planting_repository,
)
from sproutlog.models.plant import Plant
from sproutlog.models.planting import Planting
from sproutlog.models.user import User
from sproutlog.repositories import LocationRepository, PlantingRepository, PlantRepository
from sproutlog.schemas.planting import HarvestCreate, PlantingCreate, PlantingRead, PlantingUpdate
from sproutlog.services.lifecycle import (
    PlantingStatus,
    current_status,
    expected_harvest_date,
    expected_sprout_date,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["plantings"])


# ── Garden plantings list ─────────────────────────────────────────────────────


@router.get("/gardens/{garden_id}/plantings", response_model=list[PlantingRead])
async def list_garden_plantings(
    garden_id: int,
    current_user: CurrentUser,
    today: ReferenceDate,
    db: AsyncSession = Depends(get_db),
    plantings: PlantingRepository = Depends(get_planting_repository),
    search: Optional[str] = Query(None, description="Partial match on plant name or location"),
    status_filter: Optional[PlantingStatus] = Query(
        None, alias="status", description="Filter by current status (sprouting, growing, ready, harvested)"
    ),
):
    await get_accessible_garden(db, garden_id, current_user)
    rows = await plantings.list(garden_id=garden_id)

    if search:
        needle = search.lower()
        rows = [p for p in rows if needle in p.plant.name.lower() or needle in p.location.lower()]
    if status_filter:
        rows = [
            p for p in rows
            if current_status(
                p.planted_date,
                p.plant.days_to_sprout,
                p.plant.days_to_harvest,
                persisted_status=p.status,
                reference_date=today,
            ) == status_filter
        ]

    return [PlantingRead.from_planting(p, today) for p in rows]


# ── Plantings ─────────────────────────────────────────────────────────────────


@router.post("/plantings", response_model=PlantingRead, status_code=status.HTTP_201_CREATED)
async def create_planting(
    data: PlantingCreate,
    current_user: CurrentUser,
    today: ReferenceDate,
    db: AsyncSession = Depends(get_db),
    plantings: PlantingRepository = Depends(get_planting_repository),
    plants: PlantRepository = Depends(get_plant_repository),
    locations: LocationRepository = Depends(get_location_repository),
):
    await get_accessible_garden(db, data.garden_id, current_user, write=True)
    values = data.model_dump()
    plant = await _check_plant(plants, values["plant_id"])
    await _resolve_location(locations, data.garden_id, values)
    if values["planted_date"] is None:
        values["planted_date"] = today
    _check_milestones(values["planted_date"], plant)

    planting = await plantings.add(Planting(**values, status=PlantingStatus.planted.value))
    logger.info("garden %d: planted %s (planting %d)", planting.garden_id, planting.plant.name, planting.id)
    return PlantingRead.from_planting(planting, today)


@router.get("/plantings/{planting_id}", response_model=PlantingRead)
async def get_planting(
    planting_id: int,
    current_user: CurrentUser,
    today: ReferenceDate,
    db: AsyncSession = Depends(get_db),
    plantings: PlantingRepository = Depends(get_planting_repository),
):
    planting = await _get_visible_planting(db, plantings, planting_id, current_user)
    return PlantingRead.from_planting(planting, today)


@router.patch("/plantings/{planting_id}", response_model=PlantingRead)
async def update_planting(
    planting_id: int,
    data: PlantingUpdate,
    current_user: CurrentUser,
    today: ReferenceDate,
    db: AsyncSession = Depends(get_db),
    plantings: PlantingRepository = Depends(get_planting_repository),
    plants: PlantRepository = Depends(get_plant_repository),
    locations: LocationRepository = Depends(get_location_repository),
):
    planting = await _get_visible_planting(db, plantings, planting_id, current_user, write=True)
    values = data.model_dump(exclude_unset=True)
    plant = await _check_plant(plants, values["plant_id"]) if "plant_id" in values else planting.plant
    _check_milestones(values.get("planted_date", planting.planted_date), plant)
    if "location_id" in values:
        await _resolve_location(locations, planting.garden_id, values)

    planting = await plantings.update(planting, values)
    return PlantingRead.from_planting(planting, today)


@router.delete("/plantings/{planting_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_planting(
    planting_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    plantings: PlantingRepository = Depends(get_planting_repository),
):
    planting = await _get_visible_planting(db, plantings, planting_id, current_user, write=True)
    await plantings.delete(planting)


# ── Harvest ───────────────────────────────────────────────────────────────────


@router.post("/plantings/{planting_id}/harvest", response_model=PlantingRead)
async def harvest_planting(
    planting_id: int,
    data: HarvestCreate,
    current_user: CurrentUser,
    today: ReferenceDate,
    db: AsyncSession = Depends(get_db),
    plantings: PlantingRepository = Depends(get_planting_repository),
):
    planting = await _get_visible_planting(db, plantings, planting_id, current_user, write=True)
    if planting.status == PlantingStatus.harvested:
        raise HTTPException(status_code=409, detail="Planting already harvested")

    planting = await plantings.update(
        planting,
        {
            "status": PlantingStatus.harvested.value,
            "harvested_date": data.harvested_date or today,
            "harvested_quantity": data.harvested_quantity,
            "harvested_notes": data.harvested_notes,
        },
    )
    logger.info("planting %d harvested: %d", planting.id, planting.harvested_quantity)
    return PlantingRead.from_planting(planting, today)


# ── Helpers ───────────────────────────────────────────────────────────────────


async def _check_plant(plants: PlantRepository, plant_id: int) -> Plant:
    plant = await plants.get(plant_id)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    return plant


def _check_milestones(planted_date, plant: Plant) -> None:
    # Raises InvalidDateError before anything is written
    expected_sprout_date(planted_date, plant.days_to_sprout)
    expected_harvest_date(planted_date, plant.days_to_harvest)


async def _resolve_location(locations: LocationRepository, garden_id: int, values: dict[str, Any]) -> None:
    """Validate location_id against the garden and default the location text to its name."""
    location_id = values.get("location_id")
    if location_id is None:
        return
    location = await locations.get(location_id)
    if not location or location.garden_id != garden_id:
        raise HTTPException(status_code=404, detail="Location not found")
    if not values.get("location"):
        values["location"] = location.name


async def _get_visible_planting(
    db: AsyncSession, plantings: PlantingRepository, planting_id: int, user: User, write: bool = False
) -> Planting:
    planting = await plantings.get(planting_id)
    if not planting:
        raise HTTPException(status_code=404, detail="Planting not found")
    try:
        await get_accessible_garden(db, planting.garden_id, user, write=write)
    except HTTPException as exc:
        if exc.status_code == 404:
            raise HTTPException(status_code=404, detail="Planting not found")
        raise
    return planting
