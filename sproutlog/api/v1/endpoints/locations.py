from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from sproutlog.core.deps import CurrentUser, get_accessible_garden, get_db, get_location_repository
from sproutlog.models.garden import Location
from sproutlog.models.user import User
from sproutlog.repositories import LocationRepository
from sproutlog.schemas.location import LocationCreate, LocationRead, LocationUpdate

router = APIRouter(tags=["locations"])


# ── Garden locations ─────────────────────────────────────────────────────────


@router.get("/gardens/{garden_id}/locations", response_model=list[LocationRead])
async def list_locations(
    garden_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    locations: LocationRepository = Depends(get_location_repository),
):
    await get_accessible_garden(db, garden_id, current_user)
    return await locations.list(garden_id=garden_id)


@router.post(
    "/gardens/{garden_id}/locations", response_model=LocationRead, status_code=status.HTTP_201_CREATED
)
async def create_location(
    garden_id: int,
    data: LocationCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    locations: LocationRepository = Depends(get_location_repository),
):
    await get_accessible_garden(db, garden_id, current_user, write=True)
    return await locations.add(Location(**data.model_dump(), garden_id=garden_id))


# ── Location routes (prefix /locations) ──────────────────────────────────────


@router.get("/locations/{location_id}", response_model=LocationRead)
async def get_location(
    location_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    locations: LocationRepository = Depends(get_location_repository),
):
    return await _get_visible_location(db, locations, location_id, current_user)


@router.patch("/locations/{location_id}", response_model=LocationRead)
async def update_location(
    location_id: int,
    data: LocationUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    locations: LocationRepository = Depends(get_location_repository),
):
    location = await _get_visible_location(db, locations, location_id, current_user, write=True)
    return await locations.update(location, data.model_dump(exclude_unset=True))


@router.delete("/locations/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_location(
    location_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    locations: LocationRepository = Depends(get_location_repository),
):
    location = await _get_visible_location(db, locations, location_id, current_user, write=True)
    await locations.delete(location)


# ── Helpers ───────────────────────────────────────────────────────────────────


async def _get_visible_location(
    db: AsyncSession, locations: LocationRepository, location_id: int, user: User, write: bool = False
) -> Location:
    location = await locations.get(location_id)
    if not location:
        raise HTTPException(status_code=404, detail="Location not found")
    try:
        await get_accessible_garden(db, location.garden_id, user, write=write)
    except HTTPException as exc:
        # Don't reveal locations in gardens the user can't see
        if exc.status_code == 404:
            raise HTTPException(status_code=404, detail="Location not found")
        raise
    return location
