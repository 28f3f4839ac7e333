import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from sproutlog.core.deps import (
    ROLE_OWNER,
    CurrentUser,
    ReferenceDate,
    get_accessible_garden,
    get_db,
    get_planting_repository,
    get_user_repository,
)
from sproutlog.models.garden import Garden, GardenCollaborator
from sproutlog.repositories import PlantingRepository, UserRepository
from sproutlog.schemas.garden import (
    CollaboratorCreate,
    CollaboratorRead,
    GardenCreate,
    GardenRead,
    GardenUpdate,
)
from sproutlog.schemas.planting import PlantingRead
from sproutlog.schemas.stats import DashboardRead, GardenStatsRead, TimelineEventRead, TimelineRead
from sproutlog.services.dashboard import aggregate, get_garden_stats, recent_plantings, upcoming_harvest
from sproutlog.services.timeline import month_events, upcoming_events

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/gardens", tags=["gardens"])


def _garden_to_read(garden: Garden, role: str) -> GardenRead:
    read = GardenRead.model_validate(garden)
    read.role = role
    return read


# ── Gardens ──────────────────────────────────────────────────────────────────


@router.get("", response_model=list[GardenRead])
async def list_gardens(current_user: CurrentUser, db: AsyncSession = Depends(get_db)):
    shared = await db.execute(
        select(GardenCollaborator.garden_id, GardenCollaborator.role).where(
            GardenCollaborator.user_id == current_user.id
        )
    )
    shared_roles = {row.garden_id: row.role for row in shared}

    result = await db.execute(
        select(Garden)
        .where(or_(Garden.user_id == current_user.id, Garden.id.in_(list(shared_roles))))
        .order_by(Garden.created_at, Garden.id)
    )
    return [
        _garden_to_read(g, ROLE_OWNER if g.user_id == current_user.id else shared_roles[g.id])
        for g in result.scalars().all()
    ]


@router.post("", response_model=GardenRead, status_code=status.HTTP_201_CREATED)
async def create_garden(data: GardenCreate, current_user: CurrentUser, db: AsyncSession = Depends(get_db)):
    garden = Garden(**data.model_dump(), user_id=current_user.id)
    db.add(garden)
    await db.commit()
    await db.refresh(garden)
    return _garden_to_read(garden, ROLE_OWNER)


@router.get("/{garden_id}", response_model=GardenRead)
async def get_garden(garden_id: int, current_user: CurrentUser, db: AsyncSession = Depends(get_db)):
    garden, role = await get_accessible_garden(db, garden_id, current_user)
    return _garden_to_read(garden, role)


@router.patch("/{garden_id}", response_model=GardenRead)
async def update_garden(
    garden_id: int, data: GardenUpdate, current_user: CurrentUser, db: AsyncSession = Depends(get_db)
):
    garden, role = await get_accessible_garden(db, garden_id, current_user, write=True)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(garden, field, value)
    await db.commit()
    await db.refresh(garden)
    return _garden_to_read(garden, role)


@router.delete("/{garden_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_garden(garden_id: int, current_user: CurrentUser, db: AsyncSession = Depends(get_db)):
    garden, _ = await get_accessible_garden(db, garden_id, current_user, owner_only=True)
    await db.delete(garden)
    await db.commit()


# ── Collaborators ────────────────────────────────────────────────────────────


@router.get("/{garden_id}/collaborators", response_model=list[CollaboratorRead])
async def list_collaborators(garden_id: int, current_user: CurrentUser, db: AsyncSession = Depends(get_db)):
    await get_accessible_garden(db, garden_id, current_user)
    result = await db.execute(
        select(GardenCollaborator)
        .where(GardenCollaborator.garden_id == garden_id)
        .options(selectinload(GardenCollaborator.user))
        .order_by(GardenCollaborator.created_at, GardenCollaborator.id)
    )
    return result.scalars().all()


@router.post(
    "/{garden_id}/collaborators", response_model=CollaboratorRead, status_code=status.HTTP_201_CREATED
)
async def add_collaborator(
    garden_id: int,
    data: CollaboratorCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    users: UserRepository = Depends(get_user_repository),
):
    garden, _ = await get_accessible_garden(db, garden_id, current_user, owner_only=True)
    user = await users.get_by_email(data.email)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if user.id == garden.user_id:
        raise HTTPException(status_code=409, detail="The owner cannot be added as a collaborator")

    existing = await db.scalar(
        select(GardenCollaborator.id).where(
            GardenCollaborator.garden_id == garden_id, GardenCollaborator.user_id == user.id
        )
    )
    if existing:
        raise HTTPException(status_code=409, detail="User is already a collaborator")

    collaborator = GardenCollaborator(garden_id=garden_id, user_id=user.id, role=data.role.value)
    db.add(collaborator)
    await db.commit()
    logger.info("garden %d: added collaborator %d as %s", garden_id, user.id, data.role.value)

    result = await db.execute(
        select(GardenCollaborator)
        .where(GardenCollaborator.id == collaborator.id)
        .options(selectinload(GardenCollaborator.user))
    )
    return result.scalar_one()


@router.delete("/{garden_id}/collaborators/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_collaborator(
    garden_id: int, user_id: int, current_user: CurrentUser, db: AsyncSession = Depends(get_db)
):
    await get_accessible_garden(db, garden_id, current_user, owner_only=True)
    result = await db.execute(
        select(GardenCollaborator).where(
            GardenCollaborator.garden_id == garden_id, GardenCollaborator.user_id == user_id
        )
    )
    collaborator = result.scalar_one_or_none()
    if not collaborator:
        raise HTTPException(status_code=404, detail="Collaborator not found")
    await db.delete(collaborator)
    await db.commit()
    logger.info("garden %d: removed collaborator %d", garden_id, user_id)


# ── Dashboard ────────────────────────────────────────────────────────────────


@router.get("/{garden_id}/stats", response_model=GardenStatsRead)
async def garden_stats(
    garden_id: int,
    current_user: CurrentUser,
    today: ReferenceDate,
    db: AsyncSession = Depends(get_db),
    plantings: PlantingRepository = Depends(get_planting_repository),
):
    await get_accessible_garden(db, garden_id, current_user)
    return await get_garden_stats(plantings, garden_id, today)


@router.get("/{garden_id}/dashboard", response_model=DashboardRead)
async def garden_dashboard(
    garden_id: int,
    current_user: CurrentUser,
    today: ReferenceDate,
    db: AsyncSession = Depends(get_db),
    plantings: PlantingRepository = Depends(get_planting_repository),
):
    await get_accessible_garden(db, garden_id, current_user)
    rows = await plantings.list(garden_id=garden_id)
    return DashboardRead(
        stats=GardenStatsRead.model_validate(aggregate(rows, today)),
        recent_plantings=[PlantingRead.from_planting(p, today) for p in recent_plantings(rows)],
        upcoming_harvest=[PlantingRead.from_planting(p, today) for p in upcoming_harvest(rows, today)],
    )


@router.get("/{garden_id}/timeline", response_model=TimelineRead)
async def garden_timeline(
    garden_id: int,
    current_user: CurrentUser,
    today: ReferenceDate,
    db: AsyncSession = Depends(get_db),
    plantings: PlantingRepository = Depends(get_planting_repository),
    year: Optional[int] = Query(None, ge=1, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
):
    await get_accessible_garden(db, garden_id, current_user)
    year = year or today.year
    month = month or today.month
    rows = await plantings.list(garden_id=garden_id)
    return TimelineRead(
        year=year,
        month=month,
        events=[TimelineEventRead.model_validate(e) for e in month_events(rows, year, month)],
        upcoming=[TimelineEventRead.model_validate(e) for e in upcoming_events(rows, today)],
    )
