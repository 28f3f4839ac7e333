from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sproutlog.core.deps import AdminUser, CurrentUser, get_db, get_plant_repository
from sproutlog.models.plant import Plant
from sproutlog.repositories import PlantRepository
from sproutlog.schemas.plant import (
    PlantCategory,
    PlantCreate,
    PlantListResponse,
    PlantRead,
    PlantSummary,
    PlantUpdate,
)

router = APIRouter(prefix="/plants", tags=["plants"])


@router.get("", response_model=PlantListResponse)
async def list_plants(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    name: str | None = Query(None, description="Partial match on name"),
    category: PlantCategory | None = Query(None, description="Filter by category (vegetable, herb, fruit)"),
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
):
    query = select(Plant)

    if name:
        query = query.where(Plant.name.ilike(f"%{name}%"))
    if category:
        query = query.where(Plant.category == category.value)

    count_result = await db.scalar(select(func.count()).select_from(query.subquery()))
    total = count_result or 0

    offset = (page - 1) * per_page
    result = await db.execute(query.order_by(Plant.name, Plant.id).offset(offset).limit(per_page))
    items = [PlantSummary.model_validate(p) for p in result.scalars().all()]

    return PlantListResponse(items=items, total=total, page=page, per_page=per_page)


@router.post("", response_model=PlantRead, status_code=status.HTTP_201_CREATED)
async def create_plant(
    data: PlantCreate,
    current_user: CurrentUser,
    plants: PlantRepository = Depends(get_plant_repository),
):
    return await plants.add(Plant(**data.model_dump(mode="json")))


@router.get("/{plant_id}", response_model=PlantRead)
async def get_plant(
    plant_id: int, current_user: CurrentUser, plants: PlantRepository = Depends(get_plant_repository)
):
    return await _get_plant(plants, plant_id)


@router.patch("/{plant_id}", response_model=PlantRead)
async def update_plant(
    plant_id: int,
    data: PlantUpdate,
    current_user: CurrentUser,
    plants: PlantRepository = Depends(get_plant_repository),
):
    plant = await _get_plant(plants, plant_id)
    return await plants.update(plant, data.model_dump(mode="json", exclude_unset=True))


@router.delete("/{plant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plant(
    plant_id: int, admin_user: AdminUser, plants: PlantRepository = Depends(get_plant_repository)
):
    plant = await _get_plant(plants, plant_id)
    if await plants.is_referenced(plant_id):
        raise HTTPException(status_code=409, detail="Plant is used by existing plantings")
    await plants.delete(plant)


async def _get_plant(plants: PlantRepository, plant_id: int) -> Plant:
    plant = await plants.get(plant_id)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    return plant
