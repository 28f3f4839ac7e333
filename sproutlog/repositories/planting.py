from sqlalchemy import select
from sqlalchemy.orm import selectinload

from sproutlog.models.garden import Location
from sproutlog.models.plant import Plant
from sproutlog.models.planting import Planting
from sproutlog.repositories.base import SqlAlchemyRepository


class PlantRepository(SqlAlchemyRepository[Plant]):
    model = Plant
    order_by = (Plant.name,)

    async def is_referenced(self, plant_id: int) -> bool:
        found = await self.db.scalar(select(Planting.id).where(Planting.plant_id == plant_id).limit(1))
        return found is not None


class LocationRepository(SqlAlchemyRepository[Location]):
    model = Location
    order_by = (Location.name,)


class PlantingRepository(SqlAlchemyRepository[Planting]):
    model = Planting
    load_options = (selectinload(Planting.plant),)
    order_by = (Planting.planted_date, Planting.id)
