from typing import Optional

from sqlalchemy import func, or_, select

from sproutlog.models.garden import Garden, GardenCollaborator, Location
from sproutlog.models.planting import Planting
from sproutlog.models.user import User
from sproutlog.repositories.base import SqlAlchemyRepository


class UserRepository(SqlAlchemyRepository[User]):
    model = User
    order_by = (User.id,)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(self._select().where(User.email == email))
        return result.scalar_one_or_none()

    async def garden_counts(self, user_id: int) -> dict[str, int]:
        """Gardens, locations and plantings across every garden the user can see."""
        shared = select(GardenCollaborator.garden_id).where(GardenCollaborator.user_id == user_id)
        visible = (
            select(Garden.id)
            .where(or_(Garden.user_id == user_id, Garden.id.in_(shared)))
            .scalar_subquery()
        )
        harvested = Planting.status == "harvested"

        gardens = await self.db.scalar(select(func.count(Garden.id)).where(Garden.id.in_(visible)))
        locations = await self.db.scalar(
            select(func.count(Location.id)).where(Location.garden_id.in_(visible))
        )
        active = await self.db.scalar(
            select(func.count(Planting.id)).where(Planting.garden_id.in_(visible), ~harvested)
        )
        done = await self.db.scalar(
            select(func.count(Planting.id)).where(Planting.garden_id.in_(visible), harvested)
        )
        return {
            "gardens": gardens or 0,
            "locations": locations or 0,
            "active_plantings": active or 0,
            "harvested_plantings": done or 0,
        }
