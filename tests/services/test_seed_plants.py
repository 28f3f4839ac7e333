from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sproutlog.models.plant import Plant
from sproutlog.tasks.seed_plants import SAMPLE_PLANTS, seed_plants


async def test_seed_plants_inserts_samples(db: AsyncSession):
    inserted = await seed_plants(db)
    assert inserted == len(SAMPLE_PLANTS)
    count = await db.scalar(select(func.count()).select_from(Plant))
    assert count == len(SAMPLE_PLANTS)


async def test_seed_plants_is_idempotent(db: AsyncSession):
    db.add(Plant(name="Basil - Sweet", category="herb", days_to_sprout=7, days_to_harvest=75, season="Summer"))
    await db.commit()

    assert await seed_plants(db) == len(SAMPLE_PLANTS) - 1
    assert await seed_plants(db) == 0

    radish = await db.scalar(select(Plant).where(Plant.name == "Radish - Cherry Belle"))
    assert (radish.days_to_sprout, radish.days_to_harvest) == (5, 30)
