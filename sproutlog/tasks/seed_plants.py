"""
Seed the shared plant library with a starter set of common garden plants.

Idempotent: a plant is only inserted when no plant with the same name exists.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sproutlog.models.plant import Plant

logger = logging.getLogger(__name__)

SAMPLE_PLANTS: list[dict] = [
    {
        "name": "Tomato - Cherry",
        "description": "Small, sweet cherry tomatoes perfect for salads and snacking. Easy to grow and very productive.",
        "category": "vegetable",
        "days_to_sprout": 10,
        "days_to_harvest": 75,
        "season": "Spring/Summer",
    },
    {
        "name": "Lettuce - Romaine",
        "description": "Crisp, tall heads of romaine lettuce with excellent flavor. Great for salads and wraps.",
        "category": "vegetable",
        "days_to_sprout": 8,
        "days_to_harvest": 60,
        "season": "Spring/Fall",
    },
    {
        "name": "Basil - Sweet",
        "description": "Classic Italian basil with intense flavor and aroma. Perfect for cooking and making pesto.",
        "category": "herb",
        "days_to_sprout": 7,
        "days_to_harvest": 75,
        "season": "Summer",
    },
    {
        "name": "Radish - Cherry Belle",
        "description": "Quick-growing, mild-flavored radishes perfect for beginners. Ready to harvest in just 30 days.",
        "category": "vegetable",
        "days_to_sprout": 5,
        "days_to_harvest": 30,
        "season": "Spring/Fall",
    },
    {
        "name": "Spinach - Baby",
        "description": "Tender baby spinach leaves perfect for salads and cooking. Cold-hardy and fast-growing.",
        "category": "vegetable",
        "days_to_sprout": 6,
        "days_to_harvest": 45,
        "season": "Spring/Fall",
    },
    {
        "name": "Carrot - Nantes",
        "description": "Sweet, crisp carrots with excellent flavor. Great for fresh eating and storage.",
        "category": "vegetable",
        "days_to_sprout": 12,
        "days_to_harvest": 70,
        "season": "Spring/Fall",
    },
]


async def seed_plants(db: AsyncSession) -> int:
    """Insert any missing sample plants. Returns the number inserted."""
    result = await db.execute(select(Plant.name))
    existing = set(result.scalars().all())

    inserted = 0
    for data in SAMPLE_PLANTS:
        if data["name"] in existing:
            logger.debug("seed_plants: %s already present", data["name"])
            continue
        db.add(Plant(**data))
        inserted += 1

    await db.commit()
    logger.info("seed_plants: inserted %d of %d sample plants", inserted, len(SAMPLE_PLANTS))
    return inserted
