#!/usr/bin/env python3
"""
One-off script to seed the plant library with the sample plants.

Usage (inside the API container):
    python scripts/run_seeder.py
"""
import asyncio
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
    stream=sys.stdout,
)

from sproutlog.db.session import AsyncSessionLocal
from sproutlog.tasks.seed_plants import seed_plants


async def main() -> None:
    print("Seeding plant library...\n")
    async with AsyncSessionLocal() as db:
        inserted = await seed_plants(db)
    print(f"\nSeeder finished: {inserted} plants added.")


if __name__ == "__main__":
    asyncio.run(main())
