"""
Garden dashboard aggregation.

Counts are computed in a single pass over a garden's plantings, each of which
must carry its plant (for the two growth durations).

The "sprouting soon" window is [days_to_sprout - 3, days_to_harvest), which is
wider than the classifier's own sprouting stage (it ends at days_to_harvest,
not days_to_sprout). Product has not confirmed which bound is intended, so both
definitions are kept as they are.
"""
import logging
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Optional

from sproutlog.repositories.base import Repository
from sproutlog.services.lifecycle import (
    SPROUTING_SOON_DAYS,
    DateInput,
    PlantingStatus,
    current_status,
    elapsed_days,
)

logger = logging.getLogger(__name__)


@dataclass
class GardenStats:
    active_plantings: int = 0
    ready_harvest: int = 0
    sprouting_soon: int = 0
    plant_varieties: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def aggregate(plantings: Iterable[Any], reference_date: Optional[DateInput] = None) -> GardenStats:
    stats = GardenStats()
    plant_ids: set[int] = set()
    if reference_date is None:
        reference_date = date.today()

    for planting in plantings:
        # Variety count is not filtered by status
        plant_ids.add(planting.plant_id)
        if planting.status == PlantingStatus.harvested:
            continue

        stats.active_plantings += 1
        plant = planting.plant
        elapsed = elapsed_days(planting.planted_date, reference_date)

        if elapsed >= plant.days_to_harvest:
            stats.ready_harvest += 1
        if plant.days_to_sprout - SPROUTING_SOON_DAYS <= elapsed < plant.days_to_harvest:
            stats.sprouting_soon += 1

    stats.plant_varieties = len(plant_ids)
    return stats


def upcoming_harvest(
    plantings: Iterable[Any], reference_date: Optional[DateInput] = None, limit: int = 5
) -> list[Any]:
    """Unharvested plantings that are growing or already ready, in input order."""
    found = []
    if limit <= 0:
        return found
    for planting in plantings:
        status = current_status(
            planting.planted_date,
            planting.plant.days_to_sprout,
            planting.plant.days_to_harvest,
            persisted_status=planting.status,
            reference_date=reference_date,
        )
        if status in (PlantingStatus.growing, PlantingStatus.ready):
            found.append(planting)
            if len(found) == limit:
                break
    return found


def recent_plantings(plantings: Iterable[Any], limit: int = 5) -> list[Any]:
    """Latest planted_date first, ties broken by newest id.

    Ordered by when the planting went in the ground, not by when the record was
    created.
    """
    if limit <= 0:
        return []
    return sorted(plantings, key=lambda p: (p.planted_date, p.id), reverse=True)[:limit]


async def get_garden_stats(
    repository: Repository, garden_id: int, reference_date: Optional[DateInput] = None
) -> GardenStats:
    plantings = await repository.list(garden_id=garden_id)
    stats = aggregate(plantings, reference_date)
    logger.debug("garden %d stats: %s", garden_id, stats)
    return stats
