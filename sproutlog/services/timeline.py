import calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from dateutil.relativedelta import relativedelta

from sproutlog.services.lifecycle import (
    DateInput,
    InvalidDateError,
    PlantingStatus,
    current_status,
    expected_harvest_date,
    expected_sprout_date,
    format_date,
    relative_time,
    to_date,
)

EVENT_PLANTED = "planted"
EVENT_SPROUTING = "sprouting"
EVENT_HARVEST = "harvest"


@dataclass
class TimelineEvent:
    date: date
    kind: str
    planting_id: int
    title: str
    description: Optional[str] = None


def _sort(events: list[TimelineEvent]) -> list[TimelineEvent]:
    return sorted(events, key=lambda e: (e.date, e.planting_id))


def month_events(plantings: Iterable[Any], year: int, month: int) -> list[TimelineEvent]:
    """Planting, sprouting and harvest milestones falling inside one calendar month."""
    month_start = date(year, month, 1)
    month_end = date(year, month, calendar.monthrange(year, month)[1])
    events: list[TimelineEvent] = []

    for planting in plantings:
        plant = planting.plant
        planted = to_date(planting.planted_date)
        milestones = (
            (planted, EVENT_PLANTED, f"{plant.name} planted"),
            (expected_sprout_date(planted, plant.days_to_sprout), EVENT_SPROUTING, f"{plant.name} sprouting"),
            (expected_harvest_date(planted, plant.days_to_harvest), EVENT_HARVEST, f"{plant.name} ready to harvest"),
        )
        for when, kind, title in milestones:
            if month_start <= when <= month_end:
                events.append(TimelineEvent(date=when, kind=kind, planting_id=planting.id, title=title))

    return _sort(events)


def upcoming_events(
    plantings: Iterable[Any], reference_date: Optional[DateInput] = None
) -> list[TimelineEvent]:
    """Sprouting and harvest milestones due after today and within the next calendar month."""
    today = to_date(reference_date) if reference_date is not None else date.today()
    try:
        horizon = today + relativedelta(months=1)
    except (ValueError, OverflowError) as exc:
        raise InvalidDateError(today) from exc
    events: list[TimelineEvent] = []

    for planting in plantings:
        if planting.status == PlantingStatus.harvested:
            continue
        plant = planting.plant
        sprout = expected_sprout_date(planting.planted_date, plant.days_to_sprout)
        harvest = expected_harvest_date(planting.planted_date, plant.days_to_harvest)
        status = current_status(
            planting.planted_date, plant.days_to_sprout, plant.days_to_harvest, reference_date=today
        )

        if today < sprout <= horizon and status == PlantingStatus.sprouting:
            events.append(TimelineEvent(
                date=sprout,
                kind=EVENT_SPROUTING,
                planting_id=planting.id,
                title=f"{plant.name} Expected to Sprout",
                description=f"{planting.location} • Expected: {format_date(sprout)} ({relative_time(sprout, today)})",
            ))
        if today < harvest <= horizon:
            events.append(TimelineEvent(
                date=harvest,
                kind=EVENT_HARVEST,
                planting_id=planting.id,
                title=f"{plant.name} Ready to Harvest",
                description=f"{planting.location} • Expected: {format_date(harvest)} ({relative_time(harvest, today)})",
            ))

    return _sort(events)
