"""
Planting lifecycle rules.

A planting only ever persists "planted" or "harvested". The growth stages in
between (sprouting, growing, ready) are derived on every read from the number of
whole days since planting and the plant's two growth durations. Nothing in this
module touches the database.

Status rules, checked in this order:

    elapsed >= days_to_harvest  ->  ready
    elapsed >= days_to_sprout   ->  growing
    otherwise                   ->  sprouting

A planting dated in the future has negative elapsed days and reads as sprouting.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Optional, Union

from dateutil import parser
from dateutil.relativedelta import relativedelta

DateInput = Union[str, date, datetime]

# Look-ahead window used by the dashboard's "sprouting soon" count
SPROUTING_SOON_DAYS = 3

# Upper bound for days_to_sprout / days_to_harvest, and the headroom kept below
# date.max so milestone dates of any accepted planting stay representable
MAX_GROWTH_DAYS = 3650
LATEST_PLANTED_DATE = date.max - timedelta(days=MAX_GROWTH_DAYS)


class PlantingStatus(str, Enum):
    planted = "planted"
    sprouting = "sprouting"
    growing = "growing"
    ready = "ready"
    harvested = "harvested"


class InvalidDateError(ValueError):
    """Raised when a date input cannot be interpreted as a calendar date."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid date: {value!r}")


@dataclass(frozen=True)
class Lifecycle:
    status: PlantingStatus
    elapsed_days: int
    expected_sprout_date: date
    expected_harvest_date: date


def to_date(value: DateInput) -> date:
    """Coerce a date, datetime or ISO-8601 string to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parser.isoparse(value.strip()).date()
        except (ValueError, OverflowError) as exc:
            raise InvalidDateError(value) from exc
    raise InvalidDateError(value)


def _to_reference(value: Optional[DateInput]) -> Union[date, datetime]:
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            parsed = parser.isoparse(value.strip())
        except (ValueError, OverflowError) as exc:
            raise InvalidDateError(value) from exc
        # A bare date string has no time component to truncate
        return parsed if "T" in value or " " in value.strip() else parsed.date()
    if isinstance(value, date):
        return value
    raise InvalidDateError(value)


def elapsed_days(planted_date: DateInput, reference_date: Optional[DateInput] = None) -> int:
    """Whole days from planted_date to reference_date, floored.

    With a datetime reference, a partial day since midnight of the planting date
    does not count as elapsed.
    """
    planted = to_date(planted_date)
    reference = _to_reference(reference_date)
    if isinstance(reference, datetime):
        start = datetime.combine(planted, time.min, tzinfo=reference.tzinfo)
        # timedelta.days is already floored
        return (reference - start).days
    return (reference - planted).days


def classify(
    planted_date: DateInput,
    days_to_sprout: int,
    days_to_harvest: int,
    reference_date: Optional[DateInput] = None,
) -> PlantingStatus:
    elapsed = elapsed_days(planted_date, reference_date)
    if elapsed >= days_to_harvest:
        return PlantingStatus.ready
    if elapsed >= days_to_sprout:
        return PlantingStatus.growing
    return PlantingStatus.sprouting


def is_sprouting_soon(elapsed: int, days_to_sprout: int) -> bool:
    return days_to_sprout - SPROUTING_SOON_DAYS <= elapsed < days_to_sprout


def add_days(value: DateInput, days: int) -> date:
    start = to_date(value)
    try:
        return start + timedelta(days=days)
    except OverflowError as exc:
        raise InvalidDateError(f"{start.isoformat()} + {days} days") from exc


def expected_sprout_date(planted_date: DateInput, days_to_sprout: int) -> date:
    return add_days(planted_date, days_to_sprout)


def expected_harvest_date(planted_date: DateInput, days_to_harvest: int) -> date:
    return add_days(planted_date, days_to_harvest)


def current_status(
    planted_date: DateInput,
    days_to_sprout: int,
    days_to_harvest: int,
    persisted_status: Optional[str] = None,
    reference_date: Optional[DateInput] = None,
) -> PlantingStatus:
    """The status to display: a harvested record stays harvested, anything else is computed."""
    if persisted_status == PlantingStatus.harvested:
        return PlantingStatus.harvested
    return classify(planted_date, days_to_sprout, days_to_harvest, reference_date)


def describe(planting: Any, reference_date: Optional[DateInput] = None) -> Lifecycle:
    """Derive the full lifecycle view of a planting that carries its plant."""
    plant = planting.plant
    return Lifecycle(
        status=current_status(
            planting.planted_date,
            plant.days_to_sprout,
            plant.days_to_harvest,
            persisted_status=planting.status,
            reference_date=reference_date,
        ),
        elapsed_days=elapsed_days(planting.planted_date, reference_date),
        expected_sprout_date=expected_sprout_date(planting.planted_date, plant.days_to_sprout),
        expected_harvest_date=expected_harvest_date(planting.planted_date, plant.days_to_harvest),
    )


# ── Display helpers ───────────────────────────────────────────────────────────


def format_date(value: DateInput) -> str:
    d = to_date(value)
    return f"{d:%b} {d.day}, {d.year}"


def format_date_range(start: DateInput, end: DateInput) -> str:
    s, e = to_date(start), to_date(end)
    return f"{s:%b} {s.day}-{e:%b} {e.day}, {e.year}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _distance(earlier: date, later: date) -> str:
    delta = relativedelta(later, earlier)
    if delta.years:
        return _plural(delta.years, "year")
    if delta.months:
        return _plural(delta.months, "month")
    return _plural((later - earlier).days, "day")


def relative_time(target: DateInput, today: Optional[DateInput] = None) -> str:
    """Human phrase for a date relative to today: "Today", "Tomorrow", "in 5 days", "2 months ago"."""
    target_date = to_date(target)
    today_date = to_date(today) if today is not None else date.today()
    if target_date == today_date:
        return "Today"
    if (target_date - today_date).days == 1:
        return "Tomorrow"
    if target_date < today_date:
        return f"{_distance(target_date, today_date)} ago"
    return f"in {_distance(today_date, target_date)}"
