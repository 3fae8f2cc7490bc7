"""
Schedule definitions for prescribed medications.

A medication's schedule is stored as a JSON document keyed by a ``type`` tag.
``parse_schedule`` turns the stored value into one of the closed variants below
and never raises: anything it cannot recognise becomes ``UnknownSchedule`` so a
single corrupt row never breaks a patient's day view.
"""
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from app.helpers.enums import ScheduleType, Weekday

logger = logging.getLogger(__name__)

CLOCK_TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')


@dataclass(frozen=True)
class DailyFixedTimes:
    """One session per listed clock time, every day."""
    times: Tuple[str, ...] = ()

    type = ScheduleType.DAILY_FIXED_TIMES


@dataclass(frozen=True)
class SpecificDaysOfWeek:
    """One untimed session on each listed weekday."""
    days: Tuple[str, ...] = ()

    type = ScheduleType.SPECIFIC_DAYS_OF_WEEK


@dataclass(frozen=True)
class AsNeeded:
    """PRN dosing, at most one open session per calendar day."""

    type = ScheduleType.AS_NEEDED


@dataclass(frozen=True)
class UnknownSchedule:
    """Fallback for stored data that is not a recognised schedule."""
    raw: Optional[str] = None

    type = ScheduleType.UNKNOWN


ScheduleDefinition = Union[DailyFixedTimes, SpecificDaysOfWeek, AsNeeded, UnknownSchedule]


def is_clock_time(value: Any) -> bool:
    return isinstance(value, str) and CLOCK_TIME_PATTERN.match(value) is not None


def _dedupe(values) -> Tuple[str, ...]:
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return tuple(seen)


def _raw_text(raw: Any) -> Optional[str]:
    if raw is None or isinstance(raw, str):
        return raw
    try:
        return json.dumps(raw)
    except (TypeError, ValueError):
        return str(raw)


def _degrade(raw: Any, reason: str) -> UnknownSchedule:
    logger.warning(f"Schedule degraded to unknown ({reason}): {raw!r}")
    return UnknownSchedule(raw=_raw_text(raw))


def parse_schedule(raw: Any) -> ScheduleDefinition:
    """
    Parse a stored or submitted schedule.

    Args:
        raw: JSON text as stored in the database, or an already decoded dict.

    Returns:
        The matching schedule variant, or UnknownSchedule when ``raw`` is
        missing, malformed or carries an unrecognised ``type`` tag.
    """
    payload = raw
    if isinstance(raw, str):
        try:
            payload = json.loads(raw)
        except ValueError:
            return _degrade(raw, 'not JSON')

    if not isinstance(payload, dict):
        return _degrade(raw, 'not an object')

    try:
        schedule_type = ScheduleType(payload.get('type'))
    except ValueError:
        return _degrade(raw, 'unrecognised type')

    if schedule_type == ScheduleType.DAILY_FIXED_TIMES:
        times = payload.get('times')
        if not isinstance(times, list) or not all(isinstance(t, str) for t in times):
            return _degrade(raw, 'times must be a list of strings')
        return DailyFixedTimes(times=_dedupe(times))

    if schedule_type == ScheduleType.SPECIFIC_DAYS_OF_WEEK:
        days = payload.get('days_of_week', payload.get('daysOfWeek'))
        if not isinstance(days, list) or not all(isinstance(d, str) for d in days):
            return _degrade(raw, 'days_of_week must be a list of strings')
        return SpecificDaysOfWeek(days=_dedupe(d.strip().upper() for d in days))

    if schedule_type == ScheduleType.AS_NEEDED:
        return AsNeeded()

    return _degrade(raw, 'explicit unknown type')


def schedule_to_payload(schedule: ScheduleDefinition) -> Dict[str, Any]:
    """Render a schedule as the JSON object exposed by the API."""
    if isinstance(schedule, DailyFixedTimes):
        return {'type': schedule.type.value, 'times': list(schedule.times)}
    if isinstance(schedule, SpecificDaysOfWeek):
        return {'type': schedule.type.value, 'days_of_week': list(schedule.days)}
    if isinstance(schedule, AsNeeded):
        return {'type': schedule.type.value}
    return {'type': schedule.type.value, 'raw': schedule.raw}


def serialize_schedule(schedule: ScheduleDefinition) -> Optional[str]:
    """Inverse of ``parse_schedule``; unknown schedules give back their raw text."""
    if isinstance(schedule, UnknownSchedule):
        return schedule.raw
    return json.dumps(schedule_to_payload(schedule))


def is_due_on_weekday(schedule: SpecificDaysOfWeek, weekday: int) -> bool:
    return Weekday.from_index(weekday).value in schedule.days
