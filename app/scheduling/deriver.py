"""
Session derivation: which dose sessions a schedule expects on a given day.
"""
import logging
from dataclasses import dataclass
from datetime import date, time
from typing import List, Optional

from app.scheduling.schedule import (
    AsNeeded,
    DailyFixedTimes,
    ScheduleDefinition,
    SpecificDaysOfWeek,
    UnknownSchedule,
    is_clock_time,
    is_due_on_weekday,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpectedSession:
    scheduled_time: Optional[str] = None

    @property
    def is_timed(self) -> bool:
        return self.scheduled_time is not None


def parse_clock_time(value: str) -> time:
    hour, minute = value.split(':')
    return time(hour=int(hour), minute=int(minute))


def derive_sessions(schedule: ScheduleDefinition, day: date) -> List[ExpectedSession]:
    """
    Expected sessions for ``schedule`` on ``day``, timed ones sorted by time of day.

    Pure and deterministic. A weekday schedule that is not due on ``day``
    yields an empty list; callers skip the medication rather than reporting
    a missed session.
    """
    if isinstance(schedule, DailyFixedTimes):
        valid_times = []
        for value in schedule.times:
            if is_clock_time(value):
                valid_times.append(value)
            else:
                logger.warning(f"Skipping unparseable scheduled time: {value!r}")
        if not valid_times:
            return [ExpectedSession()]
        return [ExpectedSession(scheduled_time=t) for t in sorted(valid_times, key=parse_clock_time)]

    if isinstance(schedule, SpecificDaysOfWeek):
        if is_due_on_weekday(schedule, day.weekday()):
            return [ExpectedSession()]
        return []

    if isinstance(schedule, (AsNeeded, UnknownSchedule)):
        return [ExpectedSession()]

    raise TypeError(f"Unsupported schedule variant: {type(schedule).__name__}")
