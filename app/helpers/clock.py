from datetime import datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from app.core.config import settings

Clock = Callable[[], datetime]


def now_local() -> datetime:
    """Current wall-clock time in the operating timezone, as a naive datetime."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).replace(tzinfo=None)


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive operating-timezone wall-clock time; naive values pass through."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(settings.TIMEZONE)).replace(tzinfo=None)


def get_clock() -> Clock:
    return now_local
