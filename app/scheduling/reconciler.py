"""
Status reconciliation between derived sessions and the consumption ledger.

Records passed in here are consumption rows (ORM objects or anything exposing
``consumption_id``, ``status``, ``notes``, ``consumed_at`` and
``scheduled_time``). Nothing in this module touches storage; the service layer
applies the ``MarkAction`` it returns.
"""
import enum
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Optional

from app.helpers.enums import ConsumptionStatus, MarkStatus, SessionStatus
from app.scheduling.deriver import ExpectedSession, parse_clock_time

BEFORE_MISSED_MIN = 60
AFTER_SCHEDULED_MIN = 30


class MarkAction(enum.Enum):
    UPSERT = 'upsert'
    REMOVE = 'remove'
    NOOP = 'noop'


@dataclass
class Session:
    medication_id: Any
    scheduled_time: Optional[str]
    status: SessionStatus
    consumption_record_id: Any = None
    consumption_time: Optional[datetime] = None
    notes: Optional[str] = None


def slot_datetime(day: date, scheduled_time: str) -> datetime:
    return datetime.combine(day, parse_clock_time(scheduled_time))


def minutes_since(scheduled_at: datetime, now: datetime) -> int:
    """Whole minutes from ``scheduled_at`` to ``now``, floored (negative when early)."""
    return int((now - scheduled_at).total_seconds() // 60)


def format_duration(minutes: int) -> str:
    hours, rest = divmod(abs(minutes), 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if rest:
        parts.append(f"{rest}m")
    return ' '.join(parts)


def lateness_note(delta_minutes: int, tolerance: int = AFTER_SCHEDULED_MIN) -> str:
    if delta_minutes > tolerance:
        return f"taken late by {format_duration(delta_minutes)}"
    if delta_minutes < -tolerance:
        return f"taken early by {format_duration(delta_minutes)}"
    return "taken on time"


def annotate_taken_notes(notes: Optional[str], scheduled_at: datetime, now: datetime,
                         tolerance: int = AFTER_SCHEDULED_MIN) -> str:
    annotation = lateness_note(minutes_since(scheduled_at, now), tolerance)
    return f"{notes} - {annotation}" if notes else annotation


def _first_with_status(records: Iterable[Any], status: ConsumptionStatus) -> Optional[Any]:
    for record in records:
        if record.status == status.value:
            return record
    return None


def _session_from_record(medication_id, scheduled_time, status, record) -> Session:
    return Session(
        medication_id=medication_id,
        scheduled_time=scheduled_time,
        status=status,
        consumption_record_id=record.consumption_id,
        consumption_time=record.consumed_at,
        notes=record.notes,
    )


def classify_session(medication_id: Any, expected: ExpectedSession, day_records: Iterable[Any],
                     day: date, now: datetime, missed_after: int = BEFORE_MISSED_MIN) -> Session:
    """
    Display status of one expected session.

    Timed sessions match the record for their exact slot; untimed sessions
    match any record of the day. A taken record wins, then a stored missed
    record. Without a record a timed session turns Missed once more than
    ``missed_after`` minutes have passed; this is display only and never
    written back.
    """
    if expected.is_timed:
        candidates = [r for r in day_records if r.scheduled_time == expected.scheduled_time]
    else:
        candidates = list(day_records)

    taken = _first_with_status(candidates, ConsumptionStatus.TAKEN)
    if taken is not None:
        return _session_from_record(medication_id, expected.scheduled_time, SessionStatus.TAKEN, taken)

    missed = _first_with_status(candidates, ConsumptionStatus.MISSED)
    if missed is not None:
        return _session_from_record(medication_id, expected.scheduled_time, SessionStatus.MISSED, missed)

    status = SessionStatus.PENDING
    if expected.is_timed:
        delta = minutes_since(slot_datetime(day, expected.scheduled_time), now)
        if delta > missed_after:
            status = SessionStatus.MISSED
    return Session(medication_id=medication_id, scheduled_time=expected.scheduled_time, status=status)


def resolve_mark(status: MarkStatus, existing: Optional[Any]) -> MarkAction:
    """
    Transition for a mark command against the slot's current record.

    taken always upserts; missed only rewrites an existing record; pending
    (undo) removes an existing record. Absence of a record is the pending
    state, so missed and pending without one are no-ops.
    """
    if status == MarkStatus.TAKEN:
        return MarkAction.UPSERT
    if existing is None:
        return MarkAction.NOOP
    if status == MarkStatus.MISSED:
        return MarkAction.UPSERT
    return MarkAction.REMOVE
