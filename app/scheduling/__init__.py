"""
Scheduling engine for medication sessions.

Schedule parsing, session derivation, status reconciliation and the reminder
suppression rule. Pure functions only; storage and delivery live in services.
"""

from .schedule import (
    AsNeeded, DailyFixedTimes, ScheduleDefinition, SpecificDaysOfWeek, UnknownSchedule,
    is_clock_time, parse_schedule, schedule_to_payload, serialize_schedule
)
from .deriver import ExpectedSession, derive_sessions
from .reconciler import (
    AFTER_SCHEDULED_MIN, BEFORE_MISSED_MIN, MarkAction, Session,
    annotate_taken_notes, classify_session, resolve_mark, slot_datetime
)
from .reminders import ReminderEvent, is_due, should_suppress

__all__ = [
    # Schedule
    'AsNeeded', 'DailyFixedTimes', 'ScheduleDefinition', 'SpecificDaysOfWeek', 'UnknownSchedule',
    'is_clock_time', 'parse_schedule', 'schedule_to_payload', 'serialize_schedule',

    # Deriver
    'ExpectedSession', 'derive_sessions',

    # Reconciler
    'AFTER_SCHEDULED_MIN', 'BEFORE_MISSED_MIN', 'MarkAction', 'Session',
    'annotate_taken_notes', 'classify_session', 'resolve_mark', 'slot_datetime',

    # Reminders
    'ReminderEvent', 'is_due', 'should_suppress',
]
