import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

import pytest

from app.helpers.enums import MarkStatus, SessionStatus
from app.scheduling import ExpectedSession, MarkAction, annotate_taken_notes, classify_session, resolve_mark
from app.scheduling.reconciler import format_duration, lateness_note, minutes_since

DAY = date(2026, 10, 19)
MEDICATION_ID = uuid.uuid4()


@dataclass
class Record:
    status: str
    scheduled_time: Optional[str] = None
    notes: Optional[str] = None
    consumed_at: datetime = datetime(2026, 10, 19, 8, 5)
    consumption_id: uuid.UUID = None

    def __post_init__(self):
        self.consumption_id = self.consumption_id or uuid.uuid4()


def at(hour, minute=0, second=0):
    return datetime(2026, 10, 19, hour, minute, second)


def test_minutes_are_floored():
    assert minutes_since(at(8), at(9, 30, 59)) == 90
    assert minutes_since(at(8), at(7, 59, 30)) == -1


@pytest.mark.parametrize('minutes, expected', [(90, '1h 30m'), (45, '45m'), (120, '2h'), (-75, '1h 15m')])
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected


def test_lateness_note_uses_tolerance_boundaries():
    assert lateness_note(30) == 'taken on time'
    assert lateness_note(-30) == 'taken on time'
    assert lateness_note(31) == 'taken late by 31m'
    assert lateness_note(-45) == 'taken early by 45m'


def test_user_notes_are_kept_ahead_of_annotation():
    assert annotate_taken_notes('after breakfast', at(8), at(9, 30)) == 'after breakfast - taken late by 1h 30m'
    assert annotate_taken_notes(None, at(8), at(8, 10)) == 'taken on time'


def test_timed_session_without_record_turns_missed_after_threshold():
    expected = ExpectedSession(scheduled_time='08:00')
    assert classify_session(MEDICATION_ID, expected, [], DAY, at(9, 0)).status == SessionStatus.PENDING
    assert classify_session(MEDICATION_ID, expected, [], DAY, at(9, 1)).status == SessionStatus.MISSED


def test_untimed_session_never_turns_missed_by_time():
    session = classify_session(MEDICATION_ID, ExpectedSession(), [], DAY, at(23, 59))
    assert session.status == SessionStatus.PENDING


def test_taken_record_wins_and_only_for_its_slot():
    record = Record(status='taken', scheduled_time='08:00', notes='taken on time')
    morning = classify_session(MEDICATION_ID, ExpectedSession('08:00'), [record], DAY, at(21, 30))
    evening = classify_session(MEDICATION_ID, ExpectedSession('20:00'), [record], DAY, at(21, 30))

    assert morning.status == SessionStatus.TAKEN
    assert morning.consumption_record_id == record.consumption_id
    assert morning.notes == 'taken on time'
    assert evening.status == SessionStatus.MISSED
    assert evening.consumption_record_id is None


def test_stored_missed_record_classifies_missed():
    record = Record(status='missed', scheduled_time='20:00')
    session = classify_session(MEDICATION_ID, ExpectedSession('20:00'), [record], DAY, at(10))
    assert session.status == SessionStatus.MISSED
    assert session.consumption_record_id == record.consumption_id


def test_untimed_session_prefers_taken_over_missed():
    records = [Record(status='missed'), Record(status='taken')]
    session = classify_session(MEDICATION_ID, ExpectedSession(), records, DAY, at(12))
    assert session.status == SessionStatus.TAKEN
    assert session.consumption_record_id == records[1].consumption_id


def test_resolve_mark_transitions():
    existing = Record(status='taken')
    assert resolve_mark(MarkStatus.TAKEN, None) == MarkAction.UPSERT
    assert resolve_mark(MarkStatus.TAKEN, existing) == MarkAction.UPSERT
    assert resolve_mark(MarkStatus.MISSED, None) == MarkAction.NOOP
    assert resolve_mark(MarkStatus.MISSED, existing) == MarkAction.UPSERT
    assert resolve_mark(MarkStatus.PENDING, None) == MarkAction.NOOP
    assert resolve_mark(MarkStatus.PENDING, existing) == MarkAction.REMOVE
