import json

from app.scheduling import (
    AsNeeded, DailyFixedTimes, SpecificDaysOfWeek, UnknownSchedule,
    parse_schedule, schedule_to_payload, serialize_schedule
)


def test_known_variants_survive_serialization():
    for schedule in (
        DailyFixedTimes(times=('08:00', '20:00')),
        SpecificDaysOfWeek(days=('MON', 'THU')),
        AsNeeded(),
        UnknownSchedule(raw='{"type": "weekly", "day": 3}'),
        UnknownSchedule(raw=None),
    ):
        assert parse_schedule(serialize_schedule(schedule)) == schedule


def test_parse_accepts_decoded_dict_and_camel_case_days():
    assert parse_schedule({'type': 'specific_days_of_week', 'daysOfWeek': ['mon', ' wed ']}) == \
        SpecificDaysOfWeek(days=('MON', 'WED'))


def test_duplicate_times_are_collapsed():
    schedule = parse_schedule(json.dumps({'type': 'daily_fixed_times', 'times': ['08:00', '08:00', '12:00']}))
    assert schedule == DailyFixedTimes(times=('08:00', '12:00'))


def test_malformed_input_degrades_to_unknown():
    assert parse_schedule('not json at all') == UnknownSchedule(raw='not json at all')
    assert parse_schedule(None) == UnknownSchedule(raw=None)
    assert isinstance(parse_schedule('[1, 2]'), UnknownSchedule)
    assert isinstance(parse_schedule('{"type": "every_full_moon"}'), UnknownSchedule)
    assert isinstance(parse_schedule('{"type": "daily_fixed_times", "times": "08:00"}'), UnknownSchedule)


def test_unknown_keeps_raw_text_for_display():
    stored = '{"type": "weekly", "day": 3}'
    schedule = parse_schedule(stored)
    assert serialize_schedule(schedule) == stored
    assert schedule_to_payload(schedule) == {'type': 'unknown', 'raw': stored}
