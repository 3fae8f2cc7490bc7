from app.models.model_consumption_record import ConsumptionRecord
from tests.conftest import TODAY, auth_headers


def mark(client, user, medication_id, status, scheduled_time=None, notes=None):
    body = {'status': status}
    if scheduled_time is not None:
        body['scheduled_time'] = scheduled_time
    if notes is not None:
        body['notes'] = notes
    return client.post(f'/api/medications/{medication_id}/consumption', json=body, headers=auth_headers(user))


def sessions(client, user, patient_id, **params):
    response = client.get(f'/api/medications/patients/{patient_id}/sessions', params=params,
                          headers=auth_headers(user))
    assert response.status_code == 200, response.text
    return response.json()['data']


def record_count(db):
    db.expire_all()
    return db.query(ConsumptionRecord).count()


def test_amlodipine_day(client, clock, db, patient, create_medication):
    medication = create_medication()
    clock.set(8, 5)

    response = mark(client, patient, medication['medication_id'], 'taken', scheduled_time='08:00')
    assert response.status_code == 200, response.text
    marked = response.json()['data']
    assert marked['status'] == 'taken'
    assert marked['notes'] == 'taken on time'

    day_view = sessions(client, patient, patient.user_id)
    assert [(s['scheduled_time'], s['status']) for s in day_view] == [('08:00', 'taken'), ('20:00', 'pending')]
    assert day_view[0]['medication_name'] == 'Amlodipine'
    assert day_view[0]['is_taken'] is True

    later = sessions(client, patient, patient.user_id, as_of=f'{TODAY.isoformat()}T21:01:00')
    assert [s['status'] for s in later] == ['taken', 'missed']


def test_marking_taken_twice_keeps_one_record(client, clock, db, patient, create_medication):
    medication = create_medication()
    clock.set(8, 10)

    first = mark(client, patient, medication['medication_id'], 'taken', scheduled_time='08:00').json()['data']
    second = mark(client, patient, medication['medication_id'], 'taken', scheduled_time='08:00').json()['data']

    assert record_count(db) == 1
    assert first['consumption_record_id'] == second['consumption_record_id']


def test_undo_returns_session_to_pending(client, clock, db, patient, create_medication):
    medication = create_medication()
    clock.set(8, 10)
    mark(client, patient, medication['medication_id'], 'taken', scheduled_time='08:00')

    response = mark(client, patient, medication['medication_id'], 'pending', scheduled_time='08:00')
    assert response.status_code == 200
    assert response.json()['data']['status'] == 'pending'
    assert record_count(db) == 0

    morning = sessions(client, patient, patient.user_id)[0]
    assert morning['status'] == 'pending'
    assert morning['consumption_record_id'] is None


def test_late_slot_shows_missed_then_mark_records_lateness(client, clock, db, patient, create_medication):
    medication = create_medication(schedule={'type': 'daily_fixed_times', 'times': ['08:00']})
    clock.set(9, 30)

    assert sessions(client, patient, patient.user_id)[0]['status'] == 'missed'

    marked = mark(client, patient, medication['medication_id'], 'taken', scheduled_time='08:00',
                  notes='with water').json()['data']
    assert marked['status'] == 'taken'
    assert marked['notes'] == 'with water - taken late by 1h 30m'


def test_early_mark_is_annotated(client, clock, patient, create_medication):
    medication = create_medication(schedule={'type': 'daily_fixed_times', 'times': ['20:00']})
    clock.set(19, 15)
    marked = mark(client, patient, medication['medication_id'], 'taken', scheduled_time='20:00').json()['data']
    assert marked['notes'] == 'taken early by 45m'


def test_as_needed_keeps_one_record_per_day(client, clock, db, patient, create_medication):
    medication = create_medication(name='Paracetamol', dosage='500mg', schedule={'type': 'as_needed'})
    clock.set(10)
    first = mark(client, patient, medication['medication_id'], 'taken', notes='headache').json()['data']
    clock.set(16)
    second = mark(client, patient, medication['medication_id'], 'taken').json()['data']

    assert record_count(db) == 1
    assert first['consumption_record_id'] == second['consumption_record_id']
    assert second['scheduled_time'] is None
    assert second['notes'] is None


def test_missed_without_record_is_a_noop(client, clock, db, patient, create_medication):
    medication = create_medication(schedule={'type': 'as_needed'})
    response = mark(client, patient, medication['medication_id'], 'missed')
    assert response.status_code == 200
    assert response.json()['data']['status'] == 'pending'
    assert record_count(db) == 0


def test_missed_overwrites_existing_taken_record(client, clock, db, patient, create_medication):
    medication = create_medication()
    clock.set(8, 0)
    taken = mark(client, patient, medication['medication_id'], 'taken', scheduled_time='08:00').json()['data']
    missed = mark(client, patient, medication['medication_id'], 'missed', scheduled_time='08:00').json()['data']

    assert missed['status'] == 'missed'
    assert missed['consumption_record_id'] == taken['consumption_record_id']
    assert record_count(db) == 1


def test_fixed_time_medication_requires_a_scheduled_slot(client, clock, db, patient, create_medication):
    medication = create_medication()

    missing = mark(client, patient, medication['medication_id'], 'taken')
    assert missing.status_code == 400
    assert missing.json()['success'] is False

    wrong = mark(client, patient, medication['medication_id'], 'taken', scheduled_time='09:00')
    assert wrong.status_code == 400

    malformed = mark(client, patient, medication['medication_id'], 'taken', scheduled_time='9am')
    assert malformed.status_code == 400
    assert record_count(db) == 0


def test_weekday_medication_cannot_be_marked_on_other_days(client, clock, db, patient, create_medication):
    medication = create_medication(schedule={'type': 'specific_days_of_week', 'days_of_week': ['TUE']})
    response = mark(client, patient, medication['medication_id'], 'taken')
    assert response.status_code == 400
    assert sessions(client, patient, patient.user_id) == []


def test_unlinked_family_member_cannot_mark(client, clock, db, patient, stranger_family, create_medication):
    medication = create_medication()
    response = mark(client, stranger_family, medication['medication_id'], 'taken', scheduled_time='08:00')
    assert response.status_code == 403
    assert response.json()['code'] == '403'
    assert record_count(db) == 0


def test_linked_family_member_marks_and_sees_today(client, clock, patient, family, create_medication):
    medication = create_medication()
    clock.set(8, 20)
    response = mark(client, family, medication['medication_id'], 'taken', scheduled_time='08:00')
    assert response.status_code == 200

    today = client.get('/api/medications/today', headers=auth_headers(family)).json()['data']
    assert today[0]['status'] == 'taken'


def test_unknown_medication_is_not_found(client, clock, patient):
    response = mark(client, patient, '00000000-0000-0000-0000-000000000000', 'taken')
    assert response.status_code == 404


def test_sessions_are_ordered_timed_first(client, clock, patient, create_medication):
    create_medication(name='Vitamin D', dosage='1000IU', schedule={'type': 'as_needed'})
    create_medication(name='Metformin', dosage='500mg', schedule={'type': 'daily_fixed_times', 'times': ['19:00']})
    create_medication(name='Amlodipine', dosage='5mg', schedule={'type': 'daily_fixed_times', 'times': ['08:00']})
    create_medication(name='Aspirin', dosage='80mg', schedule={'type': 'specific_days_of_week', 'days_of_week': ['MON']})

    day_view = sessions(client, patient, patient.user_id)
    assert [s['medication_name'] for s in day_view] == ['Amlodipine', 'Metformin', 'Aspirin', 'Vitamin D']


def test_history_is_paginated_newest_first(client, clock, patient, clinician, create_medication):
    medication = create_medication()
    clock.set(8, 0)
    mark(client, patient, medication['medication_id'], 'taken', scheduled_time='08:00')
    clock.set(20, 5)
    mark(client, patient, medication['medication_id'], 'taken', scheduled_time='20:00')

    response = client.get(
        f'/api/medications/patients/{patient.user_id}/history',
        params={'start_date': TODAY.isoformat(), 'end_date': TODAY.isoformat(), 'page': 1, 'page_size': 1},
        headers=auth_headers(clinician)
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body['metadata'] == {'current_page': 1, 'page_size': 1, 'total_items': 2}
    assert body['data'][0]['scheduled_time'] == '20:00'
    assert body['data'][0]['medication']['name'] == 'Amlodipine'
    assert body['data'][0]['schedule'] == {'type': 'daily_fixed_times', 'times': ['08:00', '20:00']}


def test_history_rejects_inverted_range(client, clock, patient):
    response = client.get(
        f'/api/medications/patients/{patient.user_id}/history',
        params={'start_date': '2026-10-20', 'end_date': '2026-10-19'},
        headers=auth_headers(patient)
    )
    assert response.status_code == 400


def test_only_prescribing_clinician_marks(client, clock, db, patient, clinician, create_medication):
    from app.helpers.enums import UserRole
    from app.models.model_patient_clinician import PatientClinician
    from tests.conftest import make_user

    medication = create_medication()
    colleague = make_user(db, UserRole.CLINICIAN, 'dr.budi@example.com', 'Dr. Budi')
    db.add(PatientClinician(patient_id=patient.user_id, clinician_id=colleague.user_id))
    db.commit()
    clock.set(8, 0)

    assert mark(client, colleague, medication['medication_id'], 'taken', scheduled_time='08:00').status_code == 403
    assert mark(client, clinician, medication['medication_id'], 'taken', scheduled_time='08:00').status_code == 200


def test_offset_aware_as_of_is_read_as_local_time(client, clock, patient, create_medication):
    create_medication(schedule={'type': 'daily_fixed_times', 'times': ['08:00']})

    day_view = sessions(client, patient, patient.user_id, as_of='2026-10-19T09:30:00+07:00')
    assert day_view[0]['status'] == 'missed'

    utc_view = sessions(client, patient, patient.user_id, as_of='2026-10-19T00:30:00Z')
    assert utc_view[0]['status'] == 'missed'


def test_history_ignores_unknown_sort_columns(client, clock, patient, create_medication):
    medication = create_medication()
    clock.set(8, 0)
    mark(client, patient, medication['medication_id'], 'taken', scheduled_time='08:00')
    clock.set(20, 5)
    mark(client, patient, medication['medication_id'], 'taken', scheduled_time='20:00')

    for sort_by in ('', 'medication'):
        response = client.get(
            f'/api/medications/patients/{patient.user_id}/history',
            params={'sort_by': sort_by}, headers=auth_headers(patient)
        )
        assert response.status_code == 200, response.text
        assert [item['scheduled_time'] for item in response.json()['data']] == ['20:00', '08:00']
