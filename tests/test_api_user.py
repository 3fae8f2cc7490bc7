from app.helpers.enums import UserRole
from tests.conftest import auth_headers, make_user


def test_register_and_login(client):
    response = client.post('/api/auth/register', json={
        'full_name': 'Dr. Sari',
        'email': 'sari@example.com',
        'password': 'secret123',
        'role': 'CLINICIAN'
    })
    assert response.status_code == 200, response.text
    assert response.json()['data']['role'] == 'CLINICIAN'

    login = client.post('/api/auth/login', json={'username': 'sari@example.com', 'password': 'secret123'})
    assert login.status_code == 200
    assert login.json()['data']['role'] == 'CLINICIAN'
    token = login.json()['data']['access_token']

    me = client.get('/api/users/me', headers={'Authorization': f'Bearer {token}'})
    assert me.json()['data']['email'] == 'sari@example.com'


def test_duplicate_registration_conflicts(client, patient):
    response = client.post('/api/auth/register', json={
        'full_name': 'Someone', 'email': patient.email, 'password': 'secret123'
    })
    assert response.status_code == 409


def test_wrong_password_is_rejected(client):
    client.post('/api/auth/register', json={
        'full_name': 'Budi', 'email': 'budi2@example.com', 'password': 'secret123'
    })
    response = client.post('/api/auth/login', json={'username': 'budi2@example.com', 'password': 'nope'})
    assert response.status_code == 400


def test_family_links_to_patient_once(client, db, patient):
    relative = make_user(db, UserRole.FAMILY, 'adik@example.com', 'Adik')

    first = client.post('/api/users/links', json={'patient_email': patient.email}, headers=auth_headers(relative))
    assert first.status_code == 200, first.text
    assert first.json()['data']['user_id'] == str(patient.user_id)

    again = client.post('/api/users/links', json={'patient_email': patient.email}, headers=auth_headers(relative))
    assert again.status_code == 409

    linked = client.get('/api/users/links', headers=auth_headers(relative)).json()['data']
    assert [p['email'] for p in linked] == [patient.email]


def test_link_to_non_patient_is_invalid(client, db, clinician):
    relative = make_user(db, UserRole.FAMILY, 'adik@example.com', 'Adik')
    response = client.post('/api/users/links', json={'patient_email': clinician.email},
                           headers=auth_headers(relative))
    assert response.status_code == 400


def test_patients_cannot_create_links(client, patient):
    response = client.post('/api/users/links', json={'patient_email': patient.email}, headers=auth_headers(patient))
    assert response.status_code == 403


def test_device_token_update(client, patient):
    response = client.put('/api/users/me/device-token', json={'device_token': 'new-token'},
                          headers=auth_headers(patient))
    assert response.status_code == 200
    assert response.json()['success'] is True


def test_invalid_token_is_unauthorized(client):
    response = client.get('/api/users/me', headers={'Authorization': 'Bearer not-a-jwt'})
    assert response.status_code == 401


def test_unlink_removes_access(client, patient, family):
    response = client.delete(f'/api/users/links/{patient.user_id}', headers=auth_headers(family))
    assert response.status_code == 200, response.text
    assert response.json()['data'] is True

    assert client.get('/api/users/links', headers=auth_headers(family)).json()['data'] == []
    sessions = client.get(f'/api/medications/patients/{patient.user_id}/sessions', headers=auth_headers(family))
    assert sessions.status_code == 403

    again = client.delete(f'/api/users/links/{patient.user_id}', headers=auth_headers(family))
    assert again.status_code == 404


def test_clinician_unlink_leaves_family_link(client, patient, clinician, family):
    response = client.delete(f'/api/users/links/{patient.user_id}', headers=auth_headers(clinician))
    assert response.status_code == 200

    connections = client.get('/api/users/me/connections', headers=auth_headers(patient)).json()['data']
    assert [(c['email'], c['role']) for c in connections] == [(family.email, 'FAMILY')]


def test_patient_sees_linked_clinicians_and_family(client, patient, clinician, family):
    response = client.get('/api/users/me/connections', headers=auth_headers(patient))
    assert response.status_code == 200, response.text
    assert [(c['full_name'], c['role']) for c in response.json()['data']] == \
        [('Dr. Sari', 'CLINICIAN'), ('Rina Santoso', 'FAMILY')]

    assert client.get('/api/users/me/connections', headers=auth_headers(family)).status_code == 403


def test_linked_patients_filter_by_name(client, db, clinician, patient):
    from app.models.model_patient_clinician import PatientClinician

    other = make_user(db, UserRole.PATIENT, 'wati@example.com', 'Wati Lestari')
    db.add(PatientClinician(patient_id=other.user_id, clinician_id=clinician.user_id))
    db.commit()

    everyone = client.get('/api/users/links', headers=auth_headers(clinician)).json()['data']
    assert len(everyone) == 2

    found = client.get('/api/users/links', params={'name': 'santo'}, headers=auth_headers(clinician)).json()['data']
    assert [p['email'] for p in found] == [patient.email]

    too_short = client.get('/api/users/links', params={'name': 'w'}, headers=auth_headers(clinician))
    assert too_short.status_code == 400


def test_family_reads_last_reported_location(client, clock, patient, family, stranger_family):
    missing = client.get(f'/api/users/links/{patient.user_id}/location', headers=auth_headers(family))
    assert missing.status_code == 404

    clock.set(9, 0)
    client.post('/api/users/me/location', json={'latitude': -6.2, 'longitude': 106.8}, headers=auth_headers(patient))
    clock.set(9, 30)
    recorded = client.post('/api/users/me/location', json={'latitude': -6.25, 'longitude': 106.85},
                           headers=auth_headers(patient))
    assert recorded.status_code == 200, recorded.text

    latest = client.get(f'/api/users/links/{patient.user_id}/location', headers=auth_headers(family))
    assert latest.status_code == 200
    assert latest.json()['data']['latitude'] == -6.25
    assert latest.json()['data']['recorded_at'] == '2026-10-19T09:30:00'

    denied = client.get(f'/api/users/links/{patient.user_id}/location', headers=auth_headers(stranger_family))
    assert denied.status_code == 403


def test_location_must_be_on_the_globe(client, patient, family):
    response = client.post('/api/users/me/location', json={'latitude': 91, 'longitude': 0},
                           headers=auth_headers(patient))
    assert response.status_code == 400
    assert client.post('/api/users/me/location', json={'latitude': 0, 'longitude': 0},
                       headers=auth_headers(family)).status_code == 403
