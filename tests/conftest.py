import os
from datetime import datetime

os.environ['SQL_DATABASE_URL'] = 'sqlite://'
os.environ['SECRET_KEY'] = 'test-secret-key-that-is-long-enough-for-hs256'
os.environ['REMINDER_POLLER_ENABLED'] = 'false'
os.environ['SCHEDULER_API_KEY'] = 'test-scheduler-key'
os.environ['TIMEZONE'] = 'Asia/Jakarta'

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.db.base import SessionLocal, engine
from app.helpers.clock import get_clock
from app.helpers.enums import UserRole
from app.main import app
from app.models import Base
from app.models.model_patient_clinician import PatientClinician
from app.models.model_patient_family import PatientFamily
from app.models.model_user import User

# Monday
TODAY = datetime(2026, 10, 19).date()


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def set(self, hour: int, minute: int = 0):
        self.now = datetime.combine(TODAY, datetime.min.time()).replace(hour=hour, minute=minute)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def clock():
    fake = FakeClock(datetime(2026, 10, 19, 7, 0))
    app.dependency_overrides[get_clock] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_clock, None)


@pytest.fixture
def client(clock):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


def make_user(db, role: UserRole, email: str, full_name: str, device_token: str = None) -> User:
    user = User(
        full_name=full_name,
        email=email,
        hashed_password='not-used',
        role=role.value,
        device_token=device_token,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    return {'Authorization': f'Bearer {create_access_token(user_id=user.user_id, role=user.role)}'}


@pytest.fixture
def patient(db):
    return make_user(db, UserRole.PATIENT, 'budi@example.com', 'Budi Santoso', device_token='patient-device')


@pytest.fixture
def clinician(db, patient):
    user = make_user(db, UserRole.CLINICIAN, 'dr.sari@example.com', 'Dr. Sari')
    db.add(PatientClinician(patient_id=patient.user_id, clinician_id=user.user_id))
    db.commit()
    return user


@pytest.fixture
def family(db, patient):
    user = make_user(db, UserRole.FAMILY, 'rina@example.com', 'Rina Santoso', device_token='family-device')
    db.add(PatientFamily(patient_id=patient.user_id, family_id=user.user_id))
    db.commit()
    return user


@pytest.fixture
def stranger_family(db):
    return make_user(db, UserRole.FAMILY, 'other@example.com', 'Unlinked Relative')


@pytest.fixture
def create_medication(client, clinician, patient):
    def _create(name='Amlodipine', dosage='5mg', schedule=None, notify_family=True):
        response = client.post(
            f'/api/medications/patients/{patient.user_id}',
            json={
                'name': name,
                'dosage': dosage,
                'schedule': schedule or {'type': 'daily_fixed_times', 'times': ['08:00', '20:00']},
                'notify_family': notify_family,
            },
            headers=auth_headers(clinician)
        )
        assert response.status_code == 200, response.text
        return response.json()['data']
    return _create
