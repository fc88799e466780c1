import os
import tempfile

import pytest

# Settings are read at import time, so the environment comes first
_tmp_dir = tempfile.mkdtemp(prefix="clinic-tests-")
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ["LOG_DIR"] = os.path.join(_tmp_dir, "logs")
os.environ["BCRYPT_ROUNDS"] = "4"

import fakeredis
from fastapi.testclient import TestClient

from clinic.main import app
from clinic.core.config import settings
from clinic.core.database import Base, SessionLocal, engine, get_redis

DEFAULT_PASSWORD = "Passw0rd!"


@pytest.fixture
def test_db():
    # Create tables
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def client(test_db, fake_redis):
    app.dependency_overrides[get_redis] = lambda: fake_redis
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def db_session(test_db):
    """Direct store access for checks the API deliberately hides."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def login(client):
    def _login(email, password=DEFAULT_PASSWORD):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login


@pytest.fixture
def admin_headers(login):
    return login(settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)


@pytest.fixture
def register_user(client, admin_headers):
    def _register(email, role, password=DEFAULT_PASSWORD, full_name="Test User"):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "full_name": full_name, "role": role},
            headers=admin_headers,
        )
        assert response.status_code == 200, response.text
        return response.json()["user"]
    return _register


@pytest.fixture
def receptionist_headers(register_user, login):
    register_user("reception@clinic.com", "Receptionist")
    return login("reception@clinic.com")


@pytest.fixture
def doctor_headers(register_user, login):
    register_user("doctor@clinic.com", "Doctor")
    return login("doctor@clinic.com")


@pytest.fixture
def doctor(client, admin_headers):
    response = client.post(
        "/api/doctor",
        json={
            "full_name": "Gregory House",
            "specialization": "Diagnostics",
            "email": "house@clinic.com",
            "phone": "555-0100",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def patient(client, receptionist_headers):
    response = client.post(
        "/api/patient",
        json={"first_name": "Jane", "last_name": "Doe", "date_of_birth": "1990-01-01"},
        headers=receptionist_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def appointment(client, receptionist_headers, patient, doctor):
    response = client.post(
        "/api/appointment",
        json={
            "patient_id": patient["id"],
            "doctor_id": doctor["id"],
            "appointment_date": "2030-05-01T09:30:00",
            "description": "Annual check-up",
        },
        headers=receptionist_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
