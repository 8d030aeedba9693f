"""
Shared fixtures for API tests.

Provides:
- A fresh in-memory SQLite schema per test
- In-memory object storage
- Signed-in seeker/employer TestClients (one client per user so cookies
  never leak between accounts)
"""

import itertools
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["USE_IN_MEMORY_STORAGE"] = "true"
os.environ["EMAIL_PROVIDER"] = "console"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient

from skillshub.main import app
from skillshub.db.database import drop_db, get_db_session, init_db
from skillshub.db.seed import seed_skills
from skillshub.models import Skill
from skillshub.services import verification_service
from skillshub.services.storage import InMemoryStorageClient, set_storage_client

FIXED_OTP = "123456"
PASSWORD = "secret123"

_counter = itertools.count(1)


@pytest.fixture(autouse=True)
def database():
    init_db()
    yield
    drop_db()


@pytest.fixture(autouse=True)
def storage():
    client = InMemoryStorageClient()
    set_storage_client(client)
    yield client
    set_storage_client(None)


@pytest.fixture(autouse=True)
def fixed_otp(monkeypatch):
    monkeypatch.setattr(verification_service, "generate_otp", lambda: FIXED_OTP)
    return FIXED_OTP


@pytest.fixture
def anon_client():
    return TestClient(app)


@pytest.fixture
def skills():
    """Seed the skill catalogue and return {slug: id}."""
    with get_db_session() as db:
        seed_skills(db)
    with get_db_session() as db:
        return {s.slug: s.id for s in db.query(Skill).all()}


def signup_payload(role: str, **overrides) -> dict:
    n = next(_counter)
    payload = {
        "firstName": "Mariama" if role == "seeker" else "Ada",
        "lastName": "Kamara" if role == "seeker" else "Kanu",
        "email": f"{role}{n}@skillshub.sl",
        "username": f"{role}{n}",
        "password": PASSWORD,
    }
    if role == "seeker":
        payload["pathway"] = "GRADUATE"
    else:
        payload["orgName"] = f"Salone Digital {n}"
        payload["orgType"] = "Startup"
    payload.update(overrides)
    return payload


@pytest.fixture
def make_user():
    """
    Factory: sign up, verify the OTP and return a logged-in TestClient.

    The client carries .user_id and .email for convenience.
    """
    def _make(role: str = "seeker", **overrides) -> TestClient:
        client = TestClient(app)
        payload = signup_payload(role, **overrides)
        response = client.post(f"/api/auth/signup/{role}", json=payload)
        assert response.status_code == 201, response.text
        user_id = response.json()["userId"]

        response = client.post("/api/auth/verify-otp", json={"userId": user_id, "otp": FIXED_OTP})
        assert response.status_code == 200, response.text

        client.user_id = user_id
        client.email = payload["email"]
        return client

    return _make


@pytest.fixture
def seeker(make_user):
    return make_user("seeker")


@pytest.fixture
def employer(make_user):
    return make_user("employer")


@pytest.fixture
def other_employer(make_user):
    return make_user("employer", firstName="Mohamed", lastName="Sesay")
