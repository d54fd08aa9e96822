"""Shared fixtures: the app wired to an in-memory Supabase fake, plus a signed-in operator."""

import pytest
from fastapi.testclient import TestClient

from app.database.supabase_client import get_session_client, get_supabase
from app.main import app
from app.modules.auth import service as auth_service_module
from fake_supabase import FakeSupabase

OPERATOR_EMAIL = "admin@example.com"
OPERATOR_PASSWORD = "correct-horse"


@pytest.fixture(autouse=True)
def clear_auth_cache():
    auth_service_module._AUTH_USER_CACHE.clear()
    yield
    auth_service_module._AUTH_USER_CACHE.clear()


@pytest.fixture
def fake_supabase():
    fake = FakeSupabase()
    fake.auth.add_user(OPERATOR_EMAIL, OPERATOR_PASSWORD)
    return fake


@pytest.fixture
def client(fake_supabase):
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_session_client] = lambda: fake_supabase
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    res = client.post("/api/v1/auth/login", json={"email": OPERATOR_EMAIL, "password": OPERATOR_PASSWORD})
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


@pytest.fixture
def make_person(client, auth_headers):
    def _make(first_name, last_name, **fields):
        body = {"first_name": first_name, "last_name": last_name, "phone_number": "9800000000", **fields}
        res = client.post("/api/v1/people", json=body, headers=auth_headers)
        assert res.status_code == 201, res.text
        return res.json()
    return _make


@pytest.fixture
def make_group(client, auth_headers):
    def _make(name, description=""):
        res = client.post("/api/v1/groups", json={"name": name, "description": description}, headers=auth_headers)
        assert res.status_code == 201, res.text
        return res.json()
    return _make
