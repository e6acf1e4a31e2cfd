import pytest
from tests.conftest import auth_headers


def test_login_success(client, seed_users):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "admin"})
    assert resp.status_code == 200
    data = resp.json()
    assert "access_token" in data
    assert data["user"]["role"] == "admin"


def test_login_invalid_username(client, seed_users):
    resp = client.post("/api/auth/login", json={"username": "nobody", "password": "x"})
    assert resp.status_code == 401


def test_login_wrong_password(client, seed_users):
    resp = client.post("/api/auth/login", json={"username": "hr", "password": "guard"})
    assert resp.status_code == 401


def test_me_authenticated(client, seed_users):
    headers = auth_headers(client, "hr")
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["username"] == "hr"


def test_me_unauthenticated(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code in (401, 403)  # HTTPBearer raises 401 or 403 depending on version


def test_me_with_garbage_token(client, seed_users):
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_health_db(client):
    resp = client.get("/api/health/db")
    assert resp.status_code == 200
    assert resp.json()["database"] == "sqlite"
