"""Tests for password hashing and the session endpoints."""
from datetime import timedelta

from papergrade.services.auth_service import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hashing():
    hashed = hash_password("testpass123")
    assert hashed != "testpass123"
    assert hashed.startswith("$2")
    assert verify_password("testpass123", hashed)
    assert not verify_password("wrongpass", hashed)
    assert not verify_password("testpass123", "not-a-bcrypt-hash")


def test_access_tokens():
    assert decode_access_token(create_access_token(42)) == 42
    assert decode_access_token(create_access_token(42, expires_delta=timedelta(seconds=-1))) is None
    assert decode_access_token("garbage") is None


def test_signup_login_logout(client):
    response = client.post("/api/signup", json={"email": "Teacher@Example.com", "password": "correct-horse"})
    assert response.status_code == 201
    assert response.json()["email"] == "teacher@example.com"
    assert client.get("/api/user").status_code == 200

    assert client.post("/api/logout").status_code == 204
    client.cookies.clear()
    assert client.get("/api/user").status_code == 401

    response = client.post("/api/login", json={"email": "teacher@example.com", "password": "correct-horse"})
    assert response.status_code == 200
    assert client.get("/api/user").json()["email"] == "teacher@example.com"


def test_duplicate_signup(client):
    payload = {"email": "teacher@example.com", "password": "correct-horse"}
    assert client.post("/api/signup", json=payload).status_code == 201
    assert client.post("/api/signup", json=payload).status_code == 409


def test_wrong_password(client):
    client.post("/api/signup", json={"email": "teacher@example.com", "password": "correct-horse"})
    client.cookies.clear()
    response = client.post("/api/login", json={"email": "teacher@example.com", "password": "battery-staple"})
    assert response.status_code == 401
    assert client.get("/api/user").status_code == 401


def test_bearer_token(client):
    client.post("/api/signup", json={"email": "teacher@example.com", "password": "correct-horse"})
    token = client.cookies.get("access_token")
    client.cookies.clear()

    response = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
