"""Tests for registration, sessions and profile management."""
from __future__ import annotations

from uuid import uuid4

import pytest

from proconnect.config import get_settings
from proconnect.services import create_access_token, decode_access_token, hash_password, verify_password


def _register(client, **overrides):
    payload = {
        "full_name": "Ada Lovelace",
        "username": "ada",
        "email": "ada@proconnect.dev",
        "password": "analytical",
        "confirm_password": "analytical",
        "skills": "mathematics, engines, mathematics",
    }
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def test_register_sets_session_cookie(anonymous_client):
    response = _register(anonymous_client)
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["success"] is True
    assert body["user"]["username"] == "ada"
    assert body["user"]["skills"] == ["mathematics", "engines"]
    assert "hashed_password" not in body["user"]

    cookie_name = get_settings().session_cookie_name
    assert anonymous_client.cookies.get(cookie_name) == body["token"]

    me = anonymous_client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["email"] == "ada@proconnect.dev"


def test_bearer_token_is_accepted(anonymous_client):
    token = _register(anonymous_client).json()["token"]
    anonymous_client.cookies.clear()

    assert anonymous_client.get("/api/auth/me").status_code == 401

    me = anonymous_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["user"]["username"] == "ada"


def test_login_checks_credentials(anonymous_client):
    _register(anonymous_client)
    anonymous_client.cookies.clear()

    wrong = anonymous_client.post("/api/auth/login", json={"email": "ada@proconnect.dev", "password": "nope-nope"})
    assert wrong.status_code == 401
    assert wrong.json() == {"success": False, "message": "Invalid email or password", "code": "unauthenticated"}

    ok = anonymous_client.post("/api/auth/login", json={"email": "ADA@proconnect.dev", "password": "analytical"})
    assert ok.status_code == 200
    assert ok.json()["user"]["username"] == "ada"


def test_duplicate_username_or_email_conflicts(anonymous_client):
    assert _register(anonymous_client).status_code == 201

    same_username = _register(anonymous_client, username="ADA", email="other@proconnect.dev")
    assert same_username.status_code == 409
    assert same_username.json()["code"] == "conflict"

    same_email = _register(anonymous_client, username="ada2", email="Ada@proconnect.dev")
    assert same_email.status_code == 409
    assert same_email.json()["message"] == "Email already registered"


def test_registration_validates_input(anonymous_client):
    mismatch = _register(anonymous_client, confirm_password="different")
    assert mismatch.status_code == 400
    assert mismatch.json()["code"] == "invalid_input"
    assert "Passwords do not match" in mismatch.json()["message"]

    short = _register(anonymous_client, password="abc", confirm_password="abc")
    assert short.status_code == 400

    bad_username = _register(anonymous_client, username="ada lovelace")
    assert bad_username.status_code == 400


def test_logout_clears_the_session(anonymous_client):
    _register(anonymous_client)
    assert anonymous_client.get("/api/auth/me").status_code == 200

    response = anonymous_client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Logged out successfully"}
    assert anonymous_client.get("/api/auth/me").status_code == 401


def test_profile_update(authed_client, user_factory):
    ada = user_factory("ada", "Ada Lovelace")
    client = authed_client(ada)

    response = client.put(
        "/api/users/profile",
        json={
            "bio": "  Poet of numbers  ",
            "skills": "math, poetry",
            "phone_number": "+44 1234-567-890",
            "education": {"institute": "Home", "degree": "", "year": "1833"},
        },
    )
    assert response.status_code == 200, response.text
    profile = response.json()["profile"]
    assert profile["bio"] == "Poet of numbers"
    assert profile["skills"] == ["math", "poetry"]
    assert profile["phone_number"] == "+441234567890"
    assert profile["education"]["year"] == "1833"
    assert profile["education"]["degree"] is None
    # Untouched fields keep their values.
    assert profile["full_name"] == "Ada Lovelace"

    blank_name = client.put("/api/users/profile", json={"full_name": "   ", "location": ""})
    assert blank_name.json()["profile"]["full_name"] == "Ada Lovelace"
    assert blank_name.json()["profile"]["location"] is None

    mine = client.get("/api/users/profile").json()["profile"]
    assert mine["skills"] == ["math", "poetry"]


@pytest.mark.parametrize(
    "payload",
    [
        {"phone_number": "12345"},
        {"education": {"institute": "Home", "year": "33"}},
    ],
)
def test_profile_update_rejects_invalid_fields(authed_client, user_factory, payload):
    ada = user_factory("ada")
    response = authed_client(ada).put("/api/users/profile", json=payload)
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_input"


def test_public_profile_lookup(authed_client, user_factory):
    ada = user_factory("ada")
    ben = user_factory("ben", "Ben Franklin")
    client = authed_client(ada)

    found = client.get(f"/api/users/profile/{ben.id}")
    assert found.status_code == 200
    assert found.json()["profile"]["full_name"] == "Ben Franklin"

    missing = client.get(f"/api/users/profile/{uuid4()}")
    assert missing.status_code == 404
    assert missing.json()["message"] == "User not found"


def test_token_and_password_helpers():
    subject = uuid4()
    assert decode_access_token(create_access_token(subject)) == subject

    hashed = hash_password("s3cret!")
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret!", "not-a-bcrypt-hash")
