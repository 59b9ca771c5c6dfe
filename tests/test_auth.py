# tests/test_auth.py

from __future__ import annotations

import time
from datetime import timedelta

import pytest
from jose import jwt

from app.schemas.user import Identity
from app.utils.security import (InvalidToken, get_password_hash, issue_token, verify_password,
                                verify_token)

from .helpers import auth_header

PROTECTED_ROUTES = [
    ("GET", "/api/users/profile"),
    ("GET", "/api/projects"),
    ("GET", "/api/projects/1"),
    ("POST", "/api/projects"),
    ("PUT", "/api/projects/1"),
    ("DELETE", "/api/projects/1"),
    ("GET", "/api/tasks"),
    ("GET", "/api/tasks/1"),
    ("POST", "/api/tasks"),
    ("PUT", "/api/tasks/1"),
    ("DELETE", "/api/tasks/1"),
    ("GET", "/api/tasks/project/1"),
]

IDENTITY = Identity(id=1, username="alice", email="a@x.com")


def test_token_round_trip() -> None:
    token = issue_token(IDENTITY)
    assert verify_token(token) == IDENTITY


def test_token_expires_after_a_day() -> None:
    before = time.time()
    claims = jwt.get_unverified_claims(issue_token(IDENTITY))
    assert 24 * 3600 - 5 <= claims["exp"] - before <= 24 * 3600 + 5


def test_expired_token_is_rejected() -> None:
    token = issue_token(IDENTITY, expires_delta=timedelta(seconds=-10))
    with pytest.raises(InvalidToken):
        verify_token(token)


def test_tampered_token_is_rejected() -> None:
    forged = jwt.encode({"id": 1, "username": "alice", "email": "a@x.com"}, "other-secret", algorithm="HS256")
    with pytest.raises(InvalidToken):
        verify_token(forged)


def test_token_without_identity_is_rejected() -> None:
    from app.utils.security import create_access_token

    with pytest.raises(InvalidToken):
        verify_token(create_access_token({"sub": "1"}))


def test_password_hash_verifies() -> None:
    hashed = get_password_hash("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


@pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
def test_missing_token(client, method, path) -> None:
    response = client.request(method, path, json={})
    assert response.status_code == 401
    assert response.json() == {"message": "No token provided"}


@pytest.mark.parametrize("header", ["Bearer", "Token abc", "Bearer a b", "bearer abc", "abc"])
def test_malformed_header(client, header) -> None:
    response = client.get("/api/projects", headers={"Authorization": header})
    assert response.status_code == 401
    assert response.json() == {"message": "Token error"}


@pytest.mark.parametrize("method,path", PROTECTED_ROUTES)
def test_expired_token_never_500(client, method, path) -> None:
    token = issue_token(IDENTITY, expires_delta=timedelta(seconds=-10))
    response = client.request(method, path, json={}, headers=auth_header(token))
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid token"}


def test_garbage_token(client) -> None:
    response = client.get("/api/tasks", headers=auth_header("not.a.jwt"))
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid token"}
