# tests/test_users.py

from __future__ import annotations

from sqlalchemy import create_engine, func, select

from app.models.user import User

from .conftest import _DB_FILE
from .helpers import auth_header, register


def _count_users(email: str) -> int:
    engine = create_engine(f"sqlite:///{_DB_FILE}")
    try:
        with engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(User).where(User.email == email)).scalar_one()
    finally:
        engine.dispose()


def test_register_returns_user_and_token(client) -> None:
    response = register(client, "alice", "a@x.com", "secret1")

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Usuario registrado exitosamente"
    assert body["user"]["username"] == "alice"
    assert body["user"]["email"] == "a@x.com"
    assert "password" not in body["user"]
    assert "hashed_password" not in body["user"]
    assert body["token"]


def test_register_stores_only_a_hash(client) -> None:
    register(client, "alice", "a@x.com", "secret1")

    engine = create_engine(f"sqlite:///{_DB_FILE}")
    with engine.connect() as conn:
        stored = conn.execute(select(User.hashed_password)).scalar_one()
    engine.dispose()

    assert stored != "secret1"
    assert stored.startswith("$2")


def test_register_requires_every_field(client) -> None:
    for payload in (
        {"email": "a@x.com", "password": "secret1"},
        {"username": "alice", "password": "secret1"},
        {"username": "alice", "email": "a@x.com"},
        {"username": "", "email": "a@x.com", "password": "secret1"},
    ):
        response = client.post("/api/users/register", json=payload)
        assert response.status_code == 400, payload
        assert response.json()["message"] == "Todos los campos son requeridos"


def test_register_rejects_malformed_email(client) -> None:
    response = client.post(
        "/api/users/register",
        json={"username": "alice", "email": "not-an-email", "password": "secret1"},
    )
    assert response.status_code == 400


def test_duplicate_email_is_rejected_without_new_row(client) -> None:
    assert register(client, "alice", "a@x.com").status_code == 201

    response = register(client, "alice2", "a@x.com")

    assert response.status_code == 400
    assert response.json()["message"] == "Este correo electrónico ya está registrado"
    assert _count_users("a@x.com") == 1


def test_duplicate_username_is_a_conflict(client) -> None:
    assert register(client, "alice", "a@x.com").status_code == 201

    response = register(client, "alice", "other@x.com")

    assert response.status_code == 400
    assert _count_users("other@x.com") == 0


def test_login_success(client) -> None:
    register(client, "alice", "a@x.com", "secret1")

    response = client.post("/api/users/login", json={"email": "a@x.com", "password": "secret1"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Inicio de sesión exitoso"
    assert body["user"] == {"id": body["user"]["id"], "username": "alice", "email": "a@x.com"}
    assert client.get("/api/users/profile", headers=auth_header(body["token"])).status_code == 200


def test_login_with_the_mixed_case_email_used_to_register(client) -> None:
    assert register(client, "carol", "Carol@Example.COM", "secret1").status_code == 201

    for email in ("Carol@Example.COM", "Carol@example.com"):
        response = client.post("/api/users/login", json={"email": email, "password": "secret1"})
        assert response.status_code == 200, email
        assert response.json()["user"]["username"] == "carol"


def test_login_with_malformed_email_is_bad_credentials(client) -> None:
    register(client, "alice", "a@x.com", "secret1")

    response = client.post("/api/users/login", json={"email": "not-an-email", "password": "secret1"})

    assert response.status_code == 401
    assert response.json() == {"message": "Credenciales inválidas"}


def test_login_failures_are_indistinguishable(client) -> None:
    register(client, "alice", "a@x.com", "secret1")

    wrong_password = client.post("/api/users/login", json={"email": "a@x.com", "password": "nope"})
    unknown_email = client.post("/api/users/login", json={"email": "ghost@x.com", "password": "secret1"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"message": "Credenciales inválidas"}


def test_login_requires_both_fields(client) -> None:
    response = client.post("/api/users/login", json={"email": "a@x.com"})
    assert response.status_code == 400
    assert response.json()["message"] == "Correo electrónico y contraseña son requeridos"


def test_profile_excludes_password(client, alice) -> None:
    response = client.get("/api/users/profile", headers=alice)

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["username"] == "alice"
    assert user["email"] == "a@x.com"
    assert user["created_at"] is not None
    assert "hashed_password" not in user


def test_profile_of_vanished_user_is_404(client, alice) -> None:
    engine = create_engine(f"sqlite:///{_DB_FILE}")
    with engine.begin() as conn:
        conn.execute(User.__table__.delete())
    engine.dispose()

    response = client.get("/api/users/profile", headers=alice)

    assert response.status_code == 404
    assert response.json()["message"] == "Usuario no encontrado"
