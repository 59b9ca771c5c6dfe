# tests/helpers.py

from __future__ import annotations

from fastapi.testclient import TestClient


def register(client: TestClient, username: str, email: str | None = None, password: str = "secret1"):
    return client.post(
        "/api/users/register",
        json={"username": username, "email": email or f"{username}@example.com", "password": password},
    )


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def create_project(client: TestClient, headers: dict[str, str], **fields) -> dict:
    fields.setdefault("name", "P1")
    response = client.post("/api/projects", json=fields, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["project"]


def create_task(client: TestClient, headers: dict[str, str], **fields) -> dict:
    fields.setdefault("title", "T1")
    response = client.post("/api/tasks", json=fields, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["task"]
