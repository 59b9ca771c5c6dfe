"""HTTP client for the Project Manager API.

Keeps the caller's token between calls the way a browser frontend keeps it in
local storage: `login` stores it, every request sends it as a Bearer header,
and a 401 from the server wipes it.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class TokenStore:
    """Token and user of the signed-in caller, optionally persisted as JSON."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path else None
        self.token: str | None = None
        self.user: dict[str, Any] | None = None
        self._load()

    def _load(self) -> None:
        if self.path is None or not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable token store %s", self.path)
            return
        self.token = data.get("token")
        self.user = data.get("user")

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": self.token, "user": self.user}), encoding="utf-8")

    def set(self, token: str, user: dict[str, Any]) -> None:
        self.token = token
        self.user = user
        self._save()

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.path is not None and self.path.exists():
            self.path.unlink()


class ApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http: httpx.Client | None = None,
        token_store: TokenStore | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = http or httpx.Client(timeout=10.0)
        self.tokens = token_store or TokenStore()

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ── transport ──────────────────────────────────────

    def _request(self, method: str, path: str, json_body: dict | None = None) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.tokens.token:
            headers["Authorization"] = f"Bearer {self.tokens.token}"

        response = self.http.request(method, f"{self.base_url}{path}", json=json_body, headers=headers)

        if response.status_code == 401:
            # Expired or revoked token: forget the session
            self.tokens.clear()
        if response.is_error:
            try:
                message = response.json().get("message", response.text)
            except ValueError:
                message = response.text
            raise ApiError(response.status_code, message)
        return response.json()

    # ── auth ───────────────────────────────────────────

    def register(self, username: str, email: str, password: str) -> dict:
        return self._request(
            "POST", "/users/register",
            {"username": username, "email": email, "password": password},
        )

    def login(self, email: str, password: str) -> dict:
        data = self._request("POST", "/users/login", {"email": email, "password": password})
        self.tokens.set(data["token"], data["user"])
        return data

    def logout(self) -> None:
        self.tokens.clear()

    def get_profile(self) -> dict:
        return self._request("GET", "/users/profile")["user"]

    def is_authenticated(self) -> bool:
        return bool(self.tokens.token)

    @property
    def stored_user(self) -> dict | None:
        return self.tokens.user

    # ── projects ───────────────────────────────────────

    def get_projects(self) -> list[dict]:
        return self._request("GET", "/projects")["projects"]

    def get_project(self, project_id: int) -> dict:
        """Returns {"project": ..., "tasks": [...]}."""
        return self._request("GET", f"/projects/{project_id}")

    def create_project(self, **fields) -> dict:
        return self._request("POST", "/projects", fields)["project"]

    def update_project(self, project_id: int, **fields) -> dict:
        return self._request("PUT", f"/projects/{project_id}", fields)["project"]

    def delete_project(self, project_id: int) -> str:
        return self._request("DELETE", f"/projects/{project_id}")["message"]

    # ── tasks ──────────────────────────────────────────

    def get_tasks(self) -> list[dict]:
        return self._request("GET", "/tasks")["tasks"]

    def get_task(self, task_id: int) -> dict:
        return self._request("GET", f"/tasks/{task_id}")["task"]

    def get_tasks_by_project(self, project_id: int) -> dict:
        """Returns {"project_id", "project_name", "tasks"}."""
        return self._request("GET", f"/tasks/project/{project_id}")

    def create_task(self, **fields) -> dict:
        return self._request("POST", "/tasks", fields)["task"]

    def update_task(self, task_id: int, **fields) -> dict:
        return self._request("PUT", f"/tasks/{task_id}", fields)["task"]

    def delete_task(self, task_id: int) -> str:
        return self._request("DELETE", f"/tasks/{task_id}")["message"]
