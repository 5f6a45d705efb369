"""
app/clients/dashboard_client.py

HTTP client the Streamlit dashboard uses to talk to the API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

logger = logging.getLogger(__name__)


class DashboardAPIError(RuntimeError):
    """
    Raised when an API call fails; ``message`` is safe to show to the user.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class AuthSession:
    user_id: str
    email: str
    name: str | None
    access_token: str


def _error_message(response: requests.Response, fallback: str) -> str:
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if not isinstance(payload, dict):
        return fallback
    message = payload.get("error") or fallback
    if payload.get("upstreamStatus") is not None:
        message = f"{message} (upstream HTTP {payload['upstreamStatus']})"
    elif payload.get("message"):
        message = f"{message}: {payload['message']}"
    return str(message)


class DashboardClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 30.0,
        http: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._http = http or requests.Session()

    def _call(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        fallback_error: str,
    ) -> Any:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            response = self._http.request(
                method=method,
                url=f"{self._base_url}{path}",
                params=params,
                json=json_body,
                headers=headers,
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.warning("Dashboard API unreachable path=%s error=%s", path, exc)
            raise DashboardAPIError(f"{fallback_error}: {exc}") from exc

        if not response.ok:
            raise DashboardAPIError(_error_message(response, fallback_error), response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise DashboardAPIError(fallback_error, response.status_code) from exc

    def signup(self, *, email: str, password: str, name: str | None = None) -> None:
        self._call(
            "POST",
            "/auth/signup",
            json_body={"email": email, "password": password, "name": name},
            fallback_error="Signup failed",
        )

    def login(self, *, email: str, password: str) -> AuthSession:
        payload = self._call(
            "POST",
            "/auth/login",
            json_body={"email": email, "password": password},
            fallback_error="Login failed",
        )
        user = payload.get("user") or {}
        return AuthSession(
            user_id=str(user.get("id", "")),
            email=str(user.get("email", "")),
            name=user.get("name"),
            access_token=str(payload.get("accessToken", "")),
        )

    def fetch_jobs(self, start_date: str, end_date: str) -> list[dict[str, Any]]:
        payload = self._call(
            "GET",
            "/jobs",
            params={"startDate": start_date, "endDate": end_date},
            fallback_error="Failed to fetch data",
        )
        data = payload.get("data") if isinstance(payload, dict) else None
        return data if isinstance(data, list) else []

    def get_visible_columns(self, session: AuthSession) -> list[str]:
        payload = self._call(
            "GET",
            f"/users/{session.user_id}/settings",
            token=session.access_token,
            fallback_error="Failed to load settings",
        )
        settings = payload.get("settings") if isinstance(payload, dict) else None
        columns = settings.get("visibleColumns") if isinstance(settings, dict) else None
        return [str(column) for column in columns] if isinstance(columns, list) else []

    def save_visible_columns(self, session: AuthSession, visible_columns: list[str]) -> None:
        self._call(
            "PUT",
            f"/users/{session.user_id}/settings",
            token=session.access_token,
            json_body={"visibleColumns": list(visible_columns)},
            fallback_error="Failed to save settings",
        )
