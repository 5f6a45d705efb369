"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files

DEFAULT_JOB_FEED_BASE_URL = "https://www.juvenis.net/tr/jobjson/63kf52ur8x4rw7go"
DEFAULT_INTERVIEW_STATUS = "Görüşme Ayarlandı"


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class JobFeedSettings:
    """
    Upstream job-applications feed settings.
    """

    base_url: str = DEFAULT_JOB_FEED_BASE_URL
    timeout_seconds: float = 15.0


@dataclass(frozen=True)
class AuthSettings:
    """
    Credential and bearer-token settings.
    """

    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    token_ttl_minutes: int = 720
    bcrypt_rounds: int = 10


@dataclass(frozen=True)
class DashboardSettings:
    """
    Presentation defaults shared by the API and the Streamlit dashboard.
    """

    interview_status: str = DEFAULT_INTERVIEW_STATUS
    default_range_days: int = 6
    page_size: int = 25
    api_url: str = "http://127.0.0.1:8000"
    breakdown_top_n: int = 3


@lru_cache(maxsize=1)
def get_job_feed_settings() -> JobFeedSettings:
    """
    Return cached job feed settings from environment variables.
    """

    return JobFeedSettings(
        base_url=_get_str_env("JOB_FEED_BASE_URL", DEFAULT_JOB_FEED_BASE_URL).rstrip("/"),
        timeout_seconds=max(1.0, _get_float_env("JOB_FEED_TIMEOUT_SECONDS", 15.0)),
    )


@lru_cache(maxsize=1)
def get_auth_settings() -> AuthSettings:
    """
    Return cached authentication settings from environment variables.
    """

    return AuthSettings(
        jwt_secret=_get_optional_str_env("AUTH_JWT_SECRET"),
        jwt_algorithm=_get_str_env("AUTH_JWT_ALGORITHM", "HS256"),
        token_ttl_minutes=max(1, _get_int_env("AUTH_TOKEN_TTL_MINUTES", 720)),
        bcrypt_rounds=min(31, max(4, _get_int_env("AUTH_BCRYPT_ROUNDS", 10))),
    )


@lru_cache(maxsize=1)
def get_dashboard_settings() -> DashboardSettings:
    """
    Return cached dashboard settings from environment variables.
    """

    return DashboardSettings(
        interview_status=_get_str_env("DASHBOARD_INTERVIEW_STATUS", DEFAULT_INTERVIEW_STATUS),
        default_range_days=max(0, _get_int_env("DASHBOARD_DEFAULT_RANGE_DAYS", 6)),
        page_size=max(1, _get_int_env("DASHBOARD_PAGE_SIZE", 25)),
        api_url=_get_str_env("DASHBOARD_API_URL", "http://127.0.0.1:8000").rstrip("/"),
        breakdown_top_n=max(1, _get_int_env("DASHBOARD_BREAKDOWN_TOP_N", 3)),
    )
