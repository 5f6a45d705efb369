"""
Shared fixtures: an in-memory SQLite database and canned feed records.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import db.models  # noqa: F401 (registers tables on Base.metadata)
from db.base import Base
from db.session import build_session_factory


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    try:
        yield eng
    finally:
        Base.metadata.drop_all(eng)
        eng.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Generator[Session, None, None]:
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def feed_record() -> dict[str, Any]:
    """One upstream record as the job feed returns it."""
    return {
        "id": 9182,
        "name": "Ayşe Yılmaz",
        "phone": "05321234567",
        "email": "ayse@example.com",
        "city_name": "Ankara",
        "semt": "Çankaya",
        "source_name": "Kariyer",
        "phonestatuename": "Görüşme Ayarlandı",
        "phone_date": "20240312",
        "facetofacestatuename": None,
        "facetoface_date": None,
        "documentstatuename": "Eksik",
        "document_date": "20240315",
        "jobstatuename": "Beklemede",
        "job_statue_date": "",
        "job_exit_date": None,
        "level_name": "Junior",
        "dealer_name": "Merkez",
        "realdate": "2024-03-10 14:25:09",
        "totalview": 42,
        "actual_link": "https://forms.example.com/f/9182",
        "internal_notes": "not exposed",
    }
