"""
app/api/routers/user_settings_router.py

Per-user dashboard settings endpoints.

The caller's token subject must equal ``userId``; otherwise both routes
answer 401 without touching storage.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.api.dependencies import get_current_subject, get_preference_service
from app.schemas.user_settings import (
    UserSettingsResponse,
    UserSettingsUpdateResponse,
    VisibleColumnsPayload,
)
from app.services.preference_service import PreferenceService
from db.repositories.errors import PreferencePersistenceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["user-settings"])


def _unauthorized() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"error": "Unauthorized"})


def _storage_failure(exc: PreferencePersistenceError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Settings storage failed", "message": str(exc)},
    )


@router.get("/{user_id}/settings", response_model=UserSettingsResponse)
def get_user_settings(
    user_id: str,
    subject: str | None = Depends(get_current_subject),
    preferences: PreferenceService = Depends(get_preference_service),
) -> UserSettingsResponse | JSONResponse:
    """
    Return the stored visible columns, or an empty list when none are saved.
    """

    if subject is None or subject != user_id:
        return _unauthorized()

    try:
        columns = preferences.get_visible_columns(user_id)
    except PreferencePersistenceError as exc:
        return _storage_failure(exc)

    payload = UserSettingsResponse(settings=VisibleColumnsPayload(visible_columns=columns))
    return JSONResponse(content=payload.model_dump(by_alias=True))


@router.put("/{user_id}/settings", response_model=UserSettingsUpdateResponse)
def put_user_settings(
    user_id: str,
    body: Any = Body(default=None),
    subject: str | None = Depends(get_current_subject),
    preferences: PreferenceService = Depends(get_preference_service),
) -> UserSettingsUpdateResponse | JSONResponse:
    """
    Upsert the visible columns for ``user_id`` (last write wins).
    """

    if subject is None or subject != user_id:
        return _unauthorized()

    try:
        parsed = VisibleColumnsPayload.model_validate(body if body is not None else {})
    except ValidationError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid body",
                "details": exc.errors(include_url=False, include_context=False, include_input=False),
            },
        )

    try:
        preferences.save_visible_columns(user_id, parsed.visible_columns)
    except PreferencePersistenceError as exc:
        return _storage_failure(exc)

    return UserSettingsUpdateResponse(ok=True)
