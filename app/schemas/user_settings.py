"""
app/schemas/user_settings.py

Request/response schemas for per-user dashboard settings.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VisibleColumnsPayload(_CamelModel):
    visible_columns: list[str] = Field(default_factory=list)


class UserSettingsResponse(BaseModel):
    settings: VisibleColumnsPayload


class UserSettingsUpdateResponse(BaseModel):
    ok: bool = True
