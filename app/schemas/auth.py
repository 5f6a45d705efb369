"""
app/schemas/auth.py

Request/response schemas for recruiter signup and login.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SignupRequest(BaseModel):
    # Field checks live in AuthService so its messages reach the client.
    name: Any = None
    email: Any = None
    password: Any = None


class LoginRequest(BaseModel):
    email: Any = None
    password: Any = None


class AuthUserResponse(BaseModel):
    id: str
    email: str
    name: str | None = None


class LoginResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str
    token_type: str = "bearer"
    user: AuthUserResponse
