"""
app/api/routers/auth_router.py

Recruiter signup and credential login.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.config import get_auth_settings
from app.schemas.auth import AuthUserResponse, LoginRequest, LoginResponse, SignupRequest
from app.services.auth_service import (
    AuthConfigurationError,
    AuthService,
    InvalidCredentialsError,
    SignupValidationError,
)
from db.repositories.errors import DuplicateEmailError, UserPersistenceError
from db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db, get_auth_settings())


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Create a recruiter account.

    400 for a missing email/password or a password shorter than 8 characters,
    409 when the email is already registered.
    """

    try:
        auth_service.signup(email=body.email, password=body.password, name=body.name)
    except SignupValidationError as exc:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})
    except DuplicateEmailError as exc:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": str(exc)})
    except UserPersistenceError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Signup failed", "message": str(exc)},
        )

    return JSONResponse(status_code=status.HTTP_201_CREATED, content={"ok": True})


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Exchange email/password for a bearer token whose subject is the user id.
    """

    try:
        issued = auth_service.login(email=body.email, password=body.password)
    except InvalidCredentialsError as exc:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"error": str(exc)})
    except AuthConfigurationError as exc:
        logger.error("Login attempted without token secret: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Authentication unavailable"},
        )

    response = LoginResponse(
        access_token=issued.access_token,
        user=AuthUserResponse(id=issued.user.id, email=issued.user.email, name=issued.user.name),
    )
    return JSONResponse(content=response.model_dump(by_alias=True))
