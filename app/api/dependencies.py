"""
app/api/dependencies.py

Shared FastAPI dependencies for authentication and service wiring.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.config import get_auth_settings
from app.services.auth_service import AuthConfigurationError, InvalidTokenError, TokenCodec
from app.services.preference_service import PreferenceService
from db.session import get_db

logger = logging.getLogger(__name__)


def get_token_codec() -> TokenCodec:
    return TokenCodec(get_auth_settings())


def get_current_subject(
    authorization: Annotated[str | None, Header()] = None,
    codec: TokenCodec = Depends(get_token_codec),
) -> str | None:
    """
    Return the verified token subject, or ``None`` when unauthenticated.

    Routes decide how to answer an anonymous caller.
    """

    auth = (authorization or "").strip()
    if not auth.lower().startswith("bearer "):
        return None
    token = auth.split(" ", 1)[1].strip()
    if not token:
        return None
    try:
        return codec.decode_subject(token)
    except InvalidTokenError:
        logger.info("Rejected bearer token")
        return None
    except AuthConfigurationError:
        logger.error("Bearer token received but AUTH_JWT_SECRET is not configured")
        return None


def get_preference_service(db: Session = Depends(get_db)) -> PreferenceService:
    return PreferenceService(db)
