"""
app/services/auth_service.py

Credential signup/login and bearer-token issuing for recruiters.

Passwords are stored as bcrypt hashes (``$2b$<cost>$...``).
Tokens are HS256 JWTs whose ``sub`` claim is the user id; that subject is the
identity every preference call is keyed by.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import AuthSettings
from app.repositories.user_repository import UserRepository
from db.repositories.errors import DuplicateEmailError, UserPersistenceError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
_BCRYPT_MAX_BYTES = 72


class SignupValidationError(ValueError):
    """
    Raised when signup input is missing or too weak.
    """


class InvalidCredentialsError(Exception):
    """
    Raised when an email/password pair does not match an account.
    """


class InvalidTokenError(Exception):
    """
    Raised when a bearer token cannot be verified.
    """


class AuthConfigurationError(RuntimeError):
    """
    Raised when token signing is attempted without a configured secret.
    """


def _password_bytes(password: str) -> bytes:
    # bcrypt only reads the first 72 bytes of a password
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, *, rounds: int) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, stored: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), stored.encode("ascii"))
    except ValueError:
        return False


def normalize_email(email: Any) -> str:
    return str(email if email is not None else "").strip().lower()


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    email: str
    name: str | None


@dataclass(frozen=True)
class IssuedToken:
    access_token: str
    expires_at: datetime
    user: AuthenticatedUser


class TokenCodec:
    """
    Encodes and verifies HS256 bearer tokens.
    """

    def __init__(self, settings: AuthSettings) -> None:
        self._settings = settings

    def _secret(self) -> str:
        if not self._settings.jwt_secret:
            raise AuthConfigurationError("AUTH_JWT_SECRET is not configured.")
        return self._settings.jwt_secret

    def encode(self, user: AuthenticatedUser, *, now: datetime | None = None) -> IssuedToken:
        issued_at = now or datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(minutes=self._settings.token_ttl_minutes)
        claims = {
            "sub": user.id,
            "email": user.email,
            "name": user.name,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self._secret(), algorithm=self._settings.jwt_algorithm)
        return IssuedToken(access_token=token, expires_at=expires_at, user=user)

    def decode_subject(self, token: str) -> str:
        """
        Verify ``token`` and return its ``sub`` claim.
        """

        try:
            claims = jwt.decode(token, self._secret(), algorithms=[self._settings.jwt_algorithm])
        except jwt.PyJWTError as exc:
            raise InvalidTokenError("Invalid token") from exc
        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError("Token has no subject")
        return subject


class AuthService:
    """
    Account signup and credential login against the users table.
    """

    def __init__(self, session: Session, settings: AuthSettings) -> None:
        self._session = session
        self._settings = settings
        self._users = UserRepository(session)
        self._tokens = TokenCodec(settings)

    def signup(self, *, email: Any, password: Any, name: Any = None) -> AuthenticatedUser:
        normalized_email = normalize_email(email)
        raw_password = str(password if password is not None else "")
        display_name = str(name).strip() if name is not None else ""

        if not normalized_email or not raw_password:
            raise SignupValidationError("Email and password are required")
        if len(raw_password) < MIN_PASSWORD_LENGTH:
            raise SignupValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        if self._users.get_by_email(normalized_email) is not None:
            raise DuplicateEmailError("Email already registered")

        try:
            user = self._users.create(
                email=normalized_email,
                password_hash=hash_password(raw_password, rounds=self._settings.bcrypt_rounds),
                name=display_name or None,
            )
            self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            raise DuplicateEmailError("Email already registered") from exc
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.exception("Failed to create user email=%s", normalized_email)
            raise UserPersistenceError("Could not create user.") from exc

        logger.info("User signed up user_id=%s", user.id)
        return AuthenticatedUser(id=str(user.id), email=user.email, name=user.name)

    def login(self, *, email: Any, password: Any) -> IssuedToken:
        normalized_email = normalize_email(email)
        raw_password = str(password if password is not None else "")
        if not normalized_email or not raw_password:
            raise InvalidCredentialsError("Invalid email or password")

        user = self._users.get_by_email(normalized_email)
        if user is None or not verify_password(raw_password, user.password_hash):
            logger.info("Login rejected email=%s", normalized_email)
            raise InvalidCredentialsError("Invalid email or password")

        return self._tokens.encode(AuthenticatedUser(id=str(user.id), email=user.email, name=user.name))
