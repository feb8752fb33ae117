"""Password hashing and JWT creation/verification for authentication."""

import enum
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from app.core.config import settings

# argon2id with library defaults (memory-hard; ~64 MiB, 3 passes).
_password_hasher = PasswordHasher()

# Hashes written before the switch to argon2 carry the bcrypt "$2a$/$2b$" prefix.
LEGACY_BCRYPT_PREFIX = "$2"

NAME_MIN_LEN = 2
NAME_MAX_LEN = 100
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    return _password_hasher.hash(plain_password)


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored argon2 (or legacy bcrypt) hash."""
    if hashed.startswith(LEGACY_BCRYPT_PREFIX):
        # bcrypt has a 72-byte limit; hashes were created from the truncated bytes.
        pw_bytes = plain_password.encode("utf-8")[:72]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False
    try:
        return _password_hasher.verify(hashed, plain_password)
    except (VerificationError, InvalidHashError):
        return False


def password_needs_rehash(hashed: str) -> bool:
    """True for legacy bcrypt hashes and argon2 hashes made with outdated parameters."""
    if hashed.startswith(LEGACY_BCRYPT_PREFIX):
        return True
    try:
        return _password_hasher.check_needs_rehash(hashed)
    except InvalidHashError:
        return True


# Computed once so that logins for unknown emails cost the same as real ones.
DUMMY_PASSWORD_HASH = hash_password("synergysphere-timing-dummy")


class TokenFailure(str, enum.Enum):
    """Why a token was rejected."""

    EXPIRED = "expired"
    INVALID = "invalid"


@dataclass(frozen=True)
class TokenPayload:
    """Identity claims carried by a verified token."""

    user_id: int
    email: str
    token_type: str
    expires_at: datetime
    jti: str


@dataclass(frozen=True)
class TokenOk:
    payload: TokenPayload


@dataclass(frozen=True)
class TokenErr:
    reason: TokenFailure


TokenResult = TokenOk | TokenErr


@dataclass(frozen=True)
class TokenPair:
    """Access/refresh tokens issued together at login or registration."""

    access_token: str
    refresh_token: str
    refresh_expires_at: datetime


def _encode(
    user_id: int,
    email: str,
    token_type: str,
    secret: str,
    lifetime: timedelta,
    now: datetime | None,
) -> tuple[str, datetime]:
    issued_at = now or datetime.now(UTC)
    expire = issued_at + lifetime
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "type": token_type,
        "iat": issued_at,
        "exp": expire,
        # Random id keeps tokens minted within the same second distinct.
        "jti": secrets.token_hex(16),
    }
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM), expire


def create_access_token(
    user_id: int,
    email: str,
    *,
    now: datetime | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a short-lived access token signed with the access secret."""
    lifetime = expires_delta or timedelta(minutes=settings.JWT_ACCESS_EXPIRE_MINUTES)
    token, _ = _encode(
        user_id,
        email,
        ACCESS_TOKEN_TYPE,
        settings.JWT_ACCESS_SECRET.get_secret_value(),
        lifetime,
        now,
    )
    return token


def create_refresh_token(
    user_id: int,
    email: str,
    *,
    now: datetime | None = None,
    expires_delta: timedelta | None = None,
) -> tuple[str, datetime]:
    """Create a long-lived refresh token; returns (token, expires_at)."""
    lifetime = expires_delta or timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS)
    return _encode(
        user_id,
        email,
        REFRESH_TOKEN_TYPE,
        settings.JWT_REFRESH_SECRET.get_secret_value(),
        lifetime,
        now,
    )


def create_token_pair(user_id: int, email: str, *, now: datetime | None = None) -> TokenPair:
    """Issue an access token and a refresh token for the same identity."""
    access_token = create_access_token(user_id, email, now=now)
    refresh_token, refresh_expires_at = create_refresh_token(user_id, email, now=now)
    return TokenPair(
        access_token=access_token,
        refresh_token=refresh_token,
        refresh_expires_at=refresh_expires_at,
    )


def _verify(token: str, secret: str, expected_type: str) -> TokenResult:
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub", "type"]},
        )
    except jwt.ExpiredSignatureError:
        return TokenErr(TokenFailure.EXPIRED)
    except jwt.PyJWTError:
        return TokenErr(TokenFailure.INVALID)

    if claims.get("type") != expected_type:
        return TokenErr(TokenFailure.INVALID)
    try:
        user_id = int(claims["sub"])
    except (TypeError, ValueError):
        return TokenErr(TokenFailure.INVALID)

    return TokenOk(
        TokenPayload(
            user_id=user_id,
            email=str(claims.get("email", "")),
            token_type=expected_type,
            expires_at=datetime.fromtimestamp(claims["exp"], UTC),
            jti=str(claims.get("jti", "")),
        )
    )


def verify_access_token(token: str) -> TokenResult:
    """Verify an access token. Never raises; returns TokenOk or TokenErr."""
    return _verify(token, settings.JWT_ACCESS_SECRET.get_secret_value(), ACCESS_TOKEN_TYPE)


def verify_refresh_token(token: str) -> TokenResult:
    """Verify a refresh token's signature and expiry (not its presence in the store)."""
    return _verify(token, settings.JWT_REFRESH_SECRET.get_secret_value(), REFRESH_TOKEN_TYPE)
