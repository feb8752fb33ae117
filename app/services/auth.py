"""Session lifecycle: registration, login, access-token refresh, logout, and token-to-user resolution."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, UnauthorizedError
from app.core.security import (
    DUMMY_PASSWORD_HASH,
    TokenErr,
    TokenFailure,
    TokenPair,
    create_access_token,
    create_token_pair,
    hash_password,
    password_needs_rehash,
    verify_access_token,
    verify_password,
    verify_refresh_token,
)
from app.models import RefreshToken, User
from app.models.base import as_utc, utcnow

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_REFRESH_TOKEN = "Invalid or expired refresh token"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _start_session(db: Session, user: User) -> TokenPair:
    """Issue a token pair and persist its refresh token. Caller commits."""
    pair = create_token_pair(user.id, user.email)
    db.add(
        RefreshToken(
            user_id=user.id,
            token=pair.refresh_token,
            expires_at=pair.refresh_expires_at,
        )
    )
    return pair


def register(db: Session, name: str, email: str, password: str) -> tuple[User, TokenPair]:
    """Create an account and open its first session. Raises ConflictError if the email is taken."""
    email = normalize_email(email)
    if db.query(User).filter(User.email == email).first() is not None:
        raise ConflictError("User with this email already exists")

    user = User(name=name, email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.flush()
        pair = _start_session(db, user)
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email.
        db.rollback()
        raise ConflictError("User with this email already exists") from e
    db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id})
    return user, pair


def login(db: Session, email: str, password: str) -> tuple[User, TokenPair]:
    """
    Verify credentials and open a new session.

    Unknown email and wrong password fail identically; the dummy hash keeps the
    response time of the two cases alike.
    """
    user = db.query(User).filter(User.email == normalize_email(email)).first()
    if user is None:
        verify_password(password, DUMMY_PASSWORD_HASH)
        logger.info("Login failed: unknown email")
        raise UnauthorizedError(INVALID_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        logger.info("Login failed: wrong password", extra={"user_id": user.id})
        raise UnauthorizedError(INVALID_CREDENTIALS)

    if password_needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)
        logger.info("Upgraded password hash", extra={"user_id": user.id})

    pair = _start_session(db, user)
    db.commit()
    db.refresh(user)
    return user, pair


def refresh_access_token(db: Session, refresh_token: str) -> str:
    """
    Mint a new access token from a stored, unexpired refresh token.

    The refresh token itself is not rotated.
    """
    result = verify_refresh_token(refresh_token)
    if isinstance(result, TokenErr):
        logger.info("Refresh rejected", extra={"reason": result.reason.value})
        raise UnauthorizedError(INVALID_REFRESH_TOKEN)

    stored = db.query(RefreshToken).filter(RefreshToken.token == refresh_token).first()
    if stored is None or as_utc(stored.expires_at) < utcnow():
        logger.info("Refresh rejected", extra={"reason": "revoked_or_expired"})
        raise UnauthorizedError(INVALID_REFRESH_TOKEN)

    user = db.get(User, stored.user_id)
    if user is None:
        raise UnauthorizedError(INVALID_REFRESH_TOKEN)
    return create_access_token(user.id, user.email)


def logout(db: Session, refresh_token: str) -> bool:
    """Revoke exactly the presented refresh token. Returns False if it was already gone."""
    deleted = (
        db.query(RefreshToken)
        .filter(RefreshToken.token == refresh_token)
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted:
        logger.info("Session revoked")
    return deleted > 0


def resolve_user(db: Session, access_token: str) -> User:
    """Return the user named by a valid access token; raise UnauthorizedError otherwise."""
    result = verify_access_token(access_token)
    if isinstance(result, TokenErr):
        if result.reason is TokenFailure.EXPIRED:
            raise UnauthorizedError("Token expired")
        raise UnauthorizedError("Invalid token")

    user = db.get(User, result.payload.user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user
