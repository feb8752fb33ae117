"""Auth endpoints (register, login, refresh, logout, me) and the get_current_user dependency."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import UnauthorizedError
from app.models import User
from app.schemas.auth import (
    AccessTokenData,
    AuthData,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
)
from app.schemas.common import ApiResponse
from app.schemas.user import UserOut
from app.services import auth as auth_service

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Dependency: require a valid Bearer access token and return its user. Raises 401 otherwise."""
    if credentials is None:
        raise UnauthorizedError("Access token required")
    return auth_service.resolve_user(db, credentials.credentials)


CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[Session, Depends(get_db)]


def _auth_data(user: User, access_token: str, refresh_token: str) -> AuthData:
    return AuthData(
        user=UserOut.model_validate(user),
        access_token=access_token,
        refresh_token=refresh_token,
    )


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
)
def register(body: RegisterRequest, db: DbSession) -> ApiResponse[AuthData]:
    """Create an account and return it with a fresh access/refresh token pair."""
    user, pair = auth_service.register(db, body.name, body.email, body.password)
    return ApiResponse(
        message="User registered successfully",
        data=_auth_data(user, pair.access_token, pair.refresh_token),
    )


@router.post("/login", response_model=ApiResponse[AuthData])
def login(body: LoginRequest, db: DbSession) -> ApiResponse[AuthData]:
    """
    Authenticate with email and password; returns the user and a token pair.
    Include the access token in the Authorization header as: Bearer <accessToken>
    """
    user, pair = auth_service.login(db, body.email, body.password)
    return ApiResponse(
        message="Login successful",
        data=_auth_data(user, pair.access_token, pair.refresh_token),
    )


@router.post("/refresh", response_model=ApiResponse[AccessTokenData])
def refresh(body: RefreshTokenRequest, db: DbSession) -> ApiResponse[AccessTokenData]:
    """Exchange a stored, unexpired refresh token for a new access token."""
    access_token = auth_service.refresh_access_token(db, body.refresh_token)
    return ApiResponse(
        message="Token refreshed successfully",
        data=AccessTokenData(access_token=access_token),
    )


@router.post("/logout", response_model=ApiResponse[None])
def logout(body: RefreshTokenRequest, db: DbSession) -> ApiResponse[None]:
    """Revoke the presented refresh token. Succeeds even if it was already revoked."""
    auth_service.logout(db, body.refresh_token)
    return ApiResponse(message="Logged out successfully")


@router.get("/me", response_model=ApiResponse[UserOut])
def me(current_user: CurrentUser) -> ApiResponse[UserOut]:
    """Return the user identified by the Bearer access token."""
    return ApiResponse(
        message="User retrieved successfully",
        data=UserOut.model_validate(current_user),
    )
