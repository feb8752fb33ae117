"""Request/response schemas for auth endpoints."""

from typing import Annotated

from pydantic import EmailStr, Field, StringConstraints

from app.core.security import NAME_MAX_LEN, NAME_MIN_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.schemas.common import CamelModel
from app.schemas.user import UserOut


class RegisterRequest(CamelModel):
    """New account details."""

    name: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    ]
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class RefreshTokenRequest(CamelModel):
    """Body for /auth/refresh and /auth/logout."""

    refresh_token: str = Field(..., min_length=1, description="Refresh token from login")


class AuthData(CamelModel):
    """Returned by register and login."""

    user: UserOut
    access_token: str
    refresh_token: str


class AccessTokenData(CamelModel):
    access_token: str
