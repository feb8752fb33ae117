"""Core app configuration, database session, and the error taxonomy."""

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.core.errors import (
    AppError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    "AppError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "get_db",
    "get_settings",
    "settings",
]
