"""Public user representation (never includes the password hash)."""

from datetime import datetime

from app.schemas.common import CamelModel


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
