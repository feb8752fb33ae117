"""Request/response schemas for project messages."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.user import UserOut

MESSAGE_MAX_LEN = 5000


class MessageCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LEN)


class MessageOut(CamelModel):
    id: int
    content: str
    project_id: int
    author_id: int
    created_at: datetime
    author: UserOut
