"""Response schemas for notifications."""

from datetime import datetime

from app.models.enums import NotificationType
from app.schemas.common import CamelModel, Pagination
from app.schemas.project import ProjectSummary


class NotificationOut(CamelModel):
    id: int
    type: NotificationType
    message: str
    user_id: int
    project_id: int | None = None
    is_read: bool
    created_at: datetime
    project: ProjectSummary | None = None


class NotificationPage(CamelModel):
    data: list[NotificationOut]
    pagination: Pagination


class UnreadCount(CamelModel):
    count: int
