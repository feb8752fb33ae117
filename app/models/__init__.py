"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.enums import NotificationType, Priority, Role, TaskStatus
from app.models.message import Message
from app.models.notification import Notification
from app.models.project import Membership, Project
from app.models.refresh_token import RefreshToken
from app.models.task import Task
from app.models.user import User

__all__ = [
    "Base",
    "Membership",
    "Message",
    "Notification",
    "NotificationType",
    "Priority",
    "Project",
    "RefreshToken",
    "Role",
    "Task",
    "TaskStatus",
    "User",
]
