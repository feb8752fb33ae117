"""ORM model for user notifications produced by task, message and membership events."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.models.enums import NotificationType


class Notification(Base):
    """
    Notification addressed to one user. Only is_read changes after creation.

    project_id is cleared (not cascaded) when the project is deleted so the
    recipient keeps the history.
    """

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(
        Enum(NotificationType, native_enum=False, length=32, name="notification_type"),
        nullable=False,
    )
    message = Column(String(512), nullable=False)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    project_id = Column(
        Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    user = relationship("User", back_populates="notifications")
    project = relationship("Project")
