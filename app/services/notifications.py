"""Notification side effects and the recipient's read/list operations."""

import logging
import math
from collections.abc import Iterable

from sqlalchemy.orm import Session, joinedload

from app.core.errors import NotFoundError
from app.models import Notification, NotificationType

logger = logging.getLogger(__name__)

MESSAGE_PREVIEW_LEN = 50


def message_preview(content: str) -> str:
    """First 50 characters of a message, with an ellipsis when cut."""
    if len(content) > MESSAGE_PREVIEW_LEN:
        return content[:MESSAGE_PREVIEW_LEN] + "..."
    return content


def notify_many(
    db: Session,
    user_ids: Iterable[int],
    type_: NotificationType,
    message: str,
    project_id: int | None = None,
) -> int:
    """
    Write one notification per recipient in its own commit.

    Called after the triggering action has committed. A failure here is rolled
    back and logged; the triggering action stays committed and the caller is
    not interrupted. Returns the number of rows written.
    """
    rows = [
        Notification(type=type_, message=message, user_id=uid, project_id=project_id)
        for uid in user_ids
    ]
    if not rows:
        return 0
    try:
        db.add_all(rows)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(
            "Failed to write notifications",
            extra={"notification_type": type_.value, "recipients": len(rows)},
        )
        return 0
    return len(rows)


def notify(
    db: Session,
    user_id: int,
    type_: NotificationType,
    message: str,
    project_id: int | None = None,
) -> bool:
    return notify_many(db, [user_id], type_, message, project_id) == 1


def list_notifications(
    db: Session, user_id: int, page: int, limit: int
) -> tuple[list[Notification], int, int]:
    """Return (notifications on the page, total, total_pages), newest first."""
    base = db.query(Notification).filter(Notification.user_id == user_id)
    total = base.count()
    items = (
        base.options(joinedload(Notification.project))
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return items, total, math.ceil(total / limit)


def unread_count(db: Session, user_id: int) -> int:
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
        .count()
    )


def mark_read(db: Session, user_id: int, notification_id: int) -> Notification:
    """Mark one of the user's notifications read. Reading it again is a no-op."""
    notification = (
        db.query(Notification)
        .filter(Notification.id == notification_id, Notification.user_id == user_id)
        .first()
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    if not notification.is_read:
        notification.is_read = True
        db.commit()
    return notification


def mark_all_read(db: Session, user_id: int) -> int:
    updated = (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    db.commit()
    return updated
