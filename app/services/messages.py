"""Project messages: post with fan-out notification, and list."""

from sqlalchemy.orm import Session, joinedload

from app.models import Membership, Message, NotificationType
from app.services.authorization import ProjectAction, require
from app.services.notifications import message_preview, notify_many


def post_message(db: Session, user_id: int, project_id: int, content: str) -> Message:
    """
    Store a message and notify every other member of the project.

    Exactly one MESSAGE_POSTED notification is written per other member.
    """
    require(db, user_id, project_id, ProjectAction.CONTRIBUTE)
    message = Message(content=content, project_id=project_id, author_id=user_id)
    db.add(message)
    db.commit()
    message_id = message.id

    recipients = [
        uid
        for (uid,) in db.query(Membership.user_id)
        .filter(Membership.project_id == project_id, Membership.user_id != user_id)
        .all()
    ]
    notify_many(
        db,
        recipients,
        NotificationType.MESSAGE_POSTED,
        f'New message in project: "{message_preview(content)}"',
        project_id,
    )
    return (
        db.query(Message)
        .options(joinedload(Message.author))
        .filter(Message.id == message_id)
        .one()
    )


def list_messages(db: Session, user_id: int, project_id: int) -> list[Message]:
    """Messages of a project, oldest first."""
    require(db, user_id, project_id, ProjectAction.VIEW)
    return (
        db.query(Message)
        .options(joinedload(Message.author))
        .filter(Message.project_id == project_id)
        .order_by(Message.created_at.asc(), Message.id.asc())
        .all()
    )
