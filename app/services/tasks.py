"""Task operations within a project, with assignment and completion notifications."""

import logging
from datetime import datetime

from sqlalchemy import case
from sqlalchemy.orm import Session, joinedload

from app.core.errors import NotFoundError
from app.models import NotificationType, Priority, Task, TaskStatus
from app.models.base import as_utc
from app.models.enums import PRIORITY_RANK
from app.services.authorization import ProjectAction, ensure_assignable, require
from app.services.notifications import notify

logger = logging.getLogger(__name__)

_priority_order = case(
    *[(Task.priority == p, rank) for p, rank in PRIORITY_RANK.items()],
    else_=0,
)


def _load(db: Session, task_id: int) -> Task | None:
    return (
        db.query(Task)
        .options(joinedload(Task.assignee), joinedload(Task.project))
        .filter(Task.id == task_id)
        .first()
    )


def _assigned_message(title: str) -> str:
    return f'You have been assigned a new task: "{title}"'


def create_task(
    db: Session,
    user_id: int,
    project_id: int,
    title: str,
    description: str | None = None,
    assignee_id: int | None = None,
    due_date: datetime | None = None,
    priority: Priority = Priority.MEDIUM,
) -> Task:
    """Create a task; the assignee, if any, must already be a project member."""
    require(db, user_id, project_id, ProjectAction.CONTRIBUTE)
    if assignee_id is not None:
        ensure_assignable(db, project_id, assignee_id)

    task = Task(
        title=title,
        description=description,
        assignee_id=assignee_id,
        due_date=as_utc(due_date) if due_date is not None else None,
        priority=priority,
        status=TaskStatus.TODO,
        project_id=project_id,
    )
    db.add(task)
    db.commit()
    task_id = task.id

    if assignee_id is not None:
        notify(
            db,
            assignee_id,
            NotificationType.TASK_ASSIGNED,
            _assigned_message(task.title),
            project_id,
        )
    return _load(db, task_id)


def list_tasks(db: Session, user_id: int, project_id: int) -> list[Task]:
    """Tasks of a project, most urgent first, then newest first."""
    require(db, user_id, project_id, ProjectAction.VIEW)
    return (
        db.query(Task)
        .options(joinedload(Task.assignee), joinedload(Task.project))
        .filter(Task.project_id == project_id)
        .order_by(_priority_order.desc(), Task.created_at.desc(), Task.id.desc())
        .all()
    )


def _get_for(db: Session, user_id: int, task_id: int, action: ProjectAction) -> Task:
    task = _load(db, task_id)
    if task is None:
        raise NotFoundError("Task not found")
    require(db, user_id, task.project_id, action)
    return task


def get_task(db: Session, user_id: int, task_id: int) -> Task:
    return _get_for(db, user_id, task_id, ProjectAction.VIEW)


def update_task(db: Session, user_id: int, task_id: int, changes: dict) -> Task:
    """
    Apply the supplied fields to a task.

    Keys absent from changes are left alone; assignee_id=None unassigns.
    Moving into DONE notifies the assignee (or the actor when unassigned);
    a new assignee is notified of the assignment.
    """
    task = _get_for(db, user_id, task_id, ProjectAction.CONTRIBUTE)
    previous_status = task.status
    previous_assignee = task.assignee_id

    new_assignee = changes.get("assignee_id", previous_assignee)
    assignee_changed = "assignee_id" in changes and new_assignee != previous_assignee
    if assignee_changed and new_assignee is not None:
        ensure_assignable(db, task.project_id, new_assignee)

    for field in ("title", "description", "status", "due_date", "priority"):
        if field not in changes:
            continue
        value = changes[field]
        # title, status and priority are non-nullable; a null means "leave as is"
        if value is None and field in ("title", "status", "priority"):
            continue
        if field == "due_date" and value is not None:
            value = as_utc(value)
        setattr(task, field, value)
    if assignee_changed:
        task.assignee_id = new_assignee
    db.commit()

    project_id = task.project_id
    title = task.title
    if task.status == TaskStatus.DONE and previous_status != TaskStatus.DONE:
        notify(
            db,
            task.assignee_id or user_id,
            NotificationType.TASK_COMPLETED,
            f'Task "{title}" has been completed',
            project_id,
        )
    if assignee_changed and new_assignee is not None:
        notify(
            db,
            new_assignee,
            NotificationType.TASK_ASSIGNED,
            _assigned_message(title),
            project_id,
        )

    db.expire_all()
    return _load(db, task_id)


def delete_task(db: Session, user_id: int, task_id: int) -> None:
    task = _get_for(db, user_id, task_id, ProjectAction.CONTRIBUTE)
    db.delete(task)
    db.commit()
    logger.info("Task deleted", extra={"task_id": task_id, "user_id": user_id})
