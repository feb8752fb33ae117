"""Project operations: CRUD, membership management and overview analytics."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from app.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.models import (
    Membership,
    Message,
    NotificationType,
    Project,
    Role,
    Task,
    TaskStatus,
    User,
)
from app.models.base import as_utc, utcnow
from app.schemas.project import ProjectCounts, ProjectOverview, WorkloadEntry
from app.services.authorization import ProjectAction, can, require
from app.services.notifications import notify

logger = logging.getLogger(__name__)

CREATOR_ONLY_DELETE = "Access denied. Only the project creator can delete the project."


def _with_members(query):
    return query.options(selectinload(Project.memberships).joinedload(Membership.user))


def create_project(db: Session, user_id: int, name: str, description: str | None) -> Project:
    """Create a project with its creator as the first ADMIN member."""
    project = Project(name=name, description=description, created_by=user_id)
    project.memberships.append(Membership(user_id=user_id, role=Role.ADMIN))
    db.add(project)
    db.commit()
    logger.info("Project created", extra={"project_id": project.id, "user_id": user_id})
    return get_project(db, user_id, project.id)


def list_projects(db: Session, user_id: int) -> list[Project]:
    """Projects the user belongs to, newest first."""
    return (
        _with_members(db.query(Project))
        .join(Membership, Membership.project_id == Project.id)
        .filter(Membership.user_id == user_id)
        .order_by(Project.created_at.desc(), Project.id.desc())
        .all()
    )


def project_counts(db: Session, project_ids: list[int]) -> dict[int, ProjectCounts]:
    """Task and message counts per project id."""
    if not project_ids:
        return {}
    task_counts = dict(
        db.query(Task.project_id, func.count(Task.id))
        .filter(Task.project_id.in_(project_ids))
        .group_by(Task.project_id)
        .all()
    )
    message_counts = dict(
        db.query(Message.project_id, func.count(Message.id))
        .filter(Message.project_id.in_(project_ids))
        .group_by(Message.project_id)
        .all()
    )
    return {
        pid: ProjectCounts(tasks=task_counts.get(pid, 0), messages=message_counts.get(pid, 0))
        for pid in project_ids
    }


def get_project(db: Session, user_id: int, project_id: int) -> Project:
    require(db, user_id, project_id, ProjectAction.VIEW)
    return _with_members(db.query(Project)).filter(Project.id == project_id).one()


def update_project(
    db: Session, user_id: int, project_id: int, changes: dict
) -> Project:
    """Apply name/description changes. ADMIN only."""
    project = require(db, user_id, project_id, ProjectAction.UPDATE_PROJECT)
    if "name" in changes and changes["name"] is not None:
        project.name = changes["name"]
    if "description" in changes:
        project.description = changes["description"]
    db.commit()
    return get_project(db, user_id, project_id)


def delete_project(db: Session, user_id: int, project_id: int) -> None:
    """Delete a project with its memberships, tasks and messages. Creator only."""
    project = db.get(Project, project_id)
    if project is None:
        raise NotFoundError("Project not found")
    if not can(db, user_id, project, ProjectAction.DELETE_PROJECT):
        raise ForbiddenError(CREATOR_ONLY_DELETE)
    db.delete(project)
    db.commit()
    logger.info("Project deleted", extra={"project_id": project_id, "user_id": user_id})


def invite_member(
    db: Session, user_id: int, project_id: int, email: str, role: Role
) -> Membership:
    """Add an existing user to the project and notify them. ADMIN only."""
    project = require(db, user_id, project_id, ProjectAction.MANAGE_MEMBERS)
    invitee = db.query(User).filter(User.email == email.strip().lower()).first()
    if invitee is None:
        raise NotFoundError("User not found")
    existing = (
        db.query(Membership)
        .filter(Membership.user_id == invitee.id, Membership.project_id == project_id)
        .first()
    )
    if existing is not None:
        raise ConflictError("User is already a member of this project")

    membership = Membership(user_id=invitee.id, project_id=project_id, role=role)
    db.add(membership)
    db.commit()

    notify(
        db,
        invitee.id,
        NotificationType.PROJECT_INVITED,
        f'You have been invited to join the project "{project.name}"',
        project_id,
    )
    return membership


def remove_member(db: Session, user_id: int, project_id: int, member_id: int) -> None:
    """Remove a member and notify them. ADMIN only; the creator cannot be removed."""
    project = require(db, user_id, project_id, ProjectAction.MANAGE_MEMBERS)
    if project.created_by == member_id:
        raise ValidationError("Cannot remove the project creator")
    membership = (
        db.query(Membership)
        .filter(Membership.user_id == member_id, Membership.project_id == project_id)
        .first()
    )
    if membership is None:
        raise NotFoundError("Member not found")
    db.delete(membership)
    # Tasks may only be assigned to members.
    db.query(Task).filter(
        Task.project_id == project_id, Task.assignee_id == member_id
    ).update({Task.assignee_id: None}, synchronize_session=False)
    db.commit()

    notify(
        db,
        member_id,
        NotificationType.PROJECT_MEMBER_REMOVED,
        f'You have been removed from the project "{project.name}"',
        project_id,
    )


def project_overview(db: Session, user_id: int, project_id: int) -> ProjectOverview:
    """Completion, overdue and per-assignee workload figures for one project."""
    require(db, user_id, project_id, ProjectAction.VIEW)
    tasks = (
        db.query(Task)
        .options(joinedload(Task.assignee))
        .filter(Task.project_id == project_id)
        .order_by(Task.id)
        .all()
    )
    now = utcnow()
    total = len(tasks)
    completed = sum(1 for t in tasks if t.status == TaskStatus.DONE)
    overdue = sum(
        1
        for t in tasks
        if t.due_date is not None and t.status != TaskStatus.DONE and as_utc(t.due_date) < now
    )

    workload: dict[int, WorkloadEntry] = {}
    for t in tasks:
        if t.assignee is None:
            continue
        entry = workload.get(t.assignee.id)
        if entry is None:
            workload[t.assignee.id] = WorkloadEntry(
                user_id=t.assignee.id, user_name=t.assignee.name, task_count=1
            )
        else:
            entry.task_count += 1

    return ProjectOverview(
        total_tasks=total,
        completed_tasks=completed,
        overdue_tasks=overdue,
        completion_percentage=int(completed * 100 / total + 0.5) if total else 0,
        workload_distribution=list(workload.values()),
    )
