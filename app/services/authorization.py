"""Project-scoped authorization: one predicate for every membership/role check."""

import enum

from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, ValidationError
from app.models import Membership, Project, Role

ACCESS_DENIED = "Access denied. You do not have permission to perform this action on this project."


class ProjectAction(str, enum.Enum):
    """Operations gated on a user's stake in a project."""

    VIEW = "view"
    CONTRIBUTE = "contribute"  # create/update/delete tasks, post messages
    UPDATE_PROJECT = "update_project"
    MANAGE_MEMBERS = "manage_members"
    DELETE_PROJECT = "delete_project"


_ADMIN_ACTIONS = frozenset({ProjectAction.UPDATE_PROJECT, ProjectAction.MANAGE_MEMBERS})


def get_membership(db: Session, user_id: int, project_id: int) -> Membership | None:
    return (
        db.query(Membership)
        .filter(Membership.user_id == user_id, Membership.project_id == project_id)
        .first()
    )


def can(db: Session, user_id: int, project: Project, action: ProjectAction) -> bool:
    """
    Return True if user_id may perform action on project.

    Deletion belongs to the creator alone, even over other admins. Admin-only
    actions need role ADMIN; everything else needs any membership.
    """
    if action is ProjectAction.DELETE_PROJECT:
        return project.created_by == user_id
    membership = get_membership(db, user_id, project.id)
    if membership is None:
        return False
    if action in _ADMIN_ACTIONS:
        return membership.role == Role.ADMIN
    return True


def require(db: Session, user_id: int, project_id: int, action: ProjectAction) -> Project:
    """
    Load the project and enforce can(); raise ForbiddenError otherwise.

    A missing project is reported the same way as a forbidden one so callers
    outside the project learn nothing about which ids exist.
    """
    project = db.get(Project, project_id)
    if project is None or not can(db, user_id, project, action):
        raise ForbiddenError(ACCESS_DENIED)
    return project


def ensure_assignable(db: Session, project_id: int, assignee_id: int) -> None:
    """Raise ValidationError unless assignee_id is a member of the project."""
    if get_membership(db, assignee_id, project_id) is None:
        raise ValidationError("Assignee must be a member of the project")
