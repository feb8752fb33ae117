"""Request/response schemas for tasks."""

from datetime import datetime
from typing import Annotated

from pydantic import Field, StringConstraints

from app.models.enums import Priority, TaskStatus
from app.schemas.common import CamelModel
from app.schemas.project import ProjectSummary
from app.schemas.user import UserOut


TaskTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class TaskCreate(CamelModel):
    title: TaskTitle
    description: str | None = Field(default=None, max_length=10000)
    assignee_id: int | None = None
    due_date: datetime | None = None
    priority: Priority = Priority.MEDIUM


class TaskUpdate(CamelModel):
    """
    Partial update. Only fields present in the request body are applied;
    an explicit null assigneeId unassigns the task.
    """

    title: TaskTitle | None = None
    description: str | None = Field(default=None, max_length=10000)
    status: TaskStatus | None = None
    assignee_id: int | None = None
    due_date: datetime | None = None
    priority: Priority | None = None


class TaskOut(CamelModel):
    id: int
    title: str
    description: str | None = None
    status: TaskStatus
    priority: Priority
    project_id: int
    assignee_id: int | None = None
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
    assignee: UserOut | None = None
    project: ProjectSummary
