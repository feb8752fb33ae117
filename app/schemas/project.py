"""Request/response schemas for projects, memberships and project analytics."""

from datetime import datetime
from typing import Annotated

from pydantic import EmailStr, Field, StringConstraints

from app.models.enums import Role
from app.schemas.common import CamelModel
from app.schemas.user import UserOut


# Surrounding whitespace is dropped before the length check, so "   " is rejected.
ProjectName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class ProjectCreate(CamelModel):
    name: ProjectName
    description: str | None = Field(default=None, max_length=5000)


class ProjectUpdate(CamelModel):
    """Partial update; omitted fields are left unchanged."""

    name: ProjectName | None = None
    description: str | None = Field(default=None, max_length=5000)


class InviteMemberRequest(CamelModel):
    email: EmailStr
    role: Role = Role.MEMBER


class MembershipOut(CamelModel):
    id: int
    user_id: int
    project_id: int
    role: Role
    user: UserOut


class ProjectCounts(CamelModel):
    tasks: int
    messages: int


class ProjectOut(CamelModel):
    id: int
    name: str
    description: str | None = None
    created_by: int
    created_at: datetime
    updated_at: datetime
    memberships: list[MembershipOut] = Field(default_factory=list)
    counts: ProjectCounts | None = None


class ProjectSummary(CamelModel):
    id: int
    name: str
    description: str | None = None


class WorkloadEntry(CamelModel):
    user_id: int
    user_name: str
    task_count: int


class ProjectOverview(CamelModel):
    total_tasks: int
    completed_tasks: int
    overdue_tasks: int
    completion_percentage: int
    workload_distribution: list[WorkloadEntry]
