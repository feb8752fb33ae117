"""Project endpoints: CRUD, members, overview, and the project-scoped task/message collections."""

from fastapi import APIRouter, status

from app.api.v1.auth import CurrentUser, DbSession
from app.models import Project
from app.schemas.common import ApiResponse
from app.schemas.message import MessageCreate, MessageOut
from app.schemas.project import (
    InviteMemberRequest,
    MembershipOut,
    ProjectCreate,
    ProjectOut,
    ProjectOverview,
    ProjectUpdate,
)
from app.schemas.task import TaskCreate, TaskOut
from app.services import messages as message_service
from app.services import projects as project_service
from app.services import tasks as task_service

router = APIRouter()


def _project_out(db, project: Project, with_counts: bool = True) -> ProjectOut:
    out = ProjectOut.model_validate(project)
    if with_counts:
        out.counts = project_service.project_counts(db, [project.id])[project.id]
    return out


@router.post("", response_model=ApiResponse[ProjectOut], status_code=status.HTTP_201_CREATED)
def create_project(
    body: ProjectCreate, db: DbSession, current_user: CurrentUser
) -> ApiResponse[ProjectOut]:
    """Create a project; the caller becomes its first ADMIN."""
    project = project_service.create_project(db, current_user.id, body.name, body.description)
    return ApiResponse(
        message="Project created successfully",
        data=_project_out(db, project, with_counts=False),
    )


@router.get("", response_model=ApiResponse[list[ProjectOut]])
def list_projects(db: DbSession, current_user: CurrentUser) -> ApiResponse[list[ProjectOut]]:
    """Projects the caller is a member of, newest first, with task/message counts."""
    projects = project_service.list_projects(db, current_user.id)
    counts = project_service.project_counts(db, [p.id for p in projects])
    data = []
    for project in projects:
        out = ProjectOut.model_validate(project)
        out.counts = counts[project.id]
        data.append(out)
    return ApiResponse(message="Projects retrieved successfully", data=data)


@router.get("/{project_id}", response_model=ApiResponse[ProjectOut])
def get_project(
    project_id: int, db: DbSession, current_user: CurrentUser
) -> ApiResponse[ProjectOut]:
    project = project_service.get_project(db, current_user.id, project_id)
    return ApiResponse(message="Project retrieved successfully", data=_project_out(db, project))


@router.put("/{project_id}", response_model=ApiResponse[ProjectOut])
def update_project(
    project_id: int, body: ProjectUpdate, db: DbSession, current_user: CurrentUser
) -> ApiResponse[ProjectOut]:
    """Rename or re-describe a project (ADMIN only)."""
    project = project_service.update_project(
        db, current_user.id, project_id, body.model_dump(exclude_unset=True)
    )
    return ApiResponse(message="Project updated successfully", data=_project_out(db, project))


@router.delete("/{project_id}", response_model=ApiResponse[None])
def delete_project(
    project_id: int, db: DbSession, current_user: CurrentUser
) -> ApiResponse[None]:
    """Delete a project with its tasks and messages (creator only)."""
    project_service.delete_project(db, current_user.id, project_id)
    return ApiResponse(message="Project deleted successfully")


@router.post("/{project_id}/invite", response_model=ApiResponse[MembershipOut])
def invite_member(
    project_id: int, body: InviteMemberRequest, db: DbSession, current_user: CurrentUser
) -> ApiResponse[MembershipOut]:
    """Add an existing user to the project by email (ADMIN only)."""
    membership = project_service.invite_member(
        db, current_user.id, project_id, body.email, body.role
    )
    return ApiResponse(
        message="Member invited successfully",
        data=MembershipOut.model_validate(membership),
    )


@router.delete("/{project_id}/members/{user_id}", response_model=ApiResponse[None])
def remove_member(
    project_id: int, user_id: int, db: DbSession, current_user: CurrentUser
) -> ApiResponse[None]:
    """Remove a member (ADMIN only). The creator cannot be removed."""
    project_service.remove_member(db, current_user.id, project_id, user_id)
    return ApiResponse(message="Member removed successfully")


@router.get("/{project_id}/overview", response_model=ApiResponse[ProjectOverview])
def project_overview(
    project_id: int, db: DbSession, current_user: CurrentUser
) -> ApiResponse[ProjectOverview]:
    overview = project_service.project_overview(db, current_user.id, project_id)
    return ApiResponse(message="Project overview retrieved successfully", data=overview)


@router.post(
    "/{project_id}/tasks",
    response_model=ApiResponse[TaskOut],
    status_code=status.HTTP_201_CREATED,
)
def create_task(
    project_id: int, body: TaskCreate, db: DbSession, current_user: CurrentUser
) -> ApiResponse[TaskOut]:
    """Create a task. assigneeId, when given, must be a member of the project."""
    task = task_service.create_task(
        db,
        current_user.id,
        project_id,
        title=body.title,
        description=body.description,
        assignee_id=body.assignee_id,
        due_date=body.due_date,
        priority=body.priority,
    )
    return ApiResponse(message="Task created successfully", data=TaskOut.model_validate(task))


@router.get("/{project_id}/tasks", response_model=ApiResponse[list[TaskOut]])
def list_tasks(
    project_id: int, db: DbSession, current_user: CurrentUser
) -> ApiResponse[list[TaskOut]]:
    tasks = task_service.list_tasks(db, current_user.id, project_id)
    return ApiResponse(
        message="Tasks retrieved successfully",
        data=[TaskOut.model_validate(t) for t in tasks],
    )


@router.post(
    "/{project_id}/messages",
    response_model=ApiResponse[MessageOut],
    status_code=status.HTTP_201_CREATED,
)
def post_message(
    project_id: int, body: MessageCreate, db: DbSession, current_user: CurrentUser
) -> ApiResponse[MessageOut]:
    """Post a message; every other member receives a notification."""
    message = message_service.post_message(db, current_user.id, project_id, body.content)
    return ApiResponse(
        message="Message created successfully",
        data=MessageOut.model_validate(message),
    )


@router.get("/{project_id}/messages", response_model=ApiResponse[list[MessageOut]])
def list_messages(
    project_id: int, db: DbSession, current_user: CurrentUser
) -> ApiResponse[list[MessageOut]]:
    messages = message_service.list_messages(db, current_user.id, project_id)
    return ApiResponse(
        message="Messages retrieved successfully",
        data=[MessageOut.model_validate(m) for m in messages],
    )
