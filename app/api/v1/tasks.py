"""Task endpoints addressed by task id (get, update, delete)."""

from fastapi import APIRouter

from app.api.v1.auth import CurrentUser, DbSession
from app.schemas.common import ApiResponse
from app.schemas.task import TaskOut, TaskUpdate
from app.services import tasks as task_service

router = APIRouter()


@router.get("/{task_id}", response_model=ApiResponse[TaskOut])
def get_task(task_id: int, db: DbSession, current_user: CurrentUser) -> ApiResponse[TaskOut]:
    task = task_service.get_task(db, current_user.id, task_id)
    return ApiResponse(message="Task retrieved successfully", data=TaskOut.model_validate(task))


@router.put("/{task_id}", response_model=ApiResponse[TaskOut])
def update_task(
    task_id: int, body: TaskUpdate, db: DbSession, current_user: CurrentUser
) -> ApiResponse[TaskOut]:
    """
    Update the fields present in the body. Completing a task or changing its
    assignee notifies the affected user.
    """
    task = task_service.update_task(
        db, current_user.id, task_id, body.model_dump(exclude_unset=True)
    )
    return ApiResponse(message="Task updated successfully", data=TaskOut.model_validate(task))


@router.delete("/{task_id}", response_model=ApiResponse[None])
def delete_task(task_id: int, db: DbSession, current_user: CurrentUser) -> ApiResponse[None]:
    task_service.delete_task(db, current_user.id, task_id)
    return ApiResponse(message="Task deleted successfully")
