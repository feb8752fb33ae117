"""Notification endpoints for the current user."""

from typing import Annotated

from fastapi import APIRouter, Query

from app.api.v1.auth import CurrentUser, DbSession
from app.schemas.common import ApiResponse, Pagination
from app.schemas.notification import NotificationOut, NotificationPage, UnreadCount
from app.services import notifications as notification_service

router = APIRouter()

MAX_PAGE_SIZE = 100


@router.get("", response_model=ApiResponse[NotificationPage])
def list_notifications(
    db: DbSession,
    current_user: CurrentUser,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = 10,
) -> ApiResponse[NotificationPage]:
    """The caller's notifications, newest first, paginated."""
    items, total, total_pages = notification_service.list_notifications(
        db, current_user.id, page, limit
    )
    return ApiResponse(
        message="Notifications retrieved successfully",
        data=NotificationPage(
            data=[NotificationOut.model_validate(n) for n in items],
            pagination=Pagination(page=page, limit=limit, total=total, total_pages=total_pages),
        ),
    )


@router.get("/unread-count", response_model=ApiResponse[UnreadCount])
def unread_count(db: DbSession, current_user: CurrentUser) -> ApiResponse[UnreadCount]:
    count = notification_service.unread_count(db, current_user.id)
    return ApiResponse(
        message="Unread count retrieved successfully",
        data=UnreadCount(count=count),
    )


@router.put("/mark-all-read", response_model=ApiResponse[None])
def mark_all_read(db: DbSession, current_user: CurrentUser) -> ApiResponse[None]:
    notification_service.mark_all_read(db, current_user.id)
    return ApiResponse(message="All notifications marked as read")


@router.put("/{notification_id}/read", response_model=ApiResponse[None])
def mark_read(
    notification_id: int, db: DbSession, current_user: CurrentUser
) -> ApiResponse[None]:
    """Mark one notification read. Repeating the call is harmless."""
    notification_service.mark_read(db, current_user.id, notification_id)
    return ApiResponse(message="Notification marked as read")
