"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AccessTokenData,
    AuthData,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
)
from app.schemas.common import ApiResponse, CamelModel, Pagination
from app.schemas.health import HealthResponse
from app.schemas.message import MessageCreate, MessageOut
from app.schemas.notification import NotificationOut, NotificationPage, UnreadCount
from app.schemas.project import (
    InviteMemberRequest,
    MembershipOut,
    ProjectCounts,
    ProjectCreate,
    ProjectOut,
    ProjectOverview,
    ProjectSummary,
    ProjectUpdate,
    WorkloadEntry,
)
from app.schemas.task import TaskCreate, TaskOut, TaskUpdate
from app.schemas.user import UserOut

__all__ = [
    "AccessTokenData",
    "ApiResponse",
    "AuthData",
    "CamelModel",
    "HealthResponse",
    "InviteMemberRequest",
    "LoginRequest",
    "MembershipOut",
    "MessageCreate",
    "MessageOut",
    "NotificationOut",
    "NotificationPage",
    "Pagination",
    "ProjectCounts",
    "ProjectCreate",
    "ProjectOut",
    "ProjectOverview",
    "ProjectSummary",
    "ProjectUpdate",
    "RefreshTokenRequest",
    "RegisterRequest",
    "TaskCreate",
    "TaskOut",
    "TaskUpdate",
    "UnreadCount",
    "UserOut",
    "WorkloadEntry",
]
