"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CreateAdminRequest,
    Identity,
    LoginRequest,
    LogoutRequest,
    MessageResponse,
    RefreshRequest,
    RefreshResponse,
    TokenResponse,
    UpdateProfileRequest,
    UserPublic,
)
from app.schemas.content import (
    MemberCreate,
    MemberOut,
    MembersListResponse,
    MemberUpdate,
    NewsCreate,
    NewsListResponse,
    NewsOut,
    NewsUpdate,
    PaginationMeta,
)
from app.schemas.health import HealthResponse

__all__ = [
    "CreateAdminRequest",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "LogoutRequest",
    "MemberCreate",
    "MemberOut",
    "MemberUpdate",
    "MembersListResponse",
    "MessageResponse",
    "NewsCreate",
    "NewsListResponse",
    "NewsOut",
    "NewsUpdate",
    "PaginationMeta",
    "RefreshRequest",
    "RefreshResponse",
    "TokenResponse",
    "UpdateProfileRequest",
    "UserPublic",
]
