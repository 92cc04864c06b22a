"""
API request and response models for the portal REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
portal/models.py, which own the internal domain representation. Route handlers
map between the two.

Separation of concerns: auth/ + portal/ models = domain truth; api/ models = API contract.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from auth.models import User

# Semantic version, e.g. "1.4.2"
VERSION_PATTERN = r"^\d+\.\d+\.\d+$"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class RoleEnum(str, Enum):
    admin = "admin"
    user = "user"


class PluginStatusEnum(str, Enum):
    stable = "stable"
    beta = "beta"
    deprecated = "deprecated"
    development = "development"


# ---------------------------------------------------------------------------
# Auth -- request models
#
# Length rules for registration are enforced by AuthService.register so the
# service and the API report them the same way (400 validation_error). The
# max_length caps here only bound request size.
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Request body for POST /api/login."""

    username: str = Field(max_length=255)
    password: str = Field(max_length=255)


class RegisterRequest(BaseModel):
    """Request body for POST /api/register. Self-registered accounts are always role "user"."""

    username: str = Field(max_length=255)
    password: str = Field(max_length=255)
    email: str = Field(max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


class UserCreate(RegisterRequest):
    """Request body for POST /api/users (admin only). Admins may choose the role."""

    role: RoleEnum = RoleEnum.user


# ---------------------------------------------------------------------------
# Auth -- response models
# ---------------------------------------------------------------------------


class UserResponse(BaseModel):
    """Public view of a User. The password hash is never part of the contract."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    email: str
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            first_name=user.first_name,
            last_name=user.last_name,
        )


class MessageResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str


# ---------------------------------------------------------------------------
# Portal -- request models
# ---------------------------------------------------------------------------


class TemplateCreate(BaseModel):
    """Request body for POST /api/templates. created_by and timestamps are set server-side."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=2000)
    category: str = Field(min_length=1, max_length=100)
    content: str = Field(min_length=1, max_length=100_000)
    is_active: bool = True


class PluginCreate(BaseModel):
    """Request body for POST /api/plugins (admin only)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    domain: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=3, max_length=255)
    version: str = Field(pattern=VERSION_PATTERN, max_length=50)
    release_date: datetime
    status: PluginStatusEnum = PluginStatusEnum.beta
    description: str = Field(min_length=10, max_length=2000)
    change_log: str = Field(min_length=10, max_length=10_000)


class PluginStatusUpdate(BaseModel):
    """Request body for PATCH /api/plugins/{plugin_id}/status."""

    status: PluginStatusEnum


# ---------------------------------------------------------------------------
# Portal -- response models
#
# from_attributes lets route handlers hand the domain dataclasses straight to
# model_validate() without a per-field mapping.
# ---------------------------------------------------------------------------


class DeveloperMetricResponse(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    date: datetime
    satisfaction_score: int
    active_users: int
    task_completion_rate: int
    response_time: int


class FeedbackResponse(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    user_id: int
    rating: int
    comment: str
    category: str
    date: datetime


class ActivityLogResponse(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    user_id: int
    action: str
    resource: str
    status: str
    timestamp: datetime
    details: Optional[str] = None


class TemplateResponse(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: str
    description: str
    category: str
    content: str
    created_by: int
    created_at: datetime
    updated_at: datetime
    is_active: bool


class PluginResponse(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    domain: str
    name: str
    version: str
    release_date: datetime
    status: str
    description: str
    change_log: str
    updated_by: int
    updated_at: datetime


# ---------------------------------------------------------------------------
# Errors and health
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str] = Field(default_factory=dict)
