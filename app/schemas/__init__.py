"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    SessionPayload,
    UserOut,
)
from app.schemas.health import HealthResponse
from app.schemas.permissions import (
    ColumnPermissionItem,
    PermissionsResponse,
    PermissionsUpdateRequest,
)
from app.schemas.products import ProductListResponse, ProductUpdateResponse
from app.schemas.stats import StatsResponse
from app.schemas.tokens import GeneratedTokenResponse, TokenListResponse

__all__ = [
    "ColumnPermissionItem",
    "GeneratedTokenResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "PermissionsResponse",
    "PermissionsUpdateRequest",
    "ProductListResponse",
    "ProductUpdateResponse",
    "RegisterRequest",
    "SessionPayload",
    "StatsResponse",
    "TokenListResponse",
    "UserOut",
]
