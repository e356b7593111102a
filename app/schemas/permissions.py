"""Schemas for product column permission settings."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.authorization import Role


class ColumnPermissionItem(BaseModel):
    """Resolved editability of one product column for a role."""

    column_name: str = Field(..., min_length=1, max_length=255)
    is_editable: bool


class PermissionsResponse(BaseModel):
    permissions: list[ColumnPermissionItem]


class PermissionsUpdateRequest(BaseModel):
    """Whole-role replacement of column overrides."""

    model_config = ConfigDict(populate_by_name=True)

    role_id: Role = Field(..., alias="roleId")
    permissions: list[ColumnPermissionItem]


class PermissionsUpdateResponse(BaseModel):
    message: str = "Permissions updated successfully"
    permissions: list[ColumnPermissionItem]
