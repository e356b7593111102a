"""Product column permission settings."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import require_auth, require_superadmin
from app.core.authorization import Role, parse_role
from app.core.config import Settings, get_app_settings
from app.core.database import get_db, get_products_db
from app.schemas.auth import SessionPayload
from app.schemas.permissions import (
    PermissionsResponse,
    PermissionsUpdateRequest,
    PermissionsUpdateResponse,
)
from app.services.column_permissions import list_governed, set_governed
from app.services.errors import ServiceError

router = APIRouter()


@router.get("", response_model=PermissionsResponse)
def get_permissions(
    _session: Annotated[SessionPayload, Depends(require_auth)],
    db: Annotated[Session, Depends(get_db)],
    products_db: Annotated[Session, Depends(get_products_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    role_id: Annotated[int, Query(alias="roleId")] = int(Role.ADMIN),
) -> PermissionsResponse:
    """
    Resolved editability of every product column for a role.

    Columns come from the live product table; a column without an override is editable.
    """
    role = parse_role(role_id)
    if role is None:
        raise HTTPException(status_code=400, detail="Invalid role")
    return PermissionsResponse(
        permissions=list_governed(db, products_db, role, settings.PRODUCTS_TABLE)
    )


@router.post("", response_model=PermissionsUpdateResponse)
def update_permissions(
    body: PermissionsUpdateRequest,
    _superadmin: Annotated[SessionPayload, Depends(require_superadmin)],
    db: Annotated[Session, Depends(get_db)],
    products_db: Annotated[Session, Depends(get_products_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> PermissionsUpdateResponse:
    """Replace all column overrides for a role and return the stored result."""
    try:
        permissions = set_governed(
            db, products_db, body.role_id, body.permissions, settings.PRODUCTS_TABLE
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return PermissionsUpdateResponse(permissions=permissions)
