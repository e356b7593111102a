"""
Per-role edit permissions for product columns.

The governed column set is read from the live product table schema, so new
catalog columns show up without code changes. A column without an explicit
override is editable; only an is_editable=False row locks it. Superadmin is
never restricted.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import delete, inspect, select
from sqlalchemy.orm import Session

from app.core.authorization import Role
from app.models import ColumnPermission
from app.schemas.permissions import ColumnPermissionItem
from app.services.errors import ValidationFailed

logger = logging.getLogger(__name__)

# Identity and audit columns of the product table; never client-writable.
PROTECTED_COLUMNS = frozenset({"item_id", "item_created", "item_updated"})


def product_columns(products_db: Session, table: str) -> list[str]:
    """All column names of the product table, lowercased, in schema order."""
    inspector = inspect(products_db.get_bind())
    return [c["name"].lower() for c in inspector.get_columns(table)]


def governed_columns(products_db: Session, table: str) -> list[str]:
    """Product columns that are subject to per-role edit permissions."""
    return [c for c in product_columns(products_db, table) if c not in PROTECTED_COLUMNS]


def _overrides(db: Session, role: Role) -> dict[str, bool]:
    rows = db.execute(
        select(ColumnPermission.column_name, ColumnPermission.is_editable).where(
            ColumnPermission.role_id == int(role)
        )
    ).all()
    return {name.lower(): bool(editable) for name, editable in rows}


def list_governed(
    db: Session,
    products_db: Session,
    role: Role,
    table: str,
) -> list[ColumnPermissionItem]:
    """Resolved editability of every governed column for role (missing override = editable)."""
    overrides = _overrides(db, role)
    return [
        ColumnPermissionItem(column_name=name, is_editable=overrides.get(name, True))
        for name in governed_columns(products_db, table)
    ]


def set_governed(
    db: Session,
    products_db: Session,
    role: Role,
    permissions: Iterable[ColumnPermissionItem],
    table: str,
) -> list[ColumnPermissionItem]:
    """
    Replace all overrides for role with permissions and return the stored state.

    Delete and insert run in one transaction. The returned list is re-read
    from storage after commit, not echoed from the request.
    """
    known = set(governed_columns(products_db, table))
    desired: dict[str, bool] = {}
    for item in permissions:
        name = item.column_name.strip().lower()
        if name not in known:
            raise ValidationFailed(f"Unknown or protected column: {name}")
        desired[name] = item.is_editable

    try:
        db.execute(delete(ColumnPermission).where(ColumnPermission.role_id == int(role)))
        db.add_all(
            ColumnPermission(role_id=int(role), column_name=name, is_editable=editable)
            for name, editable in desired.items()
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(
        "Column permissions resynced",
        extra={
            "role_id": int(role),
            "override_count": len(desired),
            "locked_count": sum(1 for v in desired.values() if not v),
        },
    )
    return list_governed(db, products_db, role, table)


def locked_columns(db: Session, role: Role) -> set[str]:
    """Columns explicitly marked not editable for role."""
    return {name for name, editable in _overrides(db, role).items() if not editable}


def filter_writable(
    db: Session,
    role: Role,
    fields: Mapping[str, Any],
) -> tuple[dict[str, Any], list[str]]:
    """
    Split a proposed product write into (allowed, stripped) for role.

    Superadmin passes through unchanged; Admin loses every locked column.
    """
    if role is Role.SUPERADMIN:
        return dict(fields), []
    if role is Role.ADMIN:
        locked = locked_columns(db, role)
        allowed = {k: v for k, v in fields.items() if k.lower() not in locked}
        stripped = [k for k in fields if k.lower() in locked]
        return allowed, stripped
    raise ValueError(f"Unsupported role for product writes: {role!r}")
