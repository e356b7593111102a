"""Product catalog reads and permission-gated updates against the reflected product table."""

import logging
from typing import Any

from sqlalchemy import MetaData, Table, func, or_, select, update
from sqlalchemy.orm import Session

from app.core.authorization import Role
from app.core.database import is_storable_id
from app.schemas.products import ProductListMetadata, ProductListResponse, ProductUpdateResponse
from app.services.column_permissions import PROTECTED_COLUMNS, filter_writable
from app.services.errors import NotFound, ValidationFailed

logger = logging.getLogger(__name__)

PRIMARY_KEY_COLUMN = "item_id"
CREATED_COLUMN = "item_created"
UPDATED_COLUMN = "item_updated"

ALLOWED_PAGE_SIZES = (10, 50, 100)
DEFAULT_PAGE_SIZE = 10
SEARCH_COLUMNS = ("item_name", "item_drug", "item_brand", "item_manufacturer", "item_sku")
LIST_COLUMNS = (
    "item_id",
    "item_serial",
    "item_name",
    "item_sku",
    "item_slug",
    "item_drug",
    "item_brand",
    "item_manufacturer",
    "item_image",
    "item_status",
    "item_created",
)


def reflect_products_table(products_db: Session, table: str) -> Table:
    """Load the current product table definition from the catalog database."""
    return Table(table, MetaData(), autoload_with=products_db.get_bind())


def _columns_by_lower_name(tbl: Table) -> dict[str, Any]:
    return {c.name.lower(): c for c in tbl.columns}


def list_products(
    products_db: Session,
    table: str,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    search: str = "",
) -> ProductListResponse:
    """One page of products, newest first, optionally filtered by a substring search."""
    tbl = reflect_products_table(products_db, table)
    cols = _columns_by_lower_name(tbl)
    safe_limit = limit if limit in ALLOWED_PAGE_SIZES else DEFAULT_PAGE_SIZE
    page = max(page, 1)
    offset = (page - 1) * safe_limit

    where = None
    search = (search or "").strip()
    if search:
        term = f"%{search}%"
        clauses = [cols[name].ilike(term) for name in SEARCH_COLUMNS if name in cols]
        if clauses:
            where = or_(*clauses)

    count_stmt = select(func.count()).select_from(tbl)
    if where is not None:
        count_stmt = count_stmt.where(where)
    total = products_db.execute(count_stmt).scalar_one()

    selected = [cols[name] for name in LIST_COLUMNS if name in cols] or list(tbl.columns)
    stmt = select(*selected)
    if where is not None:
        stmt = stmt.where(where)
    order_col = cols.get(CREATED_COLUMN) or cols.get(PRIMARY_KEY_COLUMN)
    if order_col is not None:
        stmt = stmt.order_by(order_col.desc())
    stmt = stmt.limit(safe_limit).offset(offset)
    products = [dict(row._mapping) for row in products_db.execute(stmt)]

    return ProductListResponse(
        products=products,
        metadata=ProductListMetadata(
            total=total,
            page=page,
            limit=safe_limit,
            total_pages=-(-total // safe_limit),
        ),
    )


def get_product(products_db: Session, table: str, product_id: int) -> dict[str, Any]:
    if not is_storable_id(product_id):
        raise NotFound("Product not found")
    tbl = reflect_products_table(products_db, table)
    pk = _columns_by_lower_name(tbl)[PRIMARY_KEY_COLUMN]
    row = products_db.execute(select(tbl).where(pk == product_id)).first()
    if row is None:
        raise NotFound("Product not found")
    return dict(row._mapping)


def update_product(
    db: Session,
    products_db: Session,
    table: str,
    product_id: int,
    body: dict[str, Any],
    role: Role,
) -> ProductUpdateResponse:
    """
    Apply a partial product update on behalf of role.

    Only existing, non-protected columns are candidates; for Admin the
    candidates are further reduced by the column permission overrides.
    Stripped and unknown fields are reported back, never written.
    """
    if not is_storable_id(product_id):
        raise NotFound("Product not found")
    tbl = reflect_products_table(products_db, table)
    cols = _columns_by_lower_name(tbl)

    candidates: dict[str, Any] = {}
    ignored: list[str] = []
    for key, value in body.items():
        name = str(key).lower()
        if name in cols and name not in PROTECTED_COLUMNS:
            candidates[name] = value
        else:
            ignored.append(str(key))

    allowed, stripped = filter_writable(db, role, candidates)
    ignored.extend(stripped)
    if not allowed:
        raise ValidationFailed("No fields to update")

    values = {cols[name].name: value for name, value in allowed.items()}
    if UPDATED_COLUMN in cols:
        values[cols[UPDATED_COLUMN].name] = func.current_timestamp()

    pk = cols[PRIMARY_KEY_COLUMN]
    try:
        result = products_db.execute(update(tbl).where(pk == product_id).values(**values))
        if result.rowcount == 0:
            raise NotFound("Product not found")
        products_db.commit()
    except Exception:
        products_db.rollback()
        raise

    logger.info(
        "Product updated",
        extra={
            "product_id": product_id,
            "role": int(role),
            "fields_updated": sorted(allowed),
            "fields_stripped": sorted(stripped),
        },
    )
    return ProductUpdateResponse(updated_fields=sorted(allowed), ignored_fields=ignored)
