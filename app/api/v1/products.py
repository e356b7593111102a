"""Product catalog endpoints; writes are filtered by column permissions."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import require_auth
from app.core.config import Settings, get_app_settings
from app.core.database import get_db, get_products_db
from app.schemas.auth import SessionPayload
from app.schemas.products import ProductListResponse, ProductResponse, ProductUpdateResponse
from app.services.errors import ServiceError
from app.services.products import DEFAULT_PAGE_SIZE, get_product, list_products, update_product

router = APIRouter()


@router.get("", response_model=ProductListResponse)
def get_products(
    _session: Annotated[SessionPayload, Depends(require_auth)],
    products_db: Annotated[Session, Depends(get_products_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    search: Annotated[str, Query(max_length=255)] = "",
) -> ProductListResponse:
    """Paginated product list; limit must be 10, 50 or 100 (otherwise 10)."""
    return list_products(products_db, settings.PRODUCTS_TABLE, page, limit, search)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product_by_id(
    product_id: int,
    _session: Annotated[SessionPayload, Depends(require_auth)],
    products_db: Annotated[Session, Depends(get_products_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ProductResponse:
    try:
        product = get_product(products_db, settings.PRODUCTS_TABLE, product_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return ProductResponse(product=product)


@router.patch("/{product_id}", response_model=ProductUpdateResponse)
def patch_product(
    product_id: int,
    body: Annotated[dict[str, Any], Body()],
    session: Annotated[SessionPayload, Depends(require_auth)],
    db: Annotated[Session, Depends(get_db)],
    products_db: Annotated[Session, Depends(get_products_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ProductUpdateResponse:
    """
    Update product fields.

    Admin writes to locked columns are dropped server-side and listed in
    ignored_fields; Superadmin writes are never filtered.
    """
    try:
        return update_product(
            db, products_db, settings.PRODUCTS_TABLE, product_id, body, session.role
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
