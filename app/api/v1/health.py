"""Health check endpoint with database connectivity checks."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import Settings, get_app_settings
from app.core.database import check_db_connected, get_db, get_products_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    products_db: Annotated[Session, Depends(get_products_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """
    Return service health status and connectivity of both stores.
    Used by load balancers and monitoring.
    """
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        products_database="connected" if check_db_connected(products_db) else "disconnected",
    )
