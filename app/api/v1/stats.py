"""Dashboard record counts."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.config import Settings, get_app_settings
from app.core.database import get_db, get_products_db
from app.models import Blog, Event, News
from app.schemas.stats import StatsResponse
from app.services.products import reflect_products_table

router = APIRouter()


@router.get("", response_model=StatsResponse)
def get_stats(
    db: Annotated[Session, Depends(get_db)],
    products_db: Annotated[Session, Depends(get_products_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> StatsResponse:
    """Counts of products, blog posts, events and news articles (all statuses)."""
    products = reflect_products_table(products_db, settings.PRODUCTS_TABLE)
    return StatsResponse(
        products=products_db.execute(select(func.count()).select_from(products)).scalar_one(),
        blogs=db.execute(select(func.count()).select_from(Blog)).scalar_one(),
        events=db.execute(select(func.count()).select_from(Event)).scalar_one(),
        news=db.execute(select(func.count()).select_from(News)).scalar_one(),
    )
