"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, health, permissions, products, stats, tokens
from app.api.v1.content import build_content_router
from app.services.content import BLOGS, EVENTS, NEWS

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(tokens.router, prefix="/tokens", tags=["tokens"])
router.include_router(permissions.router, prefix="/settings/permissions", tags=["permissions"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(build_content_router(BLOGS), prefix="/blogs", tags=["blogs"])
router.include_router(build_content_router(EVENTS), prefix="/events", tags=["events"])
router.include_router(build_content_router(NEWS), prefix="/news", tags=["news"])
router.include_router(stats.router, prefix="/stats", tags=["stats"])
