"""Core app configuration, database handles and security primitives."""

from app.core.config import Settings, get_app_settings, get_settings
from app.core.database import Database, get_db, get_products_db

__all__ = [
    "Database",
    "Settings",
    "get_app_settings",
    "get_db",
    "get_products_db",
    "get_settings",
]
