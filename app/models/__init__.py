"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.column_permission import ColumnPermission
from app.models.content import Blog, Event, News
from app.models.registration_token import RegistrationToken
from app.models.user import User

__all__ = ["Base", "Blog", "ColumnPermission", "Event", "News", "RegistrationToken", "User"]
