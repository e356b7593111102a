"""CRUD for site content (blogs, events, news) with one edit/delete policy for all types."""

import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.authorization import ContentEditPolicy, can_modify_content
from app.core.database import is_storable_id
from app.models import Blog, Event, News, User
from app.schemas.auth import SessionPayload
from app.schemas.content import (
    BlogCreate,
    BlogOut,
    BlogUpdate,
    EventCreate,
    EventOut,
    EventUpdate,
    NewsCreate,
    NewsOut,
    NewsUpdate,
)
from app.services.errors import Forbidden, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

StatusFilter = Literal["published", "draft", "all"]


@dataclass(frozen=True)
class ContentResource:
    """Column layout and schemas of one content table."""

    name: str
    label: str
    model: type
    id_field: str
    slug_field: str
    title_field: str
    content_field: str
    published_field: str
    order_field: str
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    out_schema: type[BaseModel]
    author_field: str | None = None


BLOGS = ContentResource(
    name="blogs",
    label="Blog post",
    model=Blog,
    id_field="blog_id",
    slug_field="blog_slug",
    title_field="blog_title",
    content_field="blog_content",
    published_field="blog_ispub",
    order_field="blog_created",
    create_schema=BlogCreate,
    update_schema=BlogUpdate,
    out_schema=BlogOut,
    author_field="blog_author",
)

EVENTS = ContentResource(
    name="events",
    label="Event",
    model=Event,
    id_field="events_id",
    slug_field="events_slug",
    title_field="events_title",
    content_field="events_content",
    published_field="events_ispub",
    order_field="events_start",
    create_schema=EventCreate,
    update_schema=EventUpdate,
    out_schema=EventOut,
)

NEWS = ContentResource(
    name="news",
    label="News article",
    model=News,
    id_field="news_id",
    slug_field="news_slug",
    title_field="news_title",
    content_field="news_content",
    published_field="news_ispub",
    order_field="news_created",
    create_schema=NewsCreate,
    update_schema=NewsUpdate,
    out_schema=NewsOut,
)

CONTENT_RESOURCES = (BLOGS, EVENTS, NEWS)


def generate_slug(title: str) -> str:
    """Lowercase, drop punctuation, hyphenate spaces, and append a millisecond timestamp."""
    base = re.sub(r"[^\w ]+", "", title.lower())
    base = re.sub(r" +", "-", base.strip())
    return f"{base}-{int(time.time() * 1000)}"


def list_content(
    db: Session,
    resource: ContentResource,
    status: StatusFilter = "published",
) -> list[Any]:
    model = resource.model
    query = db.query(model)
    published = getattr(model, resource.published_field)
    if status == "published":
        query = query.filter(published.is_(True))
    elif status == "draft":
        query = query.filter(published.is_(False))
    order = getattr(model, resource.order_field)
    return query.order_by(order.desc(), getattr(model, resource.id_field).desc()).all()


def get_content(
    db: Session,
    resource: ContentResource,
    id_or_slug: str,
    include_unpublished: bool = False,
) -> Any:
    """Fetch by numeric id or by slug. Unpublished records are hidden unless include_unpublished."""
    model = resource.model
    if id_or_slug.isascii() and id_or_slug.isdigit():
        record_id = int(id_or_slug)
        if not is_storable_id(record_id):
            raise NotFound(f"{resource.label} not found")
        row = db.query(model).filter(getattr(model, resource.id_field) == record_id).first()
    else:
        row = db.query(model).filter(getattr(model, resource.slug_field) == id_or_slug).first()
    if row is None or (not include_unpublished and not getattr(row, resource.published_field)):
        raise NotFound(f"{resource.label} not found")
    return row


def create_content(
    db: Session,
    resource: ContentResource,
    data: BaseModel,
    session: SessionPayload,
) -> Any:
    values = data.model_dump()
    title = (values.get(resource.title_field) or "").strip()
    if not title or not values.get(resource.content_field):
        raise ValidationFailed("Title and content are required")
    if not values.get(resource.slug_field):
        values[resource.slug_field] = generate_slug(title)
    if resource.author_field and not values.get(resource.author_field):
        user = db.get(User, session.user_id)
        values[resource.author_field] = user.name if user is not None else "Admin"

    row = resource.model(**values, created_by=session.user_id)
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationFailed("Slug already in use") from e
    except Exception:
        db.rollback()
        raise
    db.refresh(row)
    logger.info(
        "Content created",
        extra={
            "resource": resource.name,
            "record_id": getattr(row, resource.id_field),
            "user_id": session.user_id,
        },
    )
    return row


def _load_for_write(db: Session, resource: ContentResource, record_id: int) -> Any:
    if not is_storable_id(record_id):
        raise NotFound(f"{resource.label} not found")
    row = db.query(resource.model).filter(
        getattr(resource.model, resource.id_field) == record_id
    ).first()
    if row is None:
        raise NotFound(f"{resource.label} not found")
    return row


def _check_policy(policy: ContentEditPolicy, session: SessionPayload, row: Any) -> None:
    if not can_modify_content(policy, session.role, session.user_id, row.created_by):
        raise Forbidden("Forbidden")


def update_content(
    db: Session,
    resource: ContentResource,
    record_id: int,
    data: BaseModel,
    session: SessionPayload,
    policy: ContentEditPolicy,
) -> Any:
    """
    Apply the fields the client actually sent.

    NOT NULL columns ignore null/empty values instead of failing the write.
    """
    row = _load_for_write(db, resource, record_id)
    _check_policy(policy, session, row)

    table = resource.model.__table__
    updates: dict[str, Any] = {}
    for field, value in data.model_dump(exclude_unset=True).items():
        if (value is None or value == "") and not table.c[field].nullable:
            continue
        updates[field] = value
    if not updates:
        raise ValidationFailed("No updates provided")

    for field, value in updates.items():
        setattr(row, field, value)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationFailed("Slug already in use") from e
    except Exception:
        db.rollback()
        raise
    db.refresh(row)
    logger.info(
        "Content updated",
        extra={
            "resource": resource.name,
            "record_id": record_id,
            "user_id": session.user_id,
            "fields": sorted(updates),
        },
    )
    return row


def delete_content(
    db: Session,
    resource: ContentResource,
    record_id: int,
    session: SessionPayload,
    policy: ContentEditPolicy,
) -> None:
    row = _load_for_write(db, resource, record_id)
    _check_policy(policy, session, row)
    db.delete(row)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(
        "Content deleted",
        extra={"resource": resource.name, "record_id": record_id, "user_id": session.user_id},
    )
