"""Blogs, events and news: public reads, session-gated writes under one edit policy."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import optional_session, require_auth
from app.core.authorization import ContentEditPolicy
from app.core.config import Settings, get_app_settings
from app.core.database import get_db
from app.schemas.auth import MessageResponse, SessionPayload
from app.schemas.content import ContentCreatedResponse
from app.services.content import (
    ContentResource,
    StatusFilter,
    create_content,
    delete_content,
    get_content,
    list_content,
    update_content,
)
from app.services.errors import ServiceError


def _http_error(e: ServiceError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


def build_content_router(resource: ContentResource) -> APIRouter:
    """Create the list/get/create/update/delete routes for one content type."""
    router = APIRouter()
    out_schema = resource.out_schema
    create_schema = resource.create_schema
    update_schema = resource.update_schema

    @router.get("", response_model=list[out_schema])  # type: ignore[valid-type]
    def list_items(
        db: Annotated[Session, Depends(get_db)],
        session: Annotated[SessionPayload | None, Depends(optional_session)],
        status: Annotated[StatusFilter, Query()] = "published",
    ) -> list[Any]:
        """Published items are public; drafts and 'all' require a staff session."""
        if status != "published" and session is None:
            raise HTTPException(status_code=401, detail="Not authenticated")
        return list_content(db, resource, status)

    @router.get("/{id_or_slug}", response_model=out_schema)
    def get_item(
        id_or_slug: str,
        db: Annotated[Session, Depends(get_db)],
        session: Annotated[SessionPayload | None, Depends(optional_session)],
    ) -> Any:
        try:
            return get_content(db, resource, id_or_slug, include_unpublished=session is not None)
        except ServiceError as e:
            raise _http_error(e) from e

    @router.post("", response_model=ContentCreatedResponse, status_code=201)
    def create_item(
        body: Annotated[create_schema, Body()],  # type: ignore[valid-type]
        session: Annotated[SessionPayload, Depends(require_auth)],
        db: Annotated[Session, Depends(get_db)],
    ) -> ContentCreatedResponse:
        try:
            row = create_content(db, resource, body, session)
        except ServiceError as e:
            raise _http_error(e) from e
        return ContentCreatedResponse(
            message=f"{resource.label} created successfully",
            id=getattr(row, resource.id_field),
            slug=getattr(row, resource.slug_field),
        )

    @router.patch("/{record_id}", response_model=out_schema)
    def update_item(
        record_id: int,
        body: Annotated[update_schema, Body()],  # type: ignore[valid-type]
        session: Annotated[SessionPayload, Depends(require_auth)],
        db: Annotated[Session, Depends(get_db)],
        settings: Annotated[Settings, Depends(get_app_settings)],
    ) -> Any:
        policy = ContentEditPolicy(settings.CONTENT_EDIT_POLICY)
        try:
            return update_content(db, resource, record_id, body, session, policy)
        except ServiceError as e:
            raise _http_error(e) from e

    @router.delete("/{record_id}", response_model=MessageResponse)
    def delete_item(
        record_id: int,
        session: Annotated[SessionPayload, Depends(require_auth)],
        db: Annotated[Session, Depends(get_db)],
        settings: Annotated[Settings, Depends(get_app_settings)],
    ) -> MessageResponse:
        policy = ContentEditPolicy(settings.CONTENT_EDIT_POLICY)
        try:
            delete_content(db, resource, record_id, session, policy)
        except ServiceError as e:
            raise _http_error(e) from e
        return MessageResponse(message=f"{resource.label} deleted successfully")

    return router
