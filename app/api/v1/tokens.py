"""Registration token endpoints (Superadmin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import require_superadmin
from app.core.config import Settings, get_app_settings
from app.core.database import get_db
from app.schemas.auth import SessionPayload
from app.schemas.tokens import GeneratedTokenResponse, TokenListResponse
from app.services.registration import issue_registration_token, list_registration_tokens

router = APIRouter()


@router.post("/generate", response_model=GeneratedTokenResponse)
def generate_token(
    session: Annotated[SessionPayload, Depends(require_superadmin)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> GeneratedTokenResponse:
    """Issue a single-use registration token valid for 24 hours."""
    row = issue_registration_token(db, session.user_id, settings)
    return GeneratedTokenResponse(
        token=row.token,
        token_id=row.id,
        expires_at=row.expires_at,
        created_by=row.created_by,
    )


@router.get("/list", response_model=TokenListResponse)
def list_tokens(
    _superadmin: Annotated[SessionPayload, Depends(require_superadmin)],
    db: Annotated[Session, Depends(get_db)],
) -> TokenListResponse:
    """All registration tokens, newest first."""
    return TokenListResponse(tokens=list_registration_tokens(db))
