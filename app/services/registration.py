"""Registration tokens: Superadmin issuance, listing, and single-use redemption at sign-up."""

import logging
import re
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.authorization import Role
from app.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    REGISTRATION_TOKEN_LENGTH,
    generate_registration_token,
    hash_password,
)
from app.core.time_utils import as_utc, utcnow
from app.models import RegistrationToken, User
from app.schemas.tokens import TokenListItem
from app.services.errors import ValidationFailed

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Collisions in a 36^10 space are rare; retry a few times on the unique index.
ISSUE_MAX_ATTEMPTS = 3


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def validate_password(password: str) -> None:
    if len(password) < PASSWORD_MIN_LEN:
        raise ValidationFailed(f"Password must be at least {PASSWORD_MIN_LEN} characters")
    if len(password) > PASSWORD_MAX_LEN:
        raise ValidationFailed(f"Password must be at most {PASSWORD_MAX_LEN} characters")


def issue_registration_token(
    db: Session,
    creator_id: int,
    settings: "Settings",
    now: datetime | None = None,
) -> RegistrationToken:
    """Create and persist a new registration token valid for REGISTRATION_TOKEN_EXPIRE_HOURS."""
    now = now or utcnow()
    expires_at = now + timedelta(hours=settings.REGISTRATION_TOKEN_EXPIRE_HOURS)
    attempt = 0
    while True:
        attempt += 1
        row = RegistrationToken(
            token=generate_registration_token(),
            created_by=creator_id,
            expires_at=expires_at,
            is_used=False,
        )
        db.add(row)
        try:
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            if attempt >= ISSUE_MAX_ATTEMPTS:
                raise
    db.refresh(row)
    logger.info(
        "Registration token issued",
        extra={"token_id": row.id, "created_by": creator_id},
    )
    return row


def list_registration_tokens(db: Session) -> list[TokenListItem]:
    """All registration tokens, newest first, with creator and redeemer display names."""
    rows = (
        db.query(RegistrationToken)
        .order_by(RegistrationToken.created_at.desc(), RegistrationToken.id.desc())
        .all()
    )
    return [
        TokenListItem(
            id=r.id,
            token=r.token,
            created_by=r.created_by,
            creator_name=r.creator.name if r.creator is not None else None,
            expires_at=r.expires_at,
            is_used=r.is_used,
            used_by=r.used_by,
            user_name=r.redeemer.name if r.redeemer is not None else None,
            used_at=r.used_at,
            created_at=r.created_at,
        )
        for r in rows
    ]


def register_user(
    db: Session,
    email: str,
    password: str,
    name: str,
    token: str,
    now: datetime | None = None,
) -> User:
    """
    Create an Admin account by redeeming a registration token.

    All input checks run before any query. The token is claimed with a
    conditional UPDATE (not used, not expired) inside the same transaction
    that inserts the user, so concurrent redemptions of one token yield
    exactly one account; a failed insert rolls the claim back.
    """
    email = normalize_email(email)
    name = (name or "").strip()
    token = (token or "").strip()
    if not email or not password or not name or not token:
        raise ValidationFailed("All fields are required")
    if len(email) > EMAIL_MAX_LEN or not EMAIL_RE.match(email):
        raise ValidationFailed("Invalid email format")
    if len(name) > NAME_MAX_LEN:
        raise ValidationFailed("Name is too long")
    validate_password(password)
    if len(token) != REGISTRATION_TOKEN_LENGTH:
        raise ValidationFailed("Invalid token format")

    now = now or utcnow()
    row = db.query(RegistrationToken).filter(RegistrationToken.token == token).first()
    if row is None:
        raise ValidationFailed("Invalid registration token")
    if row.is_used:
        raise ValidationFailed("Registration token has already been used")
    if as_utc(row.expires_at) <= now:
        raise ValidationFailed("Registration token has expired")
    if db.query(User.id).filter(func.lower(User.email) == email).first() is not None:
        raise ValidationFailed("Email already registered")

    password_hash = hash_password(password)
    token_id = row.id
    try:
        claim = db.execute(
            update(RegistrationToken)
            .where(
                RegistrationToken.id == token_id,
                RegistrationToken.is_used.is_(False),
                RegistrationToken.expires_at > now,
            )
            .values(is_used=True, used_at=now)
            .execution_options(synchronize_session=False)
        )
        if claim.rowcount != 1:
            raise ValidationFailed("Registration token has already been used")
        user = User(
            email=email,
            password_hash=password_hash,
            name=name,
            role=int(Role.ADMIN),
        )
        db.add(user)
        db.flush()
        db.execute(
            update(RegistrationToken)
            .where(RegistrationToken.id == token_id)
            .values(used_by=user.id)
            .execution_options(synchronize_session=False)
        )
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationFailed("Email already registered") from e
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    logger.info(
        "Registration token redeemed",
        extra={"token_id": token_id, "user_id": user.id},
    )
    return user
