"""Self-service password reset: issue a one-hour token by email, redeem it once."""

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.core.security import generate_password_reset_token, hash_password
from app.core.time_utils import as_utc, utcnow
from app.models import User
from app.services.errors import ValidationFailed
from app.services.mailer import send_password_reset_email
from app.services.registration import normalize_email, validate_password

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or expired password reset token"

SendResetEmail = Callable[[str, str, "Settings"], Awaitable[None]]


async def request_password_reset(
    db: Session,
    email: str,
    settings: "Settings",
    send_reset_email: SendResetEmail = send_password_reset_email,
) -> None:
    """
    Store a fresh reset token on the account and email the link.

    Returns normally whether or not the account exists; callers must answer
    the same way in both cases. Mail failures propagate.
    """
    email = normalize_email(email)
    if not email:
        raise ValidationFailed("Email is required")
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        logger.info("Password reset requested for unknown account")
        return
    token = generate_password_reset_token()
    user.password_reset_token = token
    user.password_reset_expires = utcnow() + timedelta(
        minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES
    )
    db.commit()
    await send_reset_email(user.email, token, settings)
    logger.info("Password reset email sent", extra={"user_id": user.id})


def reset_password(
    db: Session,
    token: str,
    new_password: str,
    now: datetime | None = None,
) -> None:
    """
    Set a new password for the account holding token, then clear the token.

    The write is conditional on the token still matching and unexpired, so a
    token can only ever be redeemed once.
    """
    token = (token or "").strip()
    if not token or not new_password:
        raise ValidationFailed("Token and new password are required")
    validate_password(new_password)

    now = now or utcnow()
    user = db.query(User).filter(User.password_reset_token == token).first()
    if user is None:
        raise ValidationFailed(INVALID_TOKEN_MESSAGE)
    expires = as_utc(user.password_reset_expires)
    if expires is None or expires <= now:
        raise ValidationFailed(INVALID_TOKEN_MESSAGE)

    user_id = user.id
    result = db.execute(
        update(User)
        .where(
            User.id == user_id,
            User.password_reset_token == token,
            User.password_reset_expires > now,
        )
        .values(
            password_hash=hash_password(new_password),
            password_reset_token=None,
            password_reset_expires=None,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        raise ValidationFailed(INVALID_TOKEN_MESSAGE)
    db.commit()
    logger.info("Password reset completed", extra={"user_id": user_id})
