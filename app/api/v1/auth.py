"""Session login/logout, registration, password reset, and the auth dependencies."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from app.core.authorization import Role
from app.core.config import Settings, get_app_settings
from app.core.database import get_db
from app.core.security import (
    SESSION_COOKIE_NAME,
    create_session_token,
    decode_session_token,
    verify_password,
)
from app.models import User
from app.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    SessionPayload,
    UserOut,
    UserResponse,
)
from app.services.errors import ServiceError
from app.services.mailer import MailDeliveryError, MailNotConfiguredError
from app.services.password_reset import request_password_reset, reset_password
from app.services.registration import normalize_email, register_user

logger = logging.getLogger(__name__)
router = APIRouter()
session_cookie = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)

FORGOT_PASSWORD_MESSAGE = (
    "If a user with that email exists, a password reset email has been sent."
)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
    )


def optional_session(
    token: Annotated[str | None, Depends(session_cookie)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SessionPayload | None:
    """Dependency: the caller's session, or None when absent or invalid."""
    if not token:
        return None
    return decode_session_token(token, settings)


def require_auth(
    session: Annotated[SessionPayload | None, Depends(optional_session)],
) -> SessionPayload:
    """Dependency: require a valid session cookie. Raises 401 without saying why."""
    if session is None:
        raise _unauthorized()
    return session


def require_role(role: Role) -> Callable[[SessionPayload], SessionPayload]:
    """Build a dependency that requires an exact role. Raises 403 on mismatch."""

    def dependency(
        session: Annotated[SessionPayload, Depends(require_auth)],
    ) -> SessionPayload:
        if session.role is not role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Forbidden: {role.name.title()} access required",
            )
        return session

    return dependency


require_superadmin = require_role(Role.SUPERADMIN)


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_DAYS * 24 * 60 * 60,
        path="/",
        httponly=True,
        secure=settings.APP_ENV == "prod",
        samesite="lax",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.APP_ENV == "prod",
        samesite="lax",
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> LoginResponse:
    """
    Authenticate with email and password and set the session cookie.

    Unknown email and wrong password produce the same 401.
    """
    email = normalize_email(body.email)
    if not email or not body.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required",
        )
    user = db.query(User).filter(User.email == email).first()
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Login failed")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    user_out = UserOut.model_validate(user)
    token = create_session_token(
        SessionPayload(user_id=user.id, email=user.email, role=user_out.role),
        settings,
    )
    set_session_cookie(response, token, settings)
    logger.info("Login succeeded", extra={"user_id": user.id})
    return LoginResponse(user=user_out)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """
    Clear the session cookie.

    The signed token stays valid until it expires; there is no server-side revocation.
    """
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
def me(
    session: Annotated[SessionPayload, Depends(require_auth)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Return the account behind the current session."""
    user = db.get(User, session.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse(user=UserOut.model_validate(user))


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RegisterResponse:
    """Create an Admin account by redeeming a registration token."""
    try:
        user = register_user(db, body.email, body.password, body.name, body.token)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return RegisterResponse(user=UserOut.model_validate(user))


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    body: ForgotPasswordRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """Email a reset link if the account exists. The response never reveals whether it does."""
    try:
        await request_password_reset(db, body.email, settings)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except (MailNotConfiguredError, MailDeliveryError) as e:
        logger.error("Password reset email failed: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred.",
        ) from e
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password_endpoint(
    body: ResetPasswordRequest,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Set a new password using a reset token; the token is consumed."""
    try:
        reset_password(db, body.token, body.new_password)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return MessageResponse(message="Password has been reset successfully.")
