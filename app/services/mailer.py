"""Outbound email through an HTTP mail API (Resend-compatible JSON: from, to, subject, html)."""

from __future__ import annotations

import html
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from app.core.config import Settings

RESET_EMAIL_SUBJECT = "Password Reset Request"


class MailNotConfiguredError(Exception):
    """Raised when sending is requested but MAIL_API_URL, MAIL_API_KEY or MAIL_FROM is missing."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MailDeliveryError(Exception):
    """Raised when the mail API is unreachable or rejects the message."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _is_mail_configured(settings: Settings) -> bool:
    if not settings.MAIL_API_URL or not settings.MAIL_API_URL.strip():
        return False
    if settings.MAIL_API_KEY is None or not settings.MAIL_API_KEY.get_secret_value().strip():
        return False
    if not settings.MAIL_FROM or not settings.MAIL_FROM.strip():
        return False
    return True


def _get_api_key(settings: Settings) -> str:
    if settings.MAIL_API_KEY is None:
        raise MailNotConfiguredError("MAIL_API_KEY is not set.")
    return settings.MAIL_API_KEY.get_secret_value()


async def send_email(to: str, subject: str, html_body: str, settings: Settings) -> None:
    """
    Deliver one HTML email and wait for the API to accept it.

    Raises MailNotConfiguredError or MailDeliveryError; returns None on success.
    """
    if not _is_mail_configured(settings):
        raise MailNotConfiguredError(
            "Mail is not configured; set MAIL_API_URL, MAIL_API_KEY, MAIL_FROM."
        )
    headers = {"Authorization": f"Bearer {_get_api_key(settings)}"}
    payload = {
        "from": settings.MAIL_FROM,
        "to": [to],
        "subject": subject,
        "html": html_body,
    }
    timeout = max(1.0, min(60.0, settings.MAIL_REQUEST_TIMEOUT_SEC))
    async with httpx.AsyncClient(headers=headers) as client:
        try:
            resp = await client.post(settings.MAIL_API_URL, json=payload, timeout=timeout)
        except httpx.HTTPError as e:
            raise MailDeliveryError(f"Mail API unreachable: {type(e).__name__}") from e
    if resp.status_code >= 400:
        detail = resp.text[:200] if resp.text else "Unknown error"
        raise MailDeliveryError(
            f"Mail API returned {resp.status_code}: {detail}", resp.status_code
        )


def build_reset_link(token: str, settings: Settings) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/reset-password/{token}"


def render_password_reset_email(reset_link: str, expire_minutes: int) -> str:
    link = html.escape(reset_link, quote=True)
    year = datetime.now(UTC).year
    return f"""\
<div style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2 style="color: #0056b3; text-align: center;">Password Reset Request</h2>
  <p>Hello,</p>
  <p>You recently requested to reset the password for your account. Click the button below to proceed.</p>
  <p style="text-align: center; margin: 30px 0;">
    <a href="{link}" style="background-color: #007bff; color: #ffffff; padding: 12px 25px; border-radius: 5px; text-decoration: none; font-weight: bold;">Reset Your Password</a>
  </p>
  <p>If you did not request a password reset, please ignore this email.</p>
  <p>This password reset link is valid for {expire_minutes} minutes.</p>
  <p style="text-align: center; font-size: 0.8em; color: #888;">&copy; {year}</p>
</div>
"""


async def send_password_reset_email(to: str, token: str, settings: Settings) -> None:
    """Send the reset link for token to the account address."""
    body = render_password_reset_email(
        build_reset_link(token, settings), settings.PASSWORD_RESET_EXPIRE_MINUTES
    )
    await send_email(to, RESET_EMAIL_SUBJECT, body, settings)
