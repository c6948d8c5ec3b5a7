"""Outbound email for registration confirmations and reviewer invitations (best-effort)."""

from __future__ import annotations

import logging
import smtplib
from collections.abc import Callable
from email.message import EmailMessage
from html import escape
from typing import TYPE_CHECKING, Any

from conference.core.config import get_settings

if TYPE_CHECKING:
    from conference.core.config import Settings

logger = logging.getLogger(__name__)

REGISTRATION_LABELS = {
    "onsite-paper": "On-site attendance with paper",
    "online-paper": "Online attendance with paper",
    "attendance": "Attendance only",
}


class EmailDeliveryError(Exception):
    """Raised when the SMTP server rejects or cannot receive a message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def build_message(to: str, subject: str, text: str, html: str, settings: Settings) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = settings.EMAIL_FROM
    msg["To"] = to
    msg["Subject"] = subject
    msg.set_content(text)
    msg.add_alternative(html, subtype="html")
    return msg


def send_email(msg: EmailMessage, settings: Settings | None = None) -> None:
    """Send one message over SMTP. When EMAIL_ENABLED is false, only log it."""
    settings = settings or get_settings()
    if not settings.EMAIL_ENABLED:
        logger.info("Email disabled; not sending %r to %s", msg["Subject"], msg["To"])
        return
    try:
        if settings.EMAIL_PORT == 465:
            server: smtplib.SMTP = smtplib.SMTP_SSL(
                settings.EMAIL_HOST, settings.EMAIL_PORT, timeout=settings.EMAIL_TIMEOUT_SEC
            )
        else:
            server = smtplib.SMTP(
                settings.EMAIL_HOST, settings.EMAIL_PORT, timeout=settings.EMAIL_TIMEOUT_SEC
            )
        with server as conn:
            if settings.EMAIL_PORT != 465:
                conn.starttls()
            if settings.EMAIL_USER and settings.EMAIL_PASSWORD is not None:
                conn.login(settings.EMAIL_USER, settings.EMAIL_PASSWORD.get_secret_value())
            conn.send_message(msg)
    except (smtplib.SMTPException, OSError) as exc:
        raise EmailDeliveryError(f"Email to {msg['To']} failed: {exc}") from exc
    logger.info("Email sent to %s", msg["To"])


def send_registration_confirmation(
    email: str,
    name: str,
    registration_type: str,
    settings: Settings | None = None,
) -> None:
    settings = settings or get_settings()
    label = REGISTRATION_LABELS.get(registration_type, registration_type)
    subject = f"Registration Confirmation - {settings.CONFERENCE_NAME}"
    text = (
        f"Dear {name},\n\n"
        "Your registration has been received successfully.\n"
        f"Registration type: {label}\n\n"
        "We will contact you with payment details and the conference schedule soon.\n\n"
        f"Best regards,\n{settings.CONFERENCE_NAME} Conference Team\n"
    )
    html = (
        f"<h2>Welcome to {escape(settings.CONFERENCE_NAME)}!</h2>"
        f"<p>Dear {escape(name)},</p>"
        "<p>Your registration has been received successfully.</p>"
        f"<p><strong>Registration type:</strong> {escape(label)}</p>"
        "<p>We will contact you with payment details and the conference schedule soon.</p>"
        f"<p>Best regards,<br>{escape(settings.CONFERENCE_NAME)} Conference Team</p>"
    )
    send_email(build_message(email, subject, text, html, settings), settings)


def send_reviewer_invitation(email: str, name: str, settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    subject = f"Invitation - Reviewer at {settings.CONFERENCE_NAME}"
    text = (
        f"Dear Dr. {name},\n\n"
        f"We are honored to invite you to serve as a reviewer for {settings.CONFERENCE_NAME}.\n"
        "Please confirm your participation by logging into your account.\n\n"
        f"Best regards,\n{settings.CONFERENCE_NAME} Conference Team\n"
    )
    html = (
        f"<h2>Invitation to Review at {escape(settings.CONFERENCE_NAME)}</h2>"
        f"<p>Dear Dr. {escape(name)},</p>"
        f"<p>We are honored to invite you to serve as a reviewer for {escape(settings.CONFERENCE_NAME)}.</p>"
        "<p>Please confirm your participation by logging into your account.</p>"
        f"<p>Best regards,<br>{escape(settings.CONFERENCE_NAME)} Conference Team</p>"
    )
    send_email(build_message(email, subject, text, html, settings), settings)


def deliver_safely(sender: Callable[..., None], *args: Any, **kwargs: Any) -> bool:
    """
    Run a sender and swallow its failure after logging it.

    Used as a background task so email never fails or rolls back the state change that triggered it.
    """
    try:
        sender(*args, **kwargs)
        return True
    except Exception:
        logger.exception("Notification %s failed", getattr(sender, "__name__", sender))
        return False
