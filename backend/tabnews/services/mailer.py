"""Outbound email over SMTP."""
from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from ..config import settings
from ..domain_errors import EmailDeliveryError

logger = logging.getLogger(__name__)


def build_message(*, from_name: str, from_address: str, to: str, subject: str, text: str) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = formataddr((from_name, from_address))
    msg["To"] = to
    msg.set_content(text)
    return msg


def send_email(*, from_name: str, from_address: str, to: str, subject: str, text: str) -> None:
    """Send a plaintext email; raises EmailDeliveryError on any SMTP failure."""
    msg = build_message(from_name=from_name, from_address=from_address, to=to, subject=subject, text=text)

    try:
        with smtplib.SMTP(
            settings.EMAIL_SMTP_HOST,
            settings.EMAIL_SMTP_PORT,
            timeout=settings.EMAIL_SMTP_TIMEOUT_SECONDS,
        ) as server:
            if settings.EMAIL_SMTP_STARTTLS:
                server.starttls()
            if settings.EMAIL_SMTP_USER:
                server.login(settings.EMAIL_SMTP_USER, settings.EMAIL_SMTP_PASSWORD or "")
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as exc:
        logger.exception(f"Failed to send email to {to}")
        raise EmailDeliveryError(
            "Não foi possível enviar o email.",
            action="Tente novamente em alguns instantes.",
            details={"to": to},
        ) from exc
