"""
Outbound mail transports for report notifications.

The active transport is chosen by MAIL_TRANSPORT and falls back to the
console (simulated) transport when the chosen one is not configured.
"""

from typing import Optional
import logging

from app.core.settings import settings
from app.services.mail.base import MailTransport
from app.services.mail.console_transport import ConsoleMailTransport
from app.services.mail.sendgrid_transport import SendGridMailTransport
from app.services.mail.smtp_transport import SmtpMailTransport

logger = logging.getLogger(__name__)

_transport_instance: Optional[MailTransport] = None


def get_mail_transport() -> MailTransport:
    """
    Resolve the active mail transport based on settings.

    Rules:
    - "sendgrid" with SENDGRID_API_KEY set: SendGrid Web API.
    - "smtp" with SMTP_HOST set: SMTP relay.
    - Anything else, or a misconfigured choice: console (simulated send).
    """
    global _transport_instance
    if _transport_instance is not None:
        return _transport_instance

    transport_name = (settings.MAIL_TRANSPORT or "console").lower()

    try:
        if transport_name == "sendgrid":
            _transport_instance = SendGridMailTransport(
                api_key=settings.SENDGRID_API_KEY,
                sender=settings.MAIL_FROM,
                timeout=settings.MAIL_TIMEOUT_SECONDS,
            )
        elif transport_name == "smtp":
            _transport_instance = SmtpMailTransport(
                host=settings.SMTP_HOST,
                port=settings.SMTP_PORT,
                username=settings.SMTP_USER,
                password=settings.SMTP_PASSWORD,
                sender=settings.MAIL_FROM,
                use_tls=settings.SMTP_USE_TLS,
                timeout=settings.MAIL_TIMEOUT_SECONDS,
            )
    except ValueError as e:
        logger.warning(f"Mail transport '{transport_name}' misconfigured: {e}. Falling back to console.")

    if _transport_instance is None:
        _transport_instance = ConsoleMailTransport()

    logger.info(f"Mail transport initialized: {_transport_instance.name}")
    return _transport_instance


__all__ = [
    "MailTransport",
    "ConsoleMailTransport",
    "SmtpMailTransport",
    "SendGridMailTransport",
    "get_mail_transport",
]
