from email.message import EmailMessage
from typing import List, Optional
import logging
import smtplib

from app.core.exceptions import DependencyError
from .base import MailTransport

logger = logging.getLogger(__name__)


class SmtpMailTransport(MailTransport):
    """
    Plain SMTP delivery (any relay, including SendGrid's smtp.sendgrid.net
    with user "apikey").
    """

    name = "smtp"

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        sender: str = "noreply@streetdogalert.org",
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        if not host:
            raise ValueError("SMTP host is required")
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.timeout = timeout

    def _build_message(self, subject: str, body: str, recipients: List[str]) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = ", ".join(recipients)
        message["Subject"] = subject
        message.set_content(body)
        return message

    def send(self, subject: str, body: str, recipients: List[str]) -> Optional[str]:
        message = self._build_message(subject, body, recipients)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.warning(f"SMTP delivery via {self.host}:{self.port} failed: {e}")
            raise DependencyError(f"SMTP delivery failed: {e}") from e

        logger.info(f"Email sent via SMTP to {len(recipients)} recipient(s)")
        return message.get("Message-ID")
