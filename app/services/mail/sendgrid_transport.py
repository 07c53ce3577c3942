from email.utils import parseaddr
from typing import Dict, List, Optional
import logging

import requests

from app.core.exceptions import DependencyError
from .base import MailTransport

logger = logging.getLogger(__name__)


class SendGridMailTransport(MailTransport):
    """
    SendGrid v3 Web API transport.

    Docs: https://docs.sendgrid.com/api-reference/mail-send/mail-send
    """

    name = "sendgrid"
    BASE_URL = "https://api.sendgrid.com/v3/mail/send"

    def __init__(self, api_key: str, sender: str, timeout: float = 10.0):
        if not api_key:
            raise ValueError("SendGrid API key is required")
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    def _sender_payload(self) -> Dict[str, str]:
        name, address = parseaddr(self.sender)
        payload = {"email": address or self.sender}
        if name:
            payload["name"] = name
        return payload

    def send(self, subject: str, body: str, recipients: List[str]) -> Optional[str]:
        payload = {
            "personalizations": [{"to": [{"email": r} for r in recipients]}],
            "from": self._sender_payload(),
            "subject": subject,
            "content": [{"type": "text/plain", "value": body}],
        }

        try:
            resp = self.session.post(self.BASE_URL, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"SendGrid request failed: {e}")
            raise DependencyError(f"SendGrid unreachable: {e}") from e

        # 202 Accepted is the only success code for mail/send
        if resp.status_code != 202:
            logger.warning(f"SendGrid HTTP {resp.status_code}: {resp.text[:200]}")
            raise DependencyError(f"SendGrid rejected the message (HTTP {resp.status_code})")

        message_id = resp.headers.get("X-Message-Id")
        logger.info(f"Email accepted by SendGrid: {message_id}")
        return message_id
