"""
Simulated transport for local development: the message is logged, not sent.
"""

from typing import List, Optional
import logging
import uuid

from .base import MailTransport

logger = logging.getLogger(__name__)


class ConsoleMailTransport(MailTransport):

    name = "console"

    def send(self, subject: str, body: str, recipients: List[str]) -> Optional[str]:
        message_id = f"console-{uuid.uuid4().hex[:12]}"
        logger.info(
            f"📧 SIMULATED email {message_id} to {', '.join(recipients)}\n"
            f"Subject: {subject}\n{body}"
        )
        return message_id
