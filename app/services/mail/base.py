from abc import ABC, abstractmethod
from typing import List, Optional


class MailTransport(ABC):
    """
    Abstract outbound mail transport.

    Contract:
    - send() delivers one message to every recipient in a single call.
    - Returns a provider message id when the provider gives one.
    - Any delivery failure MUST raise app.core.exceptions.DependencyError.
    - Implementations should enforce a network timeout (MAIL_TIMEOUT_SECONDS).
    """

    name: str = "abstract"

    @abstractmethod
    def send(self, subject: str, body: str, recipients: List[str]) -> Optional[str]:
        raise NotImplementedError
