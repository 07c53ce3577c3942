"""
Notification Dispatcher - email alerts for high-severity reports.

DESIGN PRINCIPLES:
- Only severity == "high" is eligible
- Best effort: a mail outage never fails report creation
- Every attempt on an eligible report leaves one audit document
  in the "notifications" collection, delivered or not
- Bounded retry (NOTIFY_MAX_ATTEMPTS, default 1 = no retry)
- No queueing and no delivery confirmation tracking
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
import logging

from app.core.exceptions import DependencyError
from app.core.settings import settings
from app.models.notification import Notification
from app.models.report import Report, Severity
from app.services.document_store import DocumentStore
from app.services.mail import MailTransport

logger = logging.getLogger(__name__)

NOTIFICATIONS_COLLECTION = "notifications"


class NotificationDispatcher:
    """
    Decides whether a report warrants an alert, sends it, and records the attempt.
    """

    SUBJECT = "High Severity Dog Incident Reported"

    def __init__(
        self,
        transport: MailTransport,
        recipients: List[str],
        audit_store: Optional[DocumentStore] = None,
        max_attempts: int = 1,
    ):
        self.transport = transport
        self.recipients = list(recipients)
        self.audit_store = audit_store
        self.max_attempts = max(1, max_attempts)

    def should_notify(self, report: Report) -> Tuple[bool, str]:
        if report.severity != Severity.HIGH:
            return False, f"Severity is {report.severity.value}, must be high"
        return True, "High severity report"

    def build_message(self, report: Report) -> str:
        lines = [
            "High Severity Dog Incident",
            "",
            f"Report ID: {report.id}",
            f"Location: {report.location}",
            f"Dogs: {report.dog_count.value}",
            f"Description: {report.description}",
            f"Contact: {report.contact_number}",
        ]
        if report.reported_by:
            lines.append(f"Reported by: {report.reported_by}")
        return "\n".join(lines)

    def _deliver(self, message: str) -> Tuple[bool, int, Optional[str]]:
        """Try delivery up to max_attempts times. Returns (delivered, attempts, last_error)."""
        if not self.recipients:
            logger.info("No notification recipients configured (NOTIFY_EMAILS), skipping delivery")
            return False, 0, "no recipients configured"

        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                self.transport.send(self.SUBJECT, message, self.recipients)
                return True, attempt, None
            except DependencyError as e:
                last_error = e.message
                logger.error(f"❌ Notification delivery attempt {attempt}/{self.max_attempts} failed: {e.message}")
            except Exception as e:
                last_error = str(e)
                logger.error(f"❌ Notification delivery attempt {attempt}/{self.max_attempts} crashed: {e}", exc_info=True)
        return False, self.max_attempts, last_error

    def _record(self, report: Report, message: str, delivered: bool, attempts: int, error: Optional[str]) -> Optional[Notification]:
        if self.audit_store is None:
            return None

        entry: Dict = {
            "reportId": report.id,
            "subject": self.SUBJECT,
            "message": message,
            "recipients": self.recipients,
            "transport": self.transport.name,
            "delivered": delivered,
            "attempts": attempts,
            "error": error,
            "createdAt": datetime.now(timezone.utc),
        }
        try:
            stored = self.audit_store.create(NOTIFICATIONS_COLLECTION, entry)
        except Exception as e:
            logger.error(f"Failed to record notification audit for report {report.id}: {e}", exc_info=True)
            return None
        return Notification.model_validate(stored)

    def notify_if_needed(self, report: Report) -> Optional[Notification]:
        """
        Alert recipients about a high-severity report.

        Never raises: delivery and audit failures are logged and absorbed.

        Returns:
            The audit record, or None when the report is not eligible or
            no audit store is available.
        """
        eligible, reason = self.should_notify(report)
        if not eligible:
            logger.info(f"Report {report.id} not eligible for notification: {reason}")
            return None

        message = self.build_message(report)
        delivered, attempts, error = self._deliver(message)

        if delivered:
            logger.info(f"✅ Notification sent for report {report.id} via {self.transport.name}")
        else:
            logger.warning(f"⚠️ Notification for report {report.id} not delivered: {error}")

        return self._record(report, message, delivered, attempts, error)

    def get_notifications(self, report_id: Optional[str] = None) -> List[Notification]:
        """Audit entries, newest first, optionally for one report."""
        if self.audit_store is None:
            return []
        equals = {"reportId": report_id} if report_id else None
        documents = self.audit_store.query(NOTIFICATIONS_COLLECTION, equals)
        notifications = [Notification.model_validate(doc) for doc in documents]
        return sorted(notifications, key=lambda n: n.created_at, reverse=True)


# Global dispatcher instance (singleton pattern)
_dispatcher: Optional[NotificationDispatcher] = None


def get_notification_dispatcher() -> NotificationDispatcher:
    """
    Get or create the NotificationDispatcher singleton wired from settings.
    """
    global _dispatcher
    if _dispatcher is None:
        from app.services.document_store import get_document_store
        from app.services.mail import get_mail_transport

        _dispatcher = NotificationDispatcher(
            transport=get_mail_transport(),
            recipients=settings.notify_recipients,
            audit_store=get_document_store(),
            max_attempts=settings.NOTIFY_MAX_ATTEMPTS,
        )
    return _dispatcher
