"""
Report service - Business logic for citizen report handling.

DESIGN NOTE:
- Validation happens before anything is written
- The store is the durability boundary: its failures fail the request
- Notification runs only after the report is stored and is best effort;
  a mail outage never blocks report submission
- Holds no report state between calls
"""

from typing import Any, Dict, List, Optional, Sequence, Union
import logging

from fastapi import BackgroundTasks

from app.models.report import Report, ReportCreate, ReportFilter, ReportSummary
from app.services.notification_dispatcher import NotificationDispatcher
from app.services.report_filters import summarize
from app.services.report_store import ReportStore, parse_status, validate_candidate
from app.services.status_workflow import StatusWorkflowEngine

logger = logging.getLogger(__name__)


class ReportService:
    """
    Orchestrates report creation, retrieval and status transitions.
    """

    def __init__(
        self,
        store: ReportStore,
        dispatcher: NotificationDispatcher,
        workflow: Optional[StatusWorkflowEngine] = None,
    ):
        self.store = store
        self.dispatcher = dispatcher
        self.workflow = workflow or StatusWorkflowEngine()

    def create_report(
        self,
        report_data: Union[ReportCreate, Dict[str, Any]],
        photo_refs: Optional[Sequence[str]] = None,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> Report:
        """
        Create a new citizen report.

        Flow:
        1. Validate input (unknown, missing or out-of-enumeration fields rejected)
        2. Store report (MUST succeed)
        3. Hand the stored report to the notification dispatcher (best effort)
        4. Return the stored report

        Args:
            report_data: Validated model or raw payload
            photo_refs: References returned by photo storage for this submission
            background_tasks: When given, notification runs after the response is sent

        Raises:
            ValidationError: invalid input, nothing persisted
            DependencyError: store unreachable
        """
        report_in = validate_candidate(report_data)
        if photo_refs:
            report_in = report_in.model_copy(update={"photos": list(report_in.photos) + list(photo_refs)})

        report = self.store.insert(report_in)

        if background_tasks is not None:
            background_tasks.add_task(self._notify, report)
        else:
            self._notify(report)

        return report

    def _notify(self, report: Report) -> None:
        try:
            self.dispatcher.notify_if_needed(report)
        except Exception as e:
            # Report is already stored; alerting is best effort
            logger.error(f"⚠️ Notification step failed for report {report.id}: {e}", exc_info=True)

    def list_reports(self, report_filter: Optional[ReportFilter] = None) -> List[Report]:
        return self.store.list(report_filter)

    def get_report(self, report_id: str) -> Report:
        return self.store.get(report_id)

    def set_status(self, report_id: str, new_status: str) -> Report:
        """
        Move a report to a new status.

        Raises:
            NotFoundError: unknown id
            ValidationError: status outside the enumeration
            TransitionNotAllowedError: blocked by a configured allow-list
        """
        current = self.store.get(report_id)
        target = parse_status(new_status)
        self.workflow.validate_transition(current.status, target)
        return self.store.update_status(report_id, target)

    def summarize(self, report_filter: Optional[ReportFilter] = None) -> ReportSummary:
        return summarize(self.store.list(report_filter))


# Global service instance (singleton pattern)
_report_service: Optional[ReportService] = None


def get_report_service() -> ReportService:
    """
    Get or create ReportService singleton instance.

    Used as a FastAPI dependency so tests can override it.
    """
    global _report_service
    if _report_service is None:
        from app.services.document_store import get_document_store
        from app.services.notification_dispatcher import get_notification_dispatcher
        from app.services.status_workflow import get_workflow_engine

        _report_service = ReportService(
            store=ReportStore(get_document_store()),
            dispatcher=get_notification_dispatcher(),
            workflow=get_workflow_engine(),
        )
    return _report_service
