"""
Dashboard endpoints - municipal triage view, admin only.

Every route here sits behind the bearer-token guard; the public report
endpoints stay open so citizens can submit without an account.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.models.notification import Notification
from app.models.report import Report, ReportFilter, ReportStatus, ReportSummary, Severity
from app.routes.auth import get_current_admin
from app.services.notification_dispatcher import NotificationDispatcher, get_notification_dispatcher
from app.services.report_service import ReportService, get_report_service

router = APIRouter(prefix="/dashboard", tags=["Dashboard"], dependencies=[Depends(get_current_admin)])


def _build_filter(
    status_filter: Optional[ReportStatus] = Query(None, alias="status"),
    severity: Optional[Severity] = Query(None),
    q: Optional[str] = Query(None, max_length=200, description="Search location or report id"),
) -> ReportFilter:
    return ReportFilter(status=status_filter, severity=severity, text=q)


@router.get("/reports", response_model=List[Report])
def dashboard_reports(
    report_filter: ReportFilter = Depends(_build_filter),
    service: ReportService = Depends(get_report_service),
):
    return service.list_reports(report_filter)


@router.get("/summary", response_model=ReportSummary)
def dashboard_summary(
    report_filter: ReportFilter = Depends(_build_filter),
    service: ReportService = Depends(get_report_service),
):
    """Counters for the dashboard header: totals per status and severity."""
    return service.summarize(report_filter)


@router.get("/reports/{report_id}/notifications", response_model=List[Notification])
def report_notifications(
    report_id: str,
    service: ReportService = Depends(get_report_service),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Audit trail of alert attempts for one report (404 if the report is unknown)."""
    service.get_report(report_id)
    return dispatcher.get_notifications(report_id)
