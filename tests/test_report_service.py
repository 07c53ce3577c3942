import pytest
from fastapi import BackgroundTasks

from app.core.exceptions import NotFoundError, TransitionNotAllowedError, ValidationError
from app.models.report import ReportFilter, ReportStatus, Severity
from app.services.notification_dispatcher import NotificationDispatcher
from app.services.report_service import ReportService
from app.services.status_workflow import StatusWorkflowEngine

from tests.conftest import RECIPIENTS, FailingTransport


def test_create_high_report_sends_one_notification(report_service, transport, valid_report):
    report = report_service.create_report(valid_report)

    assert report.status == ReportStatus.PENDING
    assert len(transport.sent) == 1
    assert len(report_service.dispatcher.get_notifications(report.id)) == 1


@pytest.mark.parametrize("severity", ["low", "medium"])
def test_create_low_or_medium_sends_nothing(report_service, transport, valid_report, severity):
    report_service.create_report(dict(valid_report, severity=severity))

    assert transport.sent == []


def test_invalid_report_is_not_stored_or_notified(report_service, transport, valid_report):
    with pytest.raises(ValidationError):
        report_service.create_report(dict(valid_report, severity="extreme"))

    assert report_service.store.count() == 0
    assert transport.sent == []


def test_create_succeeds_when_mail_is_down(report_store, document_store, valid_report):
    failing = FailingTransport()

    service = ReportService(report_store, NotificationDispatcher(failing, RECIPIENTS, audit_store=document_store))

    report = service.create_report(valid_report)

    assert service.get_report(report.id) == report
    assert failing.calls == 1


def test_create_survives_a_crashing_dispatcher(report_store, valid_report):
    class CrashingDispatcher:
        def notify_if_needed(self, report):
            raise RuntimeError("dispatcher bug")

    service = ReportService(report_store, CrashingDispatcher())

    report = service.create_report(valid_report)

    assert report_store.get(report.id).id == report.id


def test_photo_refs_are_appended(report_service, valid_report):
    report = report_service.create_report(dict(valid_report, photos=["/uploads/a.jpg"]), photo_refs=["/uploads/b.jpg"])

    assert report.photos == ["/uploads/a.jpg", "/uploads/b.jpg"]


def test_background_tasks_defer_notification(report_service, transport, valid_report):
    tasks = BackgroundTasks()

    report_service.create_report(valid_report, background_tasks=tasks)

    assert transport.sent == []
    assert len(tasks.tasks) == 1


def test_set_status_unknown_id(report_service):
    with pytest.raises(NotFoundError):
        report_service.set_status("nope", "resolved")


def test_set_status_bad_value_leaves_record(report_service, valid_report):
    report = report_service.create_report(valid_report)

    with pytest.raises(ValidationError):
        report_service.set_status(report.id, "bogus")

    assert report_service.get_report(report.id) == report


def test_set_status_respects_allow_list(report_store, dispatcher, valid_report):
    workflow = StatusWorkflowEngine({"pending": ["in-progress"], "in-progress": ["resolved"]})
    service = ReportService(report_store, dispatcher, workflow=workflow)
    report = service.create_report(valid_report)

    with pytest.raises(TransitionNotAllowedError):
        service.set_status(report.id, "resolved")

    assert service.set_status(report.id, "in-progress").status == ReportStatus.IN_PROGRESS
    assert service.set_status(report.id, "resolved").status == ReportStatus.RESOLVED


def test_list_and_summarize_with_filter(report_service, valid_report):
    high = report_service.create_report(valid_report)
    report_service.create_report(dict(valid_report, severity="low", location="Railway Colony"))
    report_service.set_status(high.id, "in-progress")

    listed = report_service.list_reports(ReportFilter(text="mg"))
    summary = report_service.summarize()
    high_only = report_service.summarize(ReportFilter(severity=Severity.HIGH))

    assert [r.id for r in listed] == [high.id]
    assert summary.total == 2
    assert summary.in_progress == 1
    assert summary.pending == 1
    assert high_only.total == 1
