"""
Shared fixtures: every test gets a fresh JSON-file document store under
tmp_path and a recording mail transport, wired into the app through
FastAPI dependency overrides.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import DependencyError
from app.main import app
from app.services.appointment_service import AppointmentService, get_appointment_service
from app.services.auth_service import AuthService, get_auth_service
from app.services.document_store import JsonFileDocumentStore, get_document_store
from app.services.mail import MailTransport
from app.services.notification_dispatcher import NotificationDispatcher, get_notification_dispatcher
from app.services.photo_storage import LocalPhotoStorage, get_photo_storage
from app.services.report_service import ReportService, get_report_service
from app.services.report_store import ReportStore
from app.services.status_workflow import StatusWorkflowEngine

RECIPIENTS = ["animal.control@city.gov", "ngo@pawsrescue.org"]


class RecordingTransport(MailTransport):
    """Keeps every message instead of sending it."""

    name = "recording"

    def __init__(self):
        self.sent = []

    def send(self, subject, body, recipients):
        self.sent.append({"subject": subject, "body": body, "recipients": list(recipients)})
        return f"msg-{len(self.sent)}"


class FailingTransport(MailTransport):
    """Simulates a mail outage."""

    name = "failing"

    def __init__(self):
        self.calls = 0

    def send(self, subject, body, recipients):
        self.calls += 1
        raise DependencyError("SMTP relay unreachable")


class StepClock:
    """Deterministic clock: each call returns the next instant."""

    def __init__(self, start=None, step=timedelta(minutes=1)):
        self.current = start or datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def valid_report():
    return {
        "location": "MG Road",
        "severity": "high",
        "dogCount": "6-10",
        "description": "pack blocking path",
        "contactNumber": "+911234567890",
    }


@pytest.fixture
def document_store(tmp_path):
    return JsonFileDocumentStore(str(tmp_path / "db.json"))


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def report_store(document_store):
    return ReportStore(document_store, clock=StepClock())


@pytest.fixture
def dispatcher(transport, document_store):
    return NotificationDispatcher(transport=transport, recipients=RECIPIENTS, audit_store=document_store)


@pytest.fixture
def report_service(report_store, dispatcher):
    return ReportService(store=report_store, dispatcher=dispatcher, workflow=StatusWorkflowEngine())


@pytest.fixture
def photo_storage(tmp_path):
    return LocalPhotoStorage(str(tmp_path / "uploads"))


@pytest.fixture
def client(document_store, report_service, dispatcher, photo_storage):
    app.dependency_overrides[get_document_store] = lambda: document_store
    app.dependency_overrides[get_report_service] = lambda: report_service
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher
    app.dependency_overrides[get_photo_storage] = lambda: photo_storage
    app.dependency_overrides[get_auth_service] = lambda: AuthService(document_store)
    app.dependency_overrides[get_appointment_service] = lambda: AppointmentService(document_store)

    yield TestClient(app)

    app.dependency_overrides = {}


@pytest.fixture
def admin_token(client):
    """Register and log in an admin, returning the bearer token."""
    credentials = {"email": "officer@citycouncil.org", "password": "Str0ngPassw0rd"}
    assert client.post("/auth/register", json=credentials).status_code == 201
    response = client.post("/auth/login", json=credentials)
    assert response.status_code == 200
    return response.json()["token"]
