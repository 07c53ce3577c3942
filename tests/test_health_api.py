import pytest
from fastapi.testclient import TestClient

import app.config.firebase as firebase
import app.services.document_store as document_store
import app.services.report_service as report_service
from app.core.exceptions import DependencyError
from app.core.settings import settings
from app.main import app
from app.services.document_store import get_document_store


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_database_health_uses_active_store(client):
    response = client.get("/health/db")

    assert response.status_code == 200
    assert response.json()["database"] == "mock"
    assert response.json()["connected"] is True


def test_database_health_reports_outage_as_503(client):
    class DownStore:
        def ping(self):
            raise DependencyError("Database connection failed: timeout")

    app.dependency_overrides[get_document_store] = lambda: DownStore()

    response = client.get("/health/db")

    assert response.status_code == 503
    assert "timeout" in response.json()["message"]


@pytest.fixture
def unconfigured_firestore(monkeypatch):
    """Real dependency wiring, with Firestore credentials that fail to load."""
    def broken_get_db():
        raise RuntimeError("Firestore initialization failed, bad credentials: key revoked")

    monkeypatch.setattr(settings, "USE_MOCK_DB", False)
    monkeypatch.setattr(firebase, "get_db", broken_get_db)
    monkeypatch.setattr(document_store, "_store_instance", None)
    monkeypatch.setattr(report_service, "_report_service", None)
    app.dependency_overrides = {}

    yield TestClient(app)

    app.dependency_overrides = {}


def test_database_health_is_503_when_firestore_cannot_initialize(unconfigured_firestore):
    response = unconfigured_firestore.get("/health/db")

    assert response.status_code == 503
    assert "key revoked" in response.json()["message"]


def test_report_routes_are_503_when_firestore_cannot_initialize(unconfigured_firestore):
    assert unconfigured_firestore.get("/reports").status_code == 503
    assert document_store._store_instance is None


def test_get_document_store_raises_dependency_error(unconfigured_firestore):
    with pytest.raises(DependencyError):
        document_store.get_document_store()
