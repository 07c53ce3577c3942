from unittest.mock import MagicMock

import pytest

from app.core.exceptions import DependencyError
from app.services.document_store import FirestoreDocumentStore


def make_snapshot(doc_id, data, exists=True):
    snapshot = MagicMock()
    snapshot.id = doc_id
    snapshot.exists = exists
    snapshot.to_dict.return_value = dict(data) if data is not None else None
    return snapshot


@pytest.fixture
def client():
    return MagicMock()


def test_create_uses_generated_id(client):
    doc_ref = client.collection.return_value.document.return_value
    doc_ref.id = "gen123"
    store = FirestoreDocumentStore(client)

    stored = store.create("reports", {"location": "MG Road"})

    assert stored == {"location": "MG Road", "id": "gen123"}
    client.collection.assert_called_with("reports")
    doc_ref.set.assert_called_once_with({"location": "MG Road", "id": "gen123"})


def test_create_wraps_sdk_errors(client):
    client.collection.return_value.document.return_value.set.side_effect = RuntimeError("quota exceeded")

    with pytest.raises(DependencyError):
        FirestoreDocumentStore(client).create("reports", {"location": "x"})


def test_get_missing_returns_none(client):
    client.collection.return_value.document.return_value.get.return_value = make_snapshot("x", None, exists=False)

    assert FirestoreDocumentStore(client).get("reports", "x") is None


def test_get_adds_document_id(client):
    client.collection.return_value.document.return_value.get.return_value = make_snapshot("r1", {"status": "pending"})

    assert FirestoreDocumentStore(client).get("reports", "r1") == {"status": "pending", "id": "r1"}


def test_update_missing_does_not_write(client):
    doc_ref = client.collection.return_value.document.return_value
    doc_ref.get.return_value = make_snapshot("r1", None, exists=False)

    assert FirestoreDocumentStore(client).update("reports", "r1", {"status": "resolved"}) is None
    doc_ref.update.assert_not_called()


def test_update_writes_only_given_fields(client):
    doc_ref = client.collection.return_value.document.return_value
    doc_ref.get.return_value = make_snapshot("r1", {"status": "resolved", "location": "MG Road"})

    updated = FirestoreDocumentStore(client).update("reports", "r1", {"status": "resolved"})

    doc_ref.update.assert_called_once_with({"status": "resolved"})
    assert updated["status"] == "resolved"
    assert updated["id"] == "r1"


def test_query_applies_equality_filters(client):
    collection = client.collection.return_value
    filtered = collection.where.return_value.where.return_value
    filtered.stream.return_value = [make_snapshot("r1", {"status": "pending", "severity": "high"})]

    results = FirestoreDocumentStore(client).query("reports", {"status": "pending", "severity": "high"})

    assert results == [{"status": "pending", "severity": "high", "id": "r1"}]
    assert collection.where.call_count == 1
    assert "filter" in collection.where.call_args.kwargs


def test_query_without_filters_streams_collection(client):
    client.collection.return_value.stream.return_value = [make_snapshot("a", {}), make_snapshot("b", {})]

    results = FirestoreDocumentStore(client).query("reports")

    assert [r["id"] for r in results] == ["a", "b"]


def test_ping_reports_outage(client):
    client.collections.side_effect = RuntimeError("deadline exceeded")

    with pytest.raises(DependencyError):
        FirestoreDocumentStore(client).ping()
