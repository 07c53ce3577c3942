"""
JSON-file document store used when USE_MOCK_DB is enabled.

Lets the API run locally without Firebase credentials. The whole database
is one JSON file of the form {collection: {doc_id: document}}; datetimes are
tagged so they round-trip as timezone-aware datetime objects.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
import json
import logging
import os
import threading
import uuid

from app.core.exceptions import DependencyError
from .base import DocumentStore

logger = logging.getLogger(__name__)

_DATETIME_TAG = "__datetime__"


def _encode(value):
    if isinstance(value, datetime):
        return {_DATETIME_TAG: value.isoformat()}
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _decode(obj: Dict[str, Any]):
    if len(obj) == 1 and _DATETIME_TAG in obj:
        return datetime.fromisoformat(obj[_DATETIME_TAG])
    return obj


class JsonFileDocumentStore(DocumentStore):

    name = "json-file"

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f, object_hook=_decode)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read mock DB at {self.path}: {e}")
            raise DependencyError(f"Mock database unreadable: {e}") from e

    def _save(self, data: Dict[str, Dict[str, Dict[str, Any]]]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = f"{self.path}.tmp"
        try:
            os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, default=_encode)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write mock DB at {self.path}: {e}")
            raise DependencyError(f"Mock database unwritable: {e}") from e

    def create(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            db = self._load()
            doc_id = uuid.uuid4().hex
            document = dict(data, id=doc_id)
            db.setdefault(collection, {})[doc_id] = document
            self._save(db)
        logger.info(f"Document saved to mock DB: {collection}/{doc_id}")
        return dict(document)

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            document = self._load().get(collection, {}).get(doc_id)
        return dict(document) if document is not None else None

    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            db = self._load()
            document = db.get(collection, {}).get(doc_id)
            if document is None:
                return None
            document.update(fields)
            self._save(db)
        return dict(document)

    def query(self, collection: str, equals: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        with self._lock:
            documents = list(self._load().get(collection, {}).values())
        equals = equals or {}
        return [
            dict(doc) for doc in documents
            if all(doc.get(field) == value for field, value in equals.items())
        ]

    def ping(self) -> Dict[str, Any]:
        with self._lock:
            collections = self._load()
        return {"database": "mock", "connected": True, "collections_count": len(collections)}
