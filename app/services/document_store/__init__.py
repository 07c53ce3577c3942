"""
Document store backends.

Firestore in production, a JSON file when USE_MOCK_DB is set.
"""

from typing import Optional
import logging

from app.core.exceptions import DependencyError
from app.core.settings import settings
from app.services.document_store.base import DocumentStore
from app.services.document_store.firestore_store import FirestoreDocumentStore
from app.services.document_store.json_file_store import JsonFileDocumentStore

logger = logging.getLogger(__name__)

_store_instance: Optional[DocumentStore] = None


def get_document_store() -> DocumentStore:
    """
    Resolve the active document store based on settings.

    Rules:
    - USE_MOCK_DB=true: JSON file at MOCK_DB_PATH.
    - Otherwise: Firestore through the firebase_admin client.

    Raises:
        DependencyError: Firestore client could not be initialized (not cached, retried next call)
    """
    global _store_instance
    if _store_instance is not None:
        return _store_instance

    if settings.USE_MOCK_DB:
        _store_instance = JsonFileDocumentStore(settings.MOCK_DB_PATH)
        logger.info(f"[STORE] USING MOCK DATABASE at {settings.MOCK_DB_PATH}")
    else:
        from app.config.firebase import get_db

        try:
            client = get_db()
        except RuntimeError as e:
            logger.error(f"[STORE] Firestore unavailable: {e}")
            raise DependencyError(f"Database connection failed: {e}") from e
        _store_instance = FirestoreDocumentStore(client)
        logger.info("[STORE] USING FIRESTORE")

    return _store_instance


__all__ = [
    "DocumentStore",
    "FirestoreDocumentStore",
    "JsonFileDocumentStore",
    "get_document_store",
]
