"""
Firestore-backed document store (production backend).
"""

from typing import Any, Dict, List, Optional
import logging

from app.core.exceptions import DependencyError
from app.utils.firestore_helpers import where_filter
from .base import DocumentStore

logger = logging.getLogger(__name__)


class FirestoreDocumentStore(DocumentStore):
    """
    Thin wrapper over a firebase_admin Firestore client.

    Every SDK failure is logged and re-raised as DependencyError so the
    caller can fail the request with 503 instead of leaking SDK types.
    """

    name = "firestore"

    def __init__(self, client):
        self.db = client

    def create(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            doc_ref = self.db.collection(collection).document()  # Auto-generate unique ID
            document = dict(data, id=doc_ref.id)
            doc_ref.set(document)
            logger.info(f"Document saved to Firestore: {collection}/{doc_ref.id}")
            return document
        except Exception as e:
            logger.error(f"Failed to save document to Firestore ({collection}): {e}", exc_info=True)
            raise DependencyError(f"Document store write failed: {e}") from e

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            doc = self.db.collection(collection).document(doc_id).get()
        except Exception as e:
            logger.error(f"Failed to read {collection}/{doc_id} from Firestore: {e}", exc_info=True)
            raise DependencyError(f"Document store read failed: {e}") from e

        if not doc.exists:
            return None
        data = doc.to_dict()
        data["id"] = doc.id
        return data

    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            doc_ref = self.db.collection(collection).document(doc_id)
            if not doc_ref.get().exists:
                return None
            doc_ref.update(fields)
            updated_doc = doc_ref.get()
        except Exception as e:
            logger.error(f"Failed to update {collection}/{doc_id} in Firestore: {e}", exc_info=True)
            raise DependencyError(f"Document store update failed: {e}") from e

        data = updated_doc.to_dict()
        data["id"] = updated_doc.id
        return data

    def query(self, collection: str, equals: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        try:
            query = self.db.collection(collection)
            for field, value in (equals or {}).items():
                query = where_filter(query, field, "==", value)
            docs = query.stream()

            results = []
            for doc in docs:
                data = doc.to_dict()
                data["id"] = doc.id
                results.append(data)
            return results
        except Exception as e:
            logger.error(f"Failed to query {collection} in Firestore: {e}", exc_info=True)
            raise DependencyError(f"Document store query failed: {e}") from e

    def ping(self) -> Dict[str, Any]:
        try:
            collections = list(self.db.collections())
        except Exception as e:
            raise DependencyError(f"Database connection failed: {e}") from e
        return {"database": "firestore", "connected": True, "collections_count": len(collections)}
