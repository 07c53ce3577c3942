from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class DocumentStore(ABC):
    """
    Abstract document backend holding named collections of JSON-like documents.

    Contract:
    - Documents are dicts keyed by a backend-generated id.
    - The generated id is also written into the document under "id".
    - Writes to a single document are atomic; nothing spans documents.
    - Backend failures MUST surface as app.core.exceptions.DependencyError.
    """

    name: str = "abstract"

    @abstractmethod
    def create(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new document and return it with its generated id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Return the document or None when the id is unknown."""
        raise NotImplementedError

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge fields into an existing document; None when the id is unknown."""
        raise NotImplementedError

    @abstractmethod
    def query(self, collection: str, equals: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Return documents whose fields equal every value in `equals`."""
        raise NotImplementedError

    @abstractmethod
    def ping(self) -> Dict[str, Any]:
        """Cheap connectivity check used by /health/db."""
        raise NotImplementedError
