"""
Report store - durable collection of street-dog incident reports.

The store exclusively owns the persisted representation:
- assigns id and timestamp on insert
- always starts a report as "pending"
- changes nothing but the status field afterwards
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Union
import logging
import threading

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import NotFoundError, ValidationError
from app.models.report import Report, ReportCreate, ReportFilter, ReportStatus
from app.services.document_store import DocumentStore
from app.services.report_filters import apply_filter

logger = logging.getLogger(__name__)

REPORTS_COLLECTION = "reports"

# Assigned by the store; ignored when a caller sends them.
SYSTEM_FIELDS = ("id", "status", "timestamp")

_STATUS_VALUES = [s.value for s in ReportStatus]


def validate_candidate(candidate: Union[ReportCreate, Dict[str, Any]]) -> ReportCreate:
    """Coerce an incoming payload into ReportCreate or raise ValidationError."""
    if isinstance(candidate, ReportCreate):
        return candidate
    if not isinstance(candidate, dict):
        raise ValidationError.for_field("__root__", "report payload must be an object")
    try:
        return ReportCreate.model_validate(candidate)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e) from e


def parse_status(value: Union[str, ReportStatus]) -> ReportStatus:
    try:
        return ReportStatus(value)
    except ValueError:
        raise ValidationError.for_field("status", f"must be one of {_STATUS_VALUES}, got {value!r}")


class ReportStore:
    """
    Report persistence on top of a DocumentStore backend.

    Timestamps come from an in-process clock that never goes backwards, so
    insertion order and timestamp order agree even when two reports land in
    the same microsecond.
    """

    def __init__(self, documents: DocumentStore, clock=None):
        self.documents = documents
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._last_timestamp: Optional[datetime] = None
        self._clock_lock = threading.Lock()

    def _next_timestamp(self) -> datetime:
        with self._clock_lock:
            now = self._clock()
            if self._last_timestamp is not None and now <= self._last_timestamp:
                now = self._last_timestamp + timedelta(microseconds=1)
            self._last_timestamp = now
            return now

    def insert(self, candidate: Union[ReportCreate, Dict[str, Any]]) -> Report:
        """
        Validate, stamp and persist a new report.

        Raises:
            ValidationError: missing/empty required field or out-of-enumeration value
            DependencyError: backend write failed
        """
        if isinstance(candidate, dict):
            candidate = {k: v for k, v in candidate.items() if k not in SYSTEM_FIELDS}
        report_in = validate_candidate(candidate)

        document = report_in.model_dump(by_alias=True, mode="json")
        document["status"] = ReportStatus.PENDING.value
        document["timestamp"] = self._next_timestamp()

        stored = self.documents.create(REPORTS_COLLECTION, document)
        logger.info(f"Report stored: {stored['id']} (severity={document['severity']})")
        return Report.model_validate(stored)

    def get(self, report_id: str) -> Report:
        document = self.documents.get(REPORTS_COLLECTION, report_id)
        if document is None:
            raise NotFoundError("Report", report_id)
        return Report.model_validate(document)

    def list(self, report_filter: Optional[ReportFilter] = None) -> List[Report]:
        """
        Return matching reports, most recent first.

        Equality predicates are pushed down to the backend; the text search and
        the ordering run here because Firestore has neither substring search
        nor ordering on filtered queries without a composite index.
        """
        equals = {}
        if report_filter is not None:
            if report_filter.status is not None:
                equals["status"] = report_filter.status.value
            if report_filter.severity is not None:
                equals["severity"] = report_filter.severity.value

        documents = self.documents.query(REPORTS_COLLECTION, equals)
        reports = [Report.model_validate(doc) for doc in documents]
        return apply_filter(reports, report_filter)

    def update_status(self, report_id: str, new_status: Union[str, ReportStatus]) -> Report:
        """
        Overwrite the status field only. Any status may replace any other here.

        Raises:
            NotFoundError: unknown id (checked before the status value)
            ValidationError: status outside the enumeration
        """
        if self.documents.get(REPORTS_COLLECTION, report_id) is None:
            raise NotFoundError("Report", report_id)

        status = parse_status(new_status)

        updated = self.documents.update(REPORTS_COLLECTION, report_id, {"status": status.value})
        if updated is None:
            # Removed between the existence check and the write.
            raise NotFoundError("Report", report_id)

        logger.info(f"Report {report_id} status set to {status.value}")
        return Report.model_validate(updated)

    def count(self) -> int:
        return len(self.documents.query(REPORTS_COLLECTION))
