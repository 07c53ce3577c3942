"""
Filtering and aggregation helpers for the municipal dashboard.

Pure functions over Report models. No I/O here; the store and the service
call into these after loading documents.
"""

from collections import Counter
from typing import Iterable, List, Optional

from app.models.report import Report, ReportFilter, ReportStatus, ReportSummary, Severity


def matches(report: Report, report_filter: Optional[ReportFilter]) -> bool:
    """
    Check a report against every predicate set on the filter.

    Text search is case-insensitive and hits either the location or the id.
    """
    if report_filter is None:
        return True

    if report_filter.status is not None and report.status != report_filter.status:
        return False

    if report_filter.severity is not None and report.severity != report_filter.severity:
        return False

    if report_filter.text:
        needle = report_filter.text.strip().lower()
        if needle and needle not in report.location.lower() and needle not in report.id.lower():
            return False

    return True


def newest_first(reports: Iterable[Report]) -> List[Report]:
    """
    Order by timestamp descending.

    Equal timestamps keep reverse insertion order: the input is expected in
    insertion order, so reversing before a stable sort puts later inserts first.
    """
    return sorted(reversed(list(reports)), key=lambda r: r.timestamp, reverse=True)


def apply_filter(reports: Iterable[Report], report_filter: Optional[ReportFilter] = None) -> List[Report]:
    return newest_first(r for r in reports if matches(r, report_filter))


def summarize(reports: Iterable[Report]) -> ReportSummary:
    """Count reports per status and per severity for the dashboard header."""
    reports = list(reports)
    by_status = Counter(r.status for r in reports)
    by_severity = Counter(r.severity for r in reports)

    return ReportSummary(
        total=len(reports),
        pending=by_status[ReportStatus.PENDING],
        in_progress=by_status[ReportStatus.IN_PROGRESS],
        resolved=by_status[ReportStatus.RESOLVED],
        dismissed=by_status[ReportStatus.DISMISSED],
        high_severity=by_severity[Severity.HIGH],
        by_severity={severity.value: by_severity[severity] for severity in Severity},
    )
