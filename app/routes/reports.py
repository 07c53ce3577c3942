"""
Report endpoints - API routes for citizen report submission and triage.
"""

from typing import List, Optional
import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, status
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from app.core.exceptions import ValidationError
from app.core.settings import settings
from app.models.report import Report, ReportFilter, ReportStatus, Severity, StatusUpdate
from app.services.photo_storage import PhotoStorage, check_image, get_photo_storage
from app.services.report_service import ReportService, get_report_service
from app.services.report_store import validate_candidate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


async def _read_submission(request: Request):
    """
    Split an incoming submission into (fields, uploads).

    Accepts multipart/form-data (the citizen form, photos under "photos")
    and plain JSON bodies.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("multipart/form-data") or content_type.startswith("application/x-www-form-urlencoded"):
        form = await request.form()
        fields = {}
        uploads: List[UploadFile] = []
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if value.filename:
                    uploads.append(value)
            elif key == "photos":
                # A photo reference sent as text (already uploaded elsewhere)
                fields.setdefault("photos", []).append(value)
            else:
                fields[key] = value
        return fields, uploads

    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError.for_field("__root__", "request body must be JSON or multipart/form-data")
    return payload, []


@router.post("", response_model=Report, status_code=status.HTTP_201_CREATED)
async def submit_report(
    request: Request,
    background_tasks: BackgroundTasks,
    service: ReportService = Depends(get_report_service),
    photo_storage: PhotoStorage = Depends(get_photo_storage),
):
    """
    Submit a new street-dog incident report.

    This endpoint:
    1. Validates the report fields (nothing is stored on failure)
    2. Uploads attached photos (max MAX_PHOTOS_PER_REPORT, images only)
    3. Stores the report with status "pending" (uploaded photos are removed
       again if a later upload or the store write fails)
    4. Emails an alert for high severity reports after the response is sent

    Returns the created report with generated ID and timestamp.
    """
    fields, uploads = await _read_submission(request)
    report_in = validate_candidate(fields)

    if len(uploads) + len(report_in.photos) > settings.MAX_PHOTOS_PER_REPORT:
        raise ValidationError.for_field("photos", f"at most {settings.MAX_PHOTOS_PER_REPORT} photos per report")
    for upload in uploads:
        check_image(upload.filename, upload.content_type)

    photo_refs = []
    try:
        for upload in uploads:
            content = await upload.read()
            ref = await run_in_threadpool(photo_storage.save, upload.filename, content, upload.content_type)
            photo_refs.append(ref)

        logger.info(f"📝 POST /reports - location={report_in.location!r}, severity={report_in.severity.value}, photos={len(photo_refs)}")
        report = await run_in_threadpool(service.create_report, report_in, photo_refs, background_tasks)
    except Exception:
        # Nothing references these photos once the submission fails
        if photo_refs:
            await run_in_threadpool(photo_storage.discard, photo_refs)
        raise
    logger.info(f"✅ Report created successfully: {report.id}")
    return report


@router.get("", response_model=List[Report])
def get_reports(
    status_filter: Optional[ReportStatus] = Query(None, alias="status"),
    severity: Optional[Severity] = Query(None),
    q: Optional[str] = Query(None, max_length=200, description="Search location or report id"),
    service: ReportService = Depends(get_report_service),
):
    """All reports, most recent first. Filters are optional and combine with AND."""
    return service.list_reports(ReportFilter(status=status_filter, severity=severity, text=q))


@router.get("/{report_id}", response_model=Report)
def get_report(report_id: str, service: ReportService = Depends(get_report_service)):
    return service.get_report(report_id)


@router.put("/{report_id}/status", response_model=Report)
def update_report_status(
    report_id: str,
    update: StatusUpdate,
    service: ReportService = Depends(get_report_service),
):
    """
    Change a report's status.

    Any status may move to any other unless STATUS_TRANSITIONS restricts it.

    Raises:
        404: Report not found
        422: Unknown status or transition blocked by the allow-list
    """
    return service.set_status(report_id, update.status)
