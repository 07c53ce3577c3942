"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.core.settings import settings
from app.services.document_store import DocumentStore, get_document_store


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/db")
def database_health(store: DocumentStore = Depends(get_document_store)):
    """
    Database connectivity check.
    Fails with 503 (DependencyError) when the backend is unreachable.
    """
    result = store.ping()
    return {
        "status": "healthy",
        **result,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
