"""
Street Dog Alert - FastAPI Application Entry Point

Citizens report street-dog incidents; municipal staff triage them from an
admin-only dashboard. High-severity reports are emailed to the configured
recipients.

DESIGN PRINCIPLES:
- The document store is the durability boundary
- Alerts are best effort and never block a submission
- No enforced status workflow unless one is configured
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.core.exceptions import AppError, DependencyError
from app.core.settings import settings
from app.routes import appointments, auth, dashboard, health, reports


logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Citizen reporting of street-dog incidents with a municipal triage dashboard",
    debug=settings.DEBUG
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Validation, not-found, auth, conflict and dependency errors."""
    if isinstance(exc, DependencyError):
        logger.error(f"🔥 Dependency failure on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.to_detail(), "message": exc.message},
        headers=headers,
    )


# Pydantic validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Catch request schema errors and log them."""
    logger.info(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({"detail": exc.errors()}),
    )


# Global exception handler to catch ALL exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and log them with full traceback."""
    logger.error(
        f"🔥 Unhandled exception on {request.method} {request.url.path}\n"
        f"{''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Locally stored photos are served from the upload directory
if (settings.PHOTO_STORAGE or "local").lower() == "local":
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")


@app.on_event("startup")
async def startup_event():
    """
    Initialize the document store on application startup.
    A failure is logged; the app still starts and store calls will fail with 5xx.
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    try:
        from app.services.document_store import get_document_store

        store = get_document_store()
        logger.info(f"Document store ready: {store.name}")
    except Exception as e:
        logger.warning(f"Document store initialization failed: {e}")
        logger.warning("The app will start but database operations may fail.")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.APP_NAME}")


# Include routers
app.include_router(health.router)
app.include_router(reports.router)
app.include_router(dashboard.router)
app.include_router(auth.router)
app.include_router(appointments.router)


# Root endpoint
@app.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "reports": "/reports"
    }
