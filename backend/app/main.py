"""
SOFT Projects Management System - Main FastAPI application
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from app.core.config import settings
from app.core.logging_config import configure_logging
from app.core.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    ExceptionHandlerMiddleware,
    error_payload,
)
from app.core.exceptions import SoftProjectsException
from app.applicants.dependencies import get_applicant_repository
from app.applicants.router import router as applicants_router
from app.reports.router import router as reports_router
from app.notifications.router import router as notifications_router

# Configure logging
configure_logging()
logger = structlog.get_logger()

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Applicant case management for the GIP and TUPAD programs",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

# Add middleware
app.add_middleware(ExceptionHandlerMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIDMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(SoftProjectsException)
async def soft_projects_exception_handler(request: Request, exc: SoftProjectsException):
    """Render domain errors as the standard error envelope"""
    if exc.status_code >= 500:
        logger.error("request_error", path=request.url.path, error=exc.message, type=exc.__class__.__name__)
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc))


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "storage": settings.STORAGE_MODE,
    }


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/api/docs",
    }


# Include routers
app.include_router(applicants_router)
app.include_router(reports_router)
app.include_router(notifications_router)


def current_repository():
    provider = app.dependency_overrides.get(get_applicant_repository, get_applicant_repository)
    return provider()


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    logger.info("application_starting", version=settings.APP_VERSION, storage=settings.STORAGE_MODE)
    try:
        await current_repository().initialize()
    except SoftProjectsException as e:
        # Requests will surface StorageError until the store is reachable
        logger.error("storage_init_failed", error=e.message)


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    await current_repository().close()
    logger.info("application_shutting_down")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
