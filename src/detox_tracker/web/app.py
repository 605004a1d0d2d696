"""FastAPI web application."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..services.clearance import InvalidUsageFrequencyError
from ..services.storage import StoreUnavailableError
from ..utils.config import get_settings
from .routes import health, logs, pages, progress, results

logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="CyberDetox Tracker",
    description="Symptom logging, test results and clearance estimates",
    version="0.1.0",
)

# Include routers
app.include_router(pages.router, tags=["pages"])
app.include_router(logs.router, prefix="/api/logs", tags=["logs"])
app.include_router(results.router, prefix="/api/test-results", tags=["test results"])
app.include_router(health.router, prefix="/api/health-tracking", tags=["health"])
app.include_router(progress.router, prefix="/api/progress", tags=["progress"])


@app.exception_handler(StoreUnavailableError)
async def store_unavailable(request: Request, exc: StoreUnavailableError):
    logger.error("Storage unavailable for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(InvalidUsageFrequencyError)
async def invalid_usage_frequency(request: Request, exc: InvalidUsageFrequencyError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
