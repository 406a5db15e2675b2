"""
FastAPI application - primary inbound adapter.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gifzoom.core.exceptions import (
    ExportError,
    ExportInProgressError,
    InvalidEditError,
)
from gifzoom.infrastructure.config import Settings
from gifzoom.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)

settings = Settings()

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    setup_logging(settings.logging)
    logger.info("gifzoom backend starting up...")
    from gifzoom.infrastructure.container import ApplicationContainer
    app.state.container = ApplicationContainer(settings)
    yield
    logger.info("gifzoom backend shutting down...")


app = FastAPI(
    title="gifzoom API",
    description="Trim, crop-zoom and palette-optimize video clips into GIFs",
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.web.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidEditError)
async def invalid_edit_handler(request: Request, exc: InvalidEditError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(ExportInProgressError)
async def export_in_progress_handler(request: Request, exc: ExportInProgressError):
    return JSONResponse(status_code=409, content={"detail": str(exc), "job_id": exc.job_id})


@app.exception_handler(ExportError)
async def export_error_handler(request: Request, exc: ExportError):
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ── API routes ─────────────────────────────────────────────────

from gifzoom.adapters.inbound.api.pipeline import router as pipeline_router  # noqa: E402

app.include_router(pipeline_router, prefix="/api", tags=["pipeline"])


@app.get("/api/health")
async def health():
    return {
        "status": "ok",
        "version": APP_VERSION,
    }


def main() -> None:
    import uvicorn

    logger.info("Starting gifzoom API on %s:%d", settings.web.host, settings.web.port)
    uvicorn.run(
        "gifzoom.adapters.inbound.fastapi_app:app",
        host=settings.web.host,
        port=settings.web.port,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
