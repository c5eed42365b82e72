"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 4000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import settings
from src.dr_common.errors import AppError, InternalError
from src.dr_common.logging_config import configure_logging
from src.dr_common.response import error_response
from src.dr_gateway.middleware.request_log import RequestLogMiddleware
from src.dr_ingest.api.router import router as ingest_router
from src.dr_ingest.infrastructure.upload_spool import ensure_upload_dir
from src.dr_playback.api.router import router as playback_router
from src.dr_playback.application.service import get_playback_manager
from src.dr_store.api.router import router as orderbook_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging + upload dir. Shutdown: stop any running playback loop."""
    # Startup
    configure_logging()
    ensure_upload_dir(settings.UPLOAD_DIR)
    yield
    # Shutdown
    await get_playback_manager().shutdown()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on [%s] %s", request.method, request.url.path, exc_info=exc
    )
    error = InternalError()
    resp = error_response(error.code, error.message)
    return JSONResponse(
        status_code=error.http_status,
        content=resp.model_dump(),
    )


app.include_router(ingest_router, prefix="/api/v1")
app.include_router(orderbook_router, prefix="/api/v1")
app.include_router(playback_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
