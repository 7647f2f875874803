"""Image Gallery Manager - FastAPI Entry Point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .domain import (
    BackendUnavailable,
    GalleryError,
    NotFound,
    PartialBatchFailure,
    ValidationFailed,
)
from .infrastructure import create_backend
from .routes.gallery import router as gallery_router

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: open the configured record store and asset store
    app.state.backend = await create_backend()
    yield
    # Shutdown
    await app.state.backend.close()


app = FastAPI(title="Image Gallery Manager", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GalleryError)
async def gallery_error_handler(request: Request, exc: GalleryError):
    """Map domain errors to HTTP responses."""
    if isinstance(exc, ValidationFailed):
        return JSONResponse(status_code=400, content={"detail": str(exc)})
    if isinstance(exc, NotFound):
        return JSONResponse(status_code=404, content={"detail": "Item not found"})
    if isinstance(exc, PartialBatchFailure):
        return JSONResponse(
            status_code=502,
            content={
                "detail": str(exc),
                "failed_index": exc.failed_index,
                "succeeded": exc.succeeded,
            },
        )
    if isinstance(exc, BackendUnavailable):
        logger.error("%s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": "Storage backend unavailable"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.include_router(gallery_router)
