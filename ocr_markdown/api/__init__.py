"""
FastAPI application factory and API package.

Run with:
    uvicorn ocr_markdown.api:app --reload --port 8000

Or via main.py:
    python -m ocr_markdown --serve
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from ocr_markdown import __version__
from ocr_markdown.config import get_settings
from ocr_markdown.exceptions import INVALID_FILE_MESSAGE, OcrError
from ocr_markdown.api.routes import ocr_router, health_router

logger = logging.getLogger(__name__)

FRONTEND_DIR = Path(__file__).resolve().parent.parent.parent / "frontend"
GENERIC_ERROR_MESSAGE = "Failed to process PDF."
UPLOAD_PATH = "/api/ocr"


def _invalid_upload() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": INVALID_FILE_MESSAGE})


def create_app() -> FastAPI:
    """Application factory — create and configure the FastAPI instance."""
    settings = get_settings()

    application = FastAPI(
        title=settings.app_name,
        description="Upload a PDF, get Markdown back from the Mistral OCR API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(health_router, tags=["Health"])
    application.include_router(ocr_router, prefix="/api", tags=["OCR"])

    @application.exception_handler(OcrError)
    async def ocr_error_handler(request: Request, exc: OcrError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    # Malformed uploads never reach OcrService.validate; answer them the same way
    @application.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected {request.method} {request.url.path}: {len(exc.errors())} validation error(s)")
        if request.url.path == UPLOAD_PATH:
            return _invalid_upload()
        return JSONResponse(status_code=422, content={"error": "Invalid request."})

    @application.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if request.url.path == UPLOAD_PATH and exc.status_code in (400, 422):
            logger.warning(f"Rejected {request.method} {request.url.path}: {exc.detail}")
            return _invalid_upload()
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @application.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Error processing {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": str(exc) or GENERIC_ERROR_MESSAGE},
        )

    # Serve frontend static files
    if FRONTEND_DIR.exists():
        application.mount("/static", StaticFiles(directory=str(FRONTEND_DIR)), name="static")

        @application.get("/", include_in_schema=False)
        async def serve_frontend():
            return FileResponse(str(FRONTEND_DIR / "index.html"))

    logger.info(f"Created {settings.app_name} API (frontend: {FRONTEND_DIR.exists()})")
    return application


# Module-level instance for `uvicorn ocr_markdown.api:app`
app = create_app()
