"""
Main entrypoint for the Storefront API.

This module assembles the FastAPI application: logging, CORS, error
handlers and the versioned router.  ``create_app`` builds the app,
which is then instantiated at module import time as ``app``::

    uvicorn storefront_api.app.main:app --reload

The v1 router is mounted twice, under ``/api`` for the browser
client and under ``/api/v1``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import StorefrontError
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Render service errors and body validation errors as ``{"error": ...}``."""

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured application instance.  The database is created
        and seeded by the startup event.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(v1_router, prefix="/api")
    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/", tags=["root"])
    async def read_root() -> dict:
        return {"message": f"{settings.project_name} v{settings.api_version} running"}

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()
        logger.info("%s ready", settings.project_name)

    return app


app = create_app()
