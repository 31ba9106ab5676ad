"""
Main entrypoint for the DVD Rental API.

This module assembles the FastAPI application, sets up logging,
attaches the database handle and includes the routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn,
e.g.::

    uvicorn dvd_rental_api.app.main:app --port 8080

or through ``run.py``, which honours the ``ADDR`` setting.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.endpoints import health
from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.errors import RentalApiError
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into ``"field: message; ..."``."""
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as a JSON object with a single ``error`` field."""

    @app.exception_handler(RentalApiError)
    async def rental_api_error_handler(request: Request, exc: RentalApiError) -> JSONResponse:
        return _error(exc.status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "internal server error")


def create_app(
    cfg: Optional[Settings] = None, database: Optional[Database] = None
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    cfg : Optional[Settings]
        Settings to use.  Defaults to the module-level settings read
        from the environment.
    database : Optional[Database]
        Store handle to inject.  Defaults to a handle built from
        ``cfg``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    cfg = cfg or default_settings
    setup_logging(cfg.log_level, cfg.log_file or None)

    app = FastAPI(title=cfg.project_name, version=cfg.api_version, debug=cfg.debug)
    app.state.db = database or Database.from_settings(cfg)

    app.include_router(api_router, prefix="/api")
    app.include_router(health.router, tags=["health"])
    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Refuse to start against an unreachable store, then bring the
        # schema up to date.
        db: Database = app.state.db
        db.ping()
        db.init_db()
        logger.info("Using database %s", db.path)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
