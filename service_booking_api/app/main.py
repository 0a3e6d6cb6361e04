"""
Main entrypoint for the Service Booking API.

This module assembles the FastAPI application, sets up logging and
mounts the procedure transport.  ``create_app`` builds and configures
the app, which is then instantiated at module import time as ``app``
so it can be served directly, e.g.::

    uvicorn service_booking_api.app.main:app --reload
"""

from fastapi import FastAPI

from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .rpc.transport import router as rpc_router


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, mounts every procedure under ``/api/trpc`` and
    registers a startup hook applying database migrations.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.include_router(rpc_router, prefix="/api/trpc", tags=["rpc"])

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()

    return app


app = create_app()
