"""Entry point serving the Service Booking API with Uvicorn.

Host and port are read from the environment variables ``API_HOST`` and
``API_PORT`` (defaults ``0.0.0.0`` and ``8000``).  Everything else is
configured through the variables documented in
``service_booking_api.app.core.config``; set them in the environment
before starting.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from service_booking_api.app.core.config import settings
from service_booking_api.app.main import app


async def run_api() -> None:
    """Start the API server and block until it stops."""
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Serving %s on %s:%s", settings.project_name, host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
