"""FastAPI server runner."""

from __future__ import annotations

import uvicorn

from .config.settings import get_settings
from .http_app import app
from .observability.logger import get_logger

logger = get_logger(__name__)


def build_server_config(settings) -> uvicorn.Config:
    """uvicorn config for the reader API.

    uvicorn follows ``LOG_LEVEL``. Access lines are off; the app logs each request.
    """
    return uvicorn.Config(
        app=app,
        host=settings.http_host,
        port=settings.http_port,
        log_level=settings.log_level.lower(),
        access_log=False,
        loop="asyncio",
    )


async def run_http_server() -> None:
    settings = get_settings()
    if not settings.http_enable:
        logger.info("http_server_disabled")
        return

    server = uvicorn.Server(build_server_config(settings))

    logger.info("http_server_started", address=f"http://{settings.http_host}:{settings.http_port}")
    await server.serve()
