"""Application lifespan management (startup/shutdown hooks)."""

from __future__ import annotations

from contextlib import asynccontextmanager

from .config.settings import TidySettings, get_settings
from .observability.logger import configure_logging, get_logger
from .processing.browser_styles import PlaywrightStyleProbe
from .services.tidy_pipeline import TidyPipeline

logger = get_logger(__name__)

# Global app state populated during lifespan startup
app_state: dict = {}


def build_app_state(settings: TidySettings) -> dict:
    """Build layer dependencies from settings."""
    return {
        "pipeline": TidyPipeline.from_settings(settings),
        "style_probe": PlaywrightStyleProbe(
            timeout_ms=settings.render_timeout_ms,
            user_agent=settings.render_user_agent,
            viewport_width=settings.mobile_width,
        ),
    }


@asynccontextmanager
async def lifespan_manager():
    """Manage application lifespan (startup and shutdown)."""
    settings = get_settings()

    configure_logging()
    logger.info("starting_application", service_name=settings.service_name)

    app_state.update(build_app_state(settings))
    logger.info(
        "pipeline_configured",
        simulate_mobile=settings.simulate_mobile,
        mobile_width=settings.mobile_width,
    )

    logger.info("application_started")
    try:
        yield
    finally:
        app_state.clear()
        logger.info("application_shutdown_complete")
