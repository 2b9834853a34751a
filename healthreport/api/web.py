"""
Healthcheck Web Wiring

Attaches healthcheck endpoints to FastAPI/Starlette applications.
"""

from contextlib import asynccontextmanager
from typing import Mapping

import structlog
from fastapi import FastAPI
from starlette.applications import Starlette

from healthreport.config import Settings, get_settings
from healthreport.logging import configure_logging
from healthreport.middleware.healthcheck import HealthcheckMiddleware
from healthreport.models.health import Healthcheck
from healthreport.services.switch import HealthSwitch, get_server_main_switch
from healthreport.timing import DEFAULT_TIMING, TimingSettings

logger = structlog.get_logger(__name__)


def install_healthcheck(
    app: Starlette,
    checks: Mapping[str, Healthcheck],
    path: str | None = None,
    timing: TimingSettings = DEFAULT_TIMING,
) -> None:
    """
    Serve ``checks`` at ``path`` in front of ``app``.

    May be called several times with different paths to expose one
    endpoint per hosted service. ``path`` defaults to the configured
    healthcheck root.
    """
    path = path or get_settings().healthcheck_root
    app.add_middleware(HealthcheckMiddleware, checks=checks, path=path, timing=timing)
    logger.debug("Healthcheck endpoint installed", path=path, checks=sorted(checks))


def create_app(
    settings: Settings | None = None,
    checks: Mapping[str, Healthcheck] | None = None,
    server_switch: HealthSwitch | None = None,
    timing: TimingSettings = DEFAULT_TIMING,
) -> FastAPI:
    """
    Create a FastAPI application with a healthcheck endpoint.

    The server main switch is enabled on startup and disabled on shutdown,
    so the endpoint reports 503 while the application is draining. When
    ``checks`` is omitted the endpoint reports that switch as ``main``.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    switch = server_switch or get_server_main_switch()
    if checks is None:
        checks = {"main": switch.check}

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage the server main switch over the application lifecycle."""
        logger.info("Starting application", healthcheck_root=settings.healthcheck_root)
        switch.enable()
        yield
        switch.disable()
        logger.info("Application shutdown complete")

    app = FastAPI(lifespan=lifespan)
    app.state.health_switch = switch
    install_healthcheck(app, checks, settings.healthcheck_root, timing)
    return app
