"""
Structured Logging

structlog configuration shared by applications that mount the
healthcheck endpoint.
"""

import logging

import structlog

from healthreport.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog on top of stdlib logging."""
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level)

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format="%(message)s")
    root_logger.setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
