"""
Middleware Module

ASGI middleware exposing the aggregate healthcheck endpoint.
"""

from healthreport.middleware.healthcheck import HealthcheckMiddleware, build_healthcheck_response

__all__ = [
    "HealthcheckMiddleware",
    "build_healthcheck_response",
]
