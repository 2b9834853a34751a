"""
healthreport

Aggregated healthcheck endpoints for ASGI web applications: concurrent
evaluation of named healthchecks, manual health switches, and a stable
JSON report mapped onto 200/503.
"""

__version__ = "1.0.0"

from healthreport.api.web import create_app, install_healthcheck
from healthreport.codec import dumps, loads_aggregate, loads_result
from healthreport.config import DEFAULT_HEALTHCHECK_ROOT, Settings, get_settings
from healthreport.exceptions import HealthcheckDecodeError, HealthcheckError
from healthreport.middleware.healthcheck import HealthcheckMiddleware, build_healthcheck_response
from healthreport.models.health import (
    AggregateHealthcheckResult,
    Health,
    Healthcheck,
    HealthcheckResult,
    HealthEvaluator,
    HealthStatus,
    merge_all,
)
from healthreport.services import (
    BaseHealthCheck,
    HealthSwitch,
    PredicateHealthCheck,
    always_healthy,
    always_unhealthy,
    as_healthcheck,
    evaluate_healthchecks,
    evaluate_to_healthcheck,
    get_server_main_switch,
    server_main,
)
from healthreport.timing import DEFAULT_TIMING, Duration, TimingSettings, fixed_timing

__all__ = [
    "AggregateHealthcheckResult",
    "BaseHealthCheck",
    "DEFAULT_HEALTHCHECK_ROOT",
    "DEFAULT_TIMING",
    "Duration",
    "Health",
    "Healthcheck",
    "HealthcheckDecodeError",
    "HealthcheckError",
    "HealthcheckMiddleware",
    "HealthcheckResult",
    "HealthEvaluator",
    "HealthStatus",
    "HealthSwitch",
    "PredicateHealthCheck",
    "Settings",
    "TimingSettings",
    "always_healthy",
    "always_unhealthy",
    "as_healthcheck",
    "build_healthcheck_response",
    "create_app",
    "dumps",
    "evaluate_healthchecks",
    "evaluate_to_healthcheck",
    "fixed_timing",
    "get_server_main_switch",
    "get_settings",
    "install_healthcheck",
    "loads_aggregate",
    "loads_result",
    "merge_all",
    "server_main",
]
