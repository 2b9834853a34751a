"""
Healthcheck Services

- BaseHealthCheck: base class for class-based healthchecks
- HealthSwitch: manually toggled healthcheck
- evaluate_healthchecks: concurrent aggregation engine
- Built-in checks: always_healthy, always_unhealthy, server_main, PredicateHealthCheck
"""

from healthreport.services.aggregation import (
    as_healthcheck,
    evaluate_healthchecks,
    evaluate_to_healthcheck,
)
from healthreport.services.checks import (
    PredicateHealthCheck,
    always_healthy,
    always_unhealthy,
    server_main,
)
from healthreport.services.health import BaseHealthCheck
from healthreport.services.switch import HealthSwitch, get_server_main_switch

__all__ = [
    "as_healthcheck",
    "evaluate_healthchecks",
    "evaluate_to_healthcheck",
    "PredicateHealthCheck",
    "always_healthy",
    "always_unhealthy",
    "server_main",
    "BaseHealthCheck",
    "HealthSwitch",
    "get_server_main_switch",
]
