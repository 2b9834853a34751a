"""
Pydantic Models

Core data structures:
- Health: pass/fail outcome with its merge rule
- HealthStatus: health plus message, without timing
- HealthcheckResult: one evaluated check
- AggregateHealthcheckResult: a named set of evaluated checks
"""

from healthreport.models.health import (
    AggregateHealthcheckResult,
    Health,
    Healthcheck,
    HealthcheckResult,
    HealthEvaluator,
    HealthStatus,
    merge_all,
)

__all__ = [
    "AggregateHealthcheckResult",
    "Health",
    "Healthcheck",
    "HealthcheckResult",
    "HealthEvaluator",
    "HealthStatus",
    "merge_all",
]
