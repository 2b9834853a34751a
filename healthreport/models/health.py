from datetime import datetime, timezone
from enum import Enum
from functools import reduce
from typing import Awaitable, Callable, Iterable, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from healthreport.timing import Duration


class Health(str, Enum):
    """Pass/fail outcome of a healthcheck. Values are the wire discriminators."""

    HEALTHY = "passed"
    UNHEALTHY = "failed"

    def merge(self, other: "Health") -> "Health":
        """Healthy if and only if both operands are healthy."""
        if self is Health.HEALTHY and other is Health.HEALTHY:
            return Health.HEALTHY
        return Health.UNHEALTHY


def merge_all(values: Iterable[Health]) -> Health:
    """Fold health values together; an empty collection is healthy."""
    return reduce(Health.merge, values, Health.HEALTHY)


class HealthStatus(NamedTuple):
    """A health value with an optional message but no timing context."""

    health: Health
    message: Optional[str] = None


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("instants must be timezone-aware")
    return value.astimezone(timezone.utc)


class HealthcheckResult(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tested_at: datetime
    duration: Duration
    health: Health
    message: Optional[str] = None

    @field_validator("tested_at")
    @classmethod
    def validate_tested_at(cls, v: datetime) -> datetime:
        return _as_utc(v)


class AggregateHealthcheckResult(BaseModel):
    """Results of several healthchecks evaluated together."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    generation_time: datetime
    duration: Duration
    checks: dict[str, HealthcheckResult]

    @field_validator("generation_time")
    @classmethod
    def validate_generation_time(cls, v: datetime) -> datetime:
        return _as_utc(v)

    @property
    def health(self) -> Health:
        """Merged health across every check."""
        return merge_all(result.health for result in self.checks.values())


Healthcheck = Callable[[], Awaitable[HealthcheckResult]]
HealthEvaluator = Callable[[], Awaitable[HealthStatus]]
