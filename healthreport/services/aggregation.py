"""
Healthcheck Aggregation

Evaluates a named set of healthchecks concurrently and folds the results
into a single aggregate.
"""

import asyncio
from typing import Mapping

import structlog

from healthreport.models.health import (
    AggregateHealthcheckResult,
    Healthcheck,
    HealthcheckResult,
    HealthEvaluator,
)
from healthreport.timing import DEFAULT_TIMING, TimingSettings

logger = structlog.get_logger(__name__)


async def _evaluate_named(name: str, healthcheck: Healthcheck) -> tuple[str, HealthcheckResult]:
    result = await healthcheck()
    return name, result


async def evaluate_healthchecks(
    checks: Mapping[str, Healthcheck],
    timing: TimingSettings = DEFAULT_TIMING,
) -> AggregateHealthcheckResult:
    """
    Evaluate every healthcheck in ``checks`` concurrently.

    The duration covers the whole batch: the counter is read before any
    check starts and again after the last one finishes. Exceptions raised
    by a check are not caught and fail the whole evaluation.

    Args:
        checks: Healthchecks keyed by the name they are reported under.
        timing: Clock sources for the generation time and duration.

    Returns:
        AggregateHealthcheckResult with one entry per check.
    """
    start = timing.timestamp()
    results = await asyncio.gather(*[
        _evaluate_named(name, healthcheck)
        for name, healthcheck in checks.items()
    ])
    generation_time = timing.now()
    stop = timing.timestamp()

    aggregate = AggregateHealthcheckResult(
        generation_time=generation_time,
        duration=timing.elapsed(start, stop),
        checks=dict(results),
    )

    logger.debug(
        "Evaluated healthchecks",
        count=len(aggregate.checks),
        health=aggregate.health.name,
        duration_ms=float(aggregate.duration.to_millis()),
    )
    return aggregate


async def evaluate_to_healthcheck(
    evaluator: HealthEvaluator,
    timing: TimingSettings = DEFAULT_TIMING,
) -> HealthcheckResult:
    """Run a health evaluator and stamp its status with timing information."""
    start = timing.timestamp()
    health, message = await evaluator()
    tested_at = timing.now()
    stop = timing.timestamp()
    return HealthcheckResult(
        tested_at=tested_at,
        duration=timing.elapsed(start, stop),
        health=health,
        message=message,
    )


def as_healthcheck(
    evaluator: HealthEvaluator,
    timing: TimingSettings = DEFAULT_TIMING,
) -> Healthcheck:
    """Adapt a health evaluator into a healthcheck."""

    async def healthcheck() -> HealthcheckResult:
        return await evaluate_to_healthcheck(evaluator, timing)

    return healthcheck
