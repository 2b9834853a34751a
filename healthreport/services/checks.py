"""
Built-in Healthchecks

- always_healthy / always_unhealthy: constant checks
- server_main: reports the server main switch
- PredicateHealthCheck: wraps an async boolean probe of a dependency
"""

import asyncio
from typing import Awaitable, Callable, Optional

import structlog

from healthreport.models.health import Health, Healthcheck, HealthcheckResult
from healthreport.services.health import BaseHealthCheck
from healthreport.services.switch import HealthSwitch
from healthreport.timing import DEFAULT_TIMING, Duration, TimingSettings

logger = structlog.get_logger(__name__)

UNAVAILABLE_MESSAGE = "Service unavailable"


async def always_healthy(timing: TimingSettings = DEFAULT_TIMING) -> HealthcheckResult:
    """A healthcheck that always passes."""
    return HealthcheckResult(
        tested_at=timing.now(),
        duration=Duration.ZERO,
        health=Health.HEALTHY,
    )


async def always_unhealthy(timing: TimingSettings = DEFAULT_TIMING) -> HealthcheckResult:
    """A healthcheck that always fails. Including it marks the service unhealthy."""
    return HealthcheckResult(
        tested_at=timing.now(),
        duration=Duration.ZERO,
        health=Health.UNHEALTHY,
        message=UNAVAILABLE_MESSAGE,
    )


def server_main(switch: HealthSwitch) -> Healthcheck:
    """Healthcheck reporting ``switch``, typically ``get_server_main_switch()`` at wiring time."""
    return switch.check


class PredicateHealthCheck(BaseHealthCheck):
    """
    Healthcheck backed by an async boolean probe.

    The probe's failure modes are converted into UNHEALTHY results:
    - probe returns False: ``failure_message``
    - probe raises: the exception text
    - probe exceeds ``timeout`` seconds: a timeout message
    """

    def __init__(
        self,
        predicate: Callable[[], Awaitable[bool]],
        failure_message: str = UNAVAILABLE_MESSAGE,
        timeout: Optional[float] = None,
        timing: TimingSettings = DEFAULT_TIMING,
        name: str | None = None,
    ):
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")
        self.predicate = predicate
        self.failure_message = failure_message
        self.timeout = timeout
        self.timing = timing
        self.name = name

    async def check(self) -> HealthcheckResult:
        start = self.timing.timestamp()
        try:
            is_healthy = await asyncio.wait_for(self.predicate(), timeout=self.timeout)
            health = Health.HEALTHY if is_healthy else Health.UNHEALTHY
            message = None if is_healthy else self.failure_message
        except asyncio.TimeoutError:
            health = Health.UNHEALTHY
            message = f"Timed out after {self.timeout}s"
        except Exception as e:
            logger.warning("Healthcheck probe raised", check=self.name, error=str(e))
            health = Health.UNHEALTHY
            message = str(e) or type(e).__name__

        tested_at = self.timing.now()
        stop = self.timing.timestamp()
        return HealthcheckResult(
            tested_at=tested_at,
            duration=self.timing.elapsed(start, stop),
            health=health,
            message=message,
        )
