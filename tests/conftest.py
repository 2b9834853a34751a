"""
Pytest Configuration and Fixtures

Provides deterministic timing, switches and helpers shared by the
healthcheck tests.
"""

from datetime import datetime, timezone
from typing import Generator

import pytest

from healthreport.config import Settings
from healthreport.models.health import Health, HealthcheckResult
from healthreport.services import switch as switch_module
from healthreport.services.switch import HealthSwitch
from healthreport.timing import EPOCH, Duration, TimingSettings, fixed_timing


# =============================================================================
# Timing Fixtures
# =============================================================================

@pytest.fixture
def epoch_timing() -> TimingSettings:
    """Timing fixed at the Unix epoch with no elapsed ticks."""
    return fixed_timing()


class SteppingCounter:
    """Counter that advances by ``step`` ticks on every read."""

    def __init__(self, step: int):
        self.step = step
        self.value = 0
        self.reads = 0

    def __call__(self) -> int:
        current = self.value
        self.value += self.step
        self.reads += 1
        return current


@pytest.fixture
def stepping_timing() -> TimingSettings:
    """Timing whose counter advances 1.5ms (at 1000 ticks/ms) per read."""
    return TimingSettings(
        now=lambda: datetime(2024, 5, 17, 12, 30, 45, 123000, tzinfo=timezone.utc),
        timestamp=SteppingCounter(1500),
        ticks_per_second=1_000_000,
    )


# =============================================================================
# Switch Fixtures
# =============================================================================

@pytest.fixture
def test_switch(epoch_timing: TimingSettings) -> HealthSwitch:
    """A switch with the disabled message used by the wire examples."""
    return HealthSwitch(None, "Test Disabled Message", timing=epoch_timing)


@pytest.fixture
def reset_server_main_switch() -> Generator[None, None, None]:
    """Discard the process-wide server main switch around a test."""
    switch_module._server_main_switch = None
    yield
    switch_module._server_main_switch = None


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        healthcheck_root="/healthcheck",
        log_level="DEBUG",
        log_json=False,
    )


# =============================================================================
# Result Helpers
# =============================================================================

def _make_result(
    health: Health = Health.HEALTHY,
    message: str | None = None,
    tested_at: datetime = EPOCH,
    duration: Duration = Duration.ZERO,
) -> HealthcheckResult:
    return HealthcheckResult(
        tested_at=tested_at,
        duration=duration,
        health=health,
        message=message,
    )


def _constant_check(result: HealthcheckResult):
    """A healthcheck that always returns ``result``."""

    async def check() -> HealthcheckResult:
        return result

    return check


@pytest.fixture
def make_result():
    """Factory for HealthcheckResult values defaulting to a healthy epoch result."""
    return _make_result


@pytest.fixture
def constant_check():
    """Factory for healthchecks that always return a given result."""
    return _constant_check


@pytest.fixture
def noop_check():
    """Always-healthy check with no message, stamped at the epoch."""
    return _constant_check(_make_result())
