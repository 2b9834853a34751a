"""
Health Switches

A switch is a healthcheck whose result is toggled by an operator rather
than computed. Its state is an immutable record replaced by a single
reference assignment, so concurrent readers never observe a half-applied
toggle.
"""

from datetime import datetime
from typing import NamedTuple, Optional

import structlog

from healthreport.config import get_settings
from healthreport.models.health import Health, HealthcheckResult
from healthreport.services.health import BaseHealthCheck
from healthreport.timing import DEFAULT_TIMING, Duration, TimingSettings

logger = structlog.get_logger(__name__)

DEFAULT_DISABLED_MESSAGE = "Service disabled"
SERVER_ENABLED_MESSAGE = "Server enabled"
SERVER_DISABLED_MESSAGE = "Server disabled"

_UNSET = object()


class _SwitchState(NamedTuple):
    health: Health
    message: Optional[str]
    changed_at: datetime


class HealthSwitch(BaseHealthCheck):
    """
    A manually controlled healthcheck.

    Enabled switches report HEALTHY and disabled switches report UNHEALTHY.
    ``check()`` always stamps ``tested_at`` with the time of the read, while
    health and message reflect the most recent toggle.
    """

    def __init__(
        self,
        enabled_message: Optional[str] = None,
        disabled_message: Optional[str] = DEFAULT_DISABLED_MESSAGE,
        *,
        initial: Health = Health.HEALTHY,
        timing: TimingSettings = DEFAULT_TIMING,
        name: str | None = None,
    ):
        self._enabled_message = enabled_message
        self._disabled_message = disabled_message
        self._timing = timing
        self._name = name
        default_message = enabled_message if initial is Health.HEALTHY else disabled_message
        self._state = _SwitchState(initial, default_message, timing.now())

    @classmethod
    def server_main(
        cls,
        enabled_message: Optional[str] = SERVER_ENABLED_MESSAGE,
        disabled_message: Optional[str] = SERVER_DISABLED_MESSAGE,
        timing: TimingSettings = DEFAULT_TIMING,
    ) -> "HealthSwitch":
        """Create a switch configured as a server's main switch."""
        return cls(enabled_message, disabled_message, timing=timing, name="server_main")

    @property
    def health(self) -> Health:
        return self._state.health

    @property
    def message(self) -> Optional[str]:
        return self._state.message

    @property
    def last_changed(self) -> datetime:
        """Instant of the most recent toggle (or construction)."""
        return self._state.changed_at

    @property
    def is_enabled(self) -> bool:
        return self._state.health is Health.HEALTHY

    def enable(self, message: Optional[str] = _UNSET) -> None:  # type: ignore[assignment]
        """Report HEALTHY from now on, with ``message`` or the enabled default."""
        if message is _UNSET:
            message = self._enabled_message
        self._set(Health.HEALTHY, message)

    def disable(self, message: Optional[str] = _UNSET) -> None:  # type: ignore[assignment]
        """Report UNHEALTHY from now on, with ``message`` or the disabled default."""
        if message is _UNSET:
            message = self._disabled_message
        self._set(Health.UNHEALTHY, message)

    def _set(self, health: Health, message: Optional[str]) -> None:
        self._state = _SwitchState(health, message, self._timing.now())
        logger.info(
            "Health switch toggled",
            switch=self._name,
            health=health.name,
            message=message,
        )

    async def check(self) -> HealthcheckResult:
        state = self._state
        return HealthcheckResult(
            tested_at=self._timing.now(),
            duration=Duration.ZERO,
            health=state.health,
            message=state.message,
        )

    def __repr__(self) -> str:
        state = self._state
        return f"HealthSwitch(name={self._name!r}, health={state.health.name}, message={state.message!r})"


# Global server main switch
_server_main_switch: HealthSwitch | None = None


def get_server_main_switch() -> HealthSwitch:
    """Get or create the process-wide server main switch."""
    global _server_main_switch
    if _server_main_switch is None:
        settings = get_settings()
        _server_main_switch = HealthSwitch.server_main(
            settings.server_enabled_message,
            settings.server_disabled_message,
        )
    return _server_main_switch
