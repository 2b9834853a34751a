"""
Tests for Built-in Healthchecks
"""

import asyncio
from functools import partial
from unittest.mock import AsyncMock

import pytest

from healthreport.codec import dumps
from healthreport.models.health import Health
from healthreport.services.aggregation import evaluate_healthchecks
from healthreport.services.checks import (
    PredicateHealthCheck,
    always_healthy,
    always_unhealthy,
    server_main,
)
from healthreport.services.switch import HealthSwitch, get_server_main_switch
from healthreport.timing import EPOCH, Duration


@pytest.mark.asyncio
async def test_always_healthy():
    result = await always_healthy()
    assert result.health is Health.HEALTHY
    assert result.message is None
    assert result.duration == Duration.ZERO


@pytest.mark.asyncio
async def test_always_unhealthy():
    result = await always_unhealthy()
    assert result.health is Health.UNHEALTHY
    assert result.message == "Service unavailable"


@pytest.mark.asyncio
async def test_constant_checks_use_injected_timing(epoch_timing):
    assert (await always_healthy(epoch_timing)).tested_at == EPOCH
    assert (await always_unhealthy(timing=epoch_timing)).tested_at == EPOCH


@pytest.mark.asyncio
async def test_always_healthy_report_is_byte_stable(epoch_timing):
    aggregate = await evaluate_healthchecks({"ok": partial(always_healthy, timing=epoch_timing)}, epoch_timing)
    assert dumps(aggregate) == (
        '{"duration_millis":0,"generated_at":"1970-01-01T00:00:00.000Z",'
        '"tests":{"ok":{"duration_millis":0,"result":"passed","tested_at":"1970-01-01T00:00:00.000Z"}}}'
    )


@pytest.mark.asyncio
async def test_server_main_uses_given_switch(epoch_timing):
    switch = HealthSwitch.server_main(timing=epoch_timing)
    check = server_main(switch)
    switch.disable()
    result = await check()
    assert result.health is Health.UNHEALTHY
    assert result.message == "Server disabled"


@pytest.mark.asyncio
async def test_server_main_with_process_switch(reset_server_main_switch):
    check = server_main(get_server_main_switch())
    get_server_main_switch().disable("draining")
    result = await check()
    assert result.message == "draining"


def test_server_main_requires_a_switch():
    with pytest.raises(TypeError):
        server_main()


class TestPredicateHealthCheck:
    """Tests for PredicateHealthCheck."""

    @pytest.mark.asyncio
    async def test_success(self, stepping_timing):
        predicate = AsyncMock(return_value=True)
        checker = PredicateHealthCheck(predicate, "Redis health check failed", timing=stepping_timing)

        result = await checker.check()

        predicate.assert_awaited_once()
        assert result.health is Health.HEALTHY
        assert result.message is None
        assert result.duration == Duration.from_millis("1.5")
        assert result.tested_at == stepping_timing.now()

    @pytest.mark.asyncio
    async def test_failure(self):
        checker = PredicateHealthCheck(AsyncMock(return_value=False), "Redis health check failed")
        result = await checker.check()
        assert result.health is Health.UNHEALTHY
        assert result.message == "Redis health check failed"

    @pytest.mark.asyncio
    async def test_exception_becomes_unhealthy(self):
        checker = PredicateHealthCheck(AsyncMock(side_effect=ConnectionError("connection refused")))
        result = await checker.check()
        assert result.health is Health.UNHEALTHY
        assert result.message == "connection refused"

    @pytest.mark.asyncio
    async def test_exception_without_text_uses_type_name(self):
        checker = PredicateHealthCheck(AsyncMock(side_effect=ConnectionError()))
        result = await checker.check()
        assert result.message == "ConnectionError"

    @pytest.mark.asyncio
    async def test_timeout(self):
        async def slow() -> bool:
            await asyncio.sleep(10)
            return True

        checker = PredicateHealthCheck(slow, timeout=0.01)
        result = await checker.check()
        assert result.health is Health.UNHEALTHY
        assert result.message == "Timed out after 0.01s"

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError):
            PredicateHealthCheck(AsyncMock(return_value=True), timeout=0)

    @pytest.mark.asyncio
    async def test_instance_is_callable_as_a_healthcheck(self):
        checker = PredicateHealthCheck(AsyncMock(return_value=True))
        result = await checker()
        assert result.health is Health.HEALTHY
