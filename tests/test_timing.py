"""
Tests for Timing Primitives

Tests Duration conversions and TimingSettings helpers.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from healthreport.timing import (
    DEFAULT_TIMING,
    EPOCH,
    NANOS_PER_SECOND,
    Duration,
    fixed_timing,
)


class TestDuration:
    """Tests for Duration."""

    def test_zero(self):
        assert Duration.ZERO.nanoseconds == 0
        assert Duration.ZERO.to_millis() == 0

    def test_rejects_negative(self):
        with pytest.raises(ValueError):
            Duration(-1)

    def test_rejects_non_integer(self):
        with pytest.raises(TypeError):
            Duration(1.5)

    @pytest.mark.parametrize(
        "millis,nanos",
        [
            (0, 0),
            (1, 1_000_000),
            ("1.5", 1_500_000),
            (Decimal("0.0001"), 100),
            (2.25, 2_250_000),
        ],
    )
    def test_from_millis(self, millis, nanos):
        assert Duration.from_millis(millis).nanoseconds == nanos

    def test_to_millis_is_exact(self):
        assert Duration(1_234_567).to_millis() == Decimal("1.234567")

    def test_from_ticks(self):
        # 3 ticks at 2 ticks/second
        assert Duration.from_ticks(3, 2) == Duration(1_500_000_000)

    def test_from_ticks_at_nanosecond_frequency(self):
        assert Duration.from_ticks(42, NANOS_PER_SECOND).nanoseconds == 42

    def test_from_ticks_rejects_bad_frequency(self):
        with pytest.raises(ValueError):
            Duration.from_ticks(1, 0)

    def test_from_ticks_rejects_negative_difference(self):
        with pytest.raises(ValueError):
            Duration.from_ticks(-5, 1_000)

    def test_to_ticks(self):
        assert Duration(1_500_000_000).to_ticks(10) == 15

    def test_timedelta_conversion(self):
        delta = timedelta(seconds=2, microseconds=5)
        assert Duration.from_timedelta(delta).nanoseconds == 2_000_005_000
        assert Duration.from_timedelta(delta).to_timedelta() == delta

    def test_ordering_and_addition(self):
        assert Duration(1) < Duration(2)
        assert Duration(1) + Duration(2) == Duration(3)

    def test_str(self):
        assert str(Duration.from_millis("2.5")) == "2.5ms"


class TestTimingSettings:
    """Tests for TimingSettings."""

    def test_default_now_is_utc(self):
        now = DEFAULT_TIMING.now()
        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)

    def test_default_counter_is_monotonic(self):
        first = DEFAULT_TIMING.timestamp()
        second = DEFAULT_TIMING.timestamp()
        assert second >= first

    def test_elapsed(self):
        assert DEFAULT_TIMING.elapsed(100, 2_100) == Duration(2_000)

    def test_fixed_timing(self):
        instant = datetime(2020, 2, 29, tzinfo=timezone.utc)
        timing = fixed_timing(instant, timestamp=7)
        assert timing.now() == instant
        assert timing.timestamp() == 7
        assert timing.elapsed(timing.timestamp(), timing.timestamp()) == Duration.ZERO

    def test_fixed_timing_defaults_to_epoch(self, epoch_timing):
        assert epoch_timing.now() == EPOCH
