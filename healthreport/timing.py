"""
Timing Primitives

Wall-clock instants are tz-aware UTC datetimes. Elapsed time is measured
with a monotonic counter and held as a Duration in integer nanoseconds;
milliseconds only appear at the JSON boundary.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, ClassVar

NANOS_PER_MICROSECOND = 1_000
NANOS_PER_MILLISECOND = 1_000_000
NANOS_PER_SECOND = 1_000_000_000

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, order=True)
class Duration:
    """A non-negative span of time with nanosecond precision."""

    nanoseconds: int = 0

    ZERO: ClassVar["Duration"]

    def __post_init__(self) -> None:
        if not isinstance(self.nanoseconds, int) or isinstance(self.nanoseconds, bool):
            raise TypeError("Duration.nanoseconds must be an int")
        if self.nanoseconds < 0:
            raise ValueError(f"Duration cannot be negative: {self.nanoseconds}ns")

    @classmethod
    def from_millis(cls, millis: Decimal | int | float | str) -> "Duration":
        """Build a duration from a (possibly fractional) millisecond count."""
        value = millis if isinstance(millis, Decimal) else Decimal(str(millis))
        nanos = (value * NANOS_PER_MILLISECOND).to_integral_value(rounding=ROUND_HALF_UP)
        return cls(int(nanos))

    @classmethod
    def from_ticks(cls, ticks: int, ticks_per_second: int) -> "Duration":
        """Convert a high-resolution timestamp difference into a duration."""
        if ticks_per_second <= 0:
            raise ValueError("ticks_per_second must be positive")
        return cls(ticks * NANOS_PER_SECOND // ticks_per_second)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "Duration":
        micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
        return cls(micros * NANOS_PER_MICROSECOND)

    def to_millis(self) -> Decimal:
        """Exact millisecond value of this duration."""
        return Decimal(self.nanoseconds) / NANOS_PER_MILLISECOND

    def to_ticks(self, ticks_per_second: int) -> int:
        return self.nanoseconds * ticks_per_second // NANOS_PER_SECOND

    def to_timedelta(self) -> timedelta:
        # timedelta is microsecond precision
        return timedelta(microseconds=self.nanoseconds // NANOS_PER_MICROSECOND)

    def __add__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.nanoseconds + other.nanoseconds)

    def __str__(self) -> str:
        return f"{self.to_millis()}ms"


Duration.ZERO = Duration(0)


def utc_now() -> datetime:
    """Current wall-clock time as a tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TimingSettings:
    """
    Clock sources used by every timing-dependent operation.

    Attributes:
        now: Returns the current instant (tz-aware UTC datetime).
        timestamp: Returns a monotonic high-resolution counter value.
        ticks_per_second: Frequency of the ``timestamp`` counter.
    """

    now: Callable[[], datetime]
    timestamp: Callable[[], int]
    ticks_per_second: int

    def elapsed(self, start: int, stop: int) -> Duration:
        """Duration between two counter readings."""
        return Duration.from_ticks(stop - start, self.ticks_per_second)


DEFAULT_TIMING = TimingSettings(
    now=utc_now,
    timestamp=time.perf_counter_ns,
    ticks_per_second=NANOS_PER_SECOND,
)


def fixed_timing(instant: datetime = EPOCH, timestamp: int = 0, ticks_per_second: int = 1) -> TimingSettings:
    """Timing settings that always report the same instant and counter value."""
    return TimingSettings(
        now=lambda: instant,
        timestamp=lambda: timestamp,
        ticks_per_second=ticks_per_second,
    )
