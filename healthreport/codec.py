"""
JSON Codec

Explicit encode/decode pairs for the healthcheck types. Encoding produces
plain JSON-compatible values; ``dumps`` renders them with sorted keys and
no whitespace so output is byte-stable.

Wire formats:
- durations: milliseconds rounded half-up to one decimal place
- instants: ``yyyy-MM-ddTHH:mm:ss.fffZ`` (UTC, exactly three fraction digits)
- health: ``"passed"`` / ``"failed"``
"""

import json
import re
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import singledispatch
from typing import Any, Mapping

from healthreport.exceptions import HealthcheckDecodeError
from healthreport.models.health import AggregateHealthcheckResult, Health, HealthcheckResult
from healthreport.timing import Duration

_ONE_DECIMAL = Decimal("0.1")
_MAX_DURATION_MILLIS = Duration.from_timedelta(timedelta.max).to_millis()
_INSTANT_PATTERN = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})\.([0-9]{3})Z"
)


# =============================================================================
# Scalars
# =============================================================================

def encode_duration(duration: Duration) -> int | float:
    millis = duration.to_millis().quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
    if millis == millis.to_integral_value():
        return int(millis)
    return float(millis)


def decode_duration(value: Any, field: str | None = None) -> Duration:
    """Decode milliseconds given as a JSON number or a numeric string."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        raise HealthcheckDecodeError(f"Unable to parse {value!r} as a number", field)
    try:
        millis = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise HealthcheckDecodeError(f"Unable to parse {value!r} as a number", field) from None
    if not millis.is_finite():
        raise HealthcheckDecodeError(f"Unable to parse {value!r} as a number", field)
    if millis > _MAX_DURATION_MILLIS:
        raise HealthcheckDecodeError(f"Duration {value!r}ms is out of range", field)
    try:
        return Duration.from_millis(millis)
    except (ValueError, ArithmeticError) as e:
        raise HealthcheckDecodeError(str(e), field) from e


def encode_instant(instant: datetime) -> str:
    i = instant.astimezone(timezone.utc)
    return (
        f"{i.year:04d}-{i.month:02d}-{i.day:02d}"
        f"T{i.hour:02d}:{i.minute:02d}:{i.second:02d}.{i.microsecond // 1000:03d}Z"
    )


def decode_instant(value: Any, field: str | None = None) -> datetime:
    """Strictly parse a millisecond-precision ISO-8601 UTC timestamp."""
    match = _INSTANT_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise HealthcheckDecodeError(f"Unable to parse {value!r} as an ISO-8601 datetime", field)
    year, month, day, hour, minute, second, millis = (int(g) for g in match.groups())
    try:
        return datetime(
            year, month, day, hour, minute, second, millis * 1000, tzinfo=timezone.utc
        )
    except ValueError:
        raise HealthcheckDecodeError(
            f"Unable to parse {value!r} as an ISO-8601 datetime", field
        ) from None


def encode_health(health: Health) -> str:
    return health.value


def decode_health(value: Any, field: str | None = None) -> Health:
    if isinstance(value, str):
        try:
            return Health(value)
        except ValueError:
            pass
    raise HealthcheckDecodeError(f"couldn't deserialize {value!r} to Health", field)


# =============================================================================
# Records
# =============================================================================

def _require_object(value: Any, field: str | None) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise HealthcheckDecodeError(f"expected a JSON object, got {value!r}", field)
    return value


def _field_path(path: str | None, key: str) -> str:
    return f"{path}.{key}" if path else key


def _require_field(obj: Mapping[str, Any], key: str, path: str | None) -> Any:
    if key not in obj:
        raise HealthcheckDecodeError("missing required field", _field_path(path, key))
    return obj[key]


def encode_result(result: HealthcheckResult) -> dict[str, Any]:
    encoded: dict[str, Any] = {
        "duration_millis": encode_duration(result.duration),
        "tested_at": encode_instant(result.tested_at),
        "result": encode_health(result.health),
    }
    if result.message is not None:
        encoded["message"] = result.message
    return encoded


def decode_result(value: Any, path: str | None = None) -> HealthcheckResult:
    obj = _require_object(value, path)
    message = obj.get("message")
    if message is not None and not isinstance(message, str):
        raise HealthcheckDecodeError(
            f"expected a string, got {message!r}", _field_path(path, "message")
        )
    return HealthcheckResult(
        duration=decode_duration(
            _require_field(obj, "duration_millis", path), _field_path(path, "duration_millis")
        ),
        health=decode_health(_require_field(obj, "result", path), _field_path(path, "result")),
        message=message,
        tested_at=decode_instant(
            _require_field(obj, "tested_at", path), _field_path(path, "tested_at")
        ),
    )


def encode_aggregate(aggregate: AggregateHealthcheckResult) -> dict[str, Any]:
    return {
        "generated_at": encode_instant(aggregate.generation_time),
        "duration_millis": encode_duration(aggregate.duration),
        "tests": {name: encode_result(result) for name, result in aggregate.checks.items()},
    }


def decode_aggregate(value: Any) -> AggregateHealthcheckResult:
    obj = _require_object(value, None)
    tests = _require_object(_require_field(obj, "tests", None), "tests")
    return AggregateHealthcheckResult(
        generation_time=decode_instant(_require_field(obj, "generated_at", None), "generated_at"),
        duration=decode_duration(_require_field(obj, "duration_millis", None), "duration_millis"),
        checks={name: decode_result(result, f"tests.{name}") for name, result in tests.items()},
    )


# =============================================================================
# Dispatch
# =============================================================================

@singledispatch
def encode(value: Any) -> Any:
    """Encode a healthcheck type into JSON-compatible values."""
    raise TypeError(f"Cannot encode {type(value).__name__} as healthcheck JSON")


encode.register(Health, encode_health)
encode.register(Duration, encode_duration)
encode.register(datetime, encode_instant)
encode.register(HealthcheckResult, encode_result)
encode.register(AggregateHealthcheckResult, encode_aggregate)


def dumps(value: Any) -> str:
    """Render a healthcheck type as compact JSON with sorted keys."""
    return json.dumps(encode(value), sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _loads(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except ValueError as e:
        raise HealthcheckDecodeError(f"invalid JSON: {e}") from e


def loads_health(text: str | bytes) -> Health:
    return decode_health(_loads(text))


def loads_result(text: str | bytes) -> HealthcheckResult:
    return decode_result(_loads(text))


def loads_aggregate(text: str | bytes) -> AggregateHealthcheckResult:
    return decode_aggregate(_loads(text))
