"""TimeRange value object and IntervalResolver."""

import pytest

from app.domain.value_objects.time_range import TimeRange
from app.infrastructure.external.time_range import IntervalResolver


def test_time_range_parses_relative_durations() -> None:
    assert TimeRange("24h").seconds == 86400
    assert TimeRange(" 7D ").value == "7d"
    assert TimeRange("15m").seconds == 900
    assert str(TimeRange("1w")) == "1w"


def test_time_range_all_time() -> None:
    all_time = TimeRange.parse(None)

    assert all_time.is_all is True
    assert all_time.seconds is None
    assert str(all_time) == ""
    assert TimeRange.parse("") == all_time


@pytest.mark.parametrize("token", ["0h", "24", "h", "1y", "-1d", "1.5h"])
def test_time_range_rejects_bad_tokens(token: str) -> None:
    with pytest.raises(ValueError):
        TimeRange(token)


def test_time_range_is_immutable_and_comparable() -> None:
    tr = TimeRange("1h")

    with pytest.raises(AttributeError):
        tr.value = "2h"  # type: ignore[misc]
    assert tr == TimeRange("1h")


@pytest.mark.parametrize(
    ("token", "interval"),
    [
        ("1h", "1m"),
        ("6h", "5m"),
        ("24h", "15m"),
        ("3d", "1h"),
        ("7d", "3h"),
        ("30d", "12h"),
        ("52w", "1d"),
        ("", "1d"),
    ],
)
def test_interval_resolver(token: str, interval: str) -> None:
    assert IntervalResolver().resolve(TimeRange(token)) == interval


def test_interval_resolver_bucket_limit() -> None:
    assert IntervalResolver(max_buckets=24).resolve(TimeRange("24h")) == "1h"
    with pytest.raises(ValueError):
        IntervalResolver(max_buckets=0)
