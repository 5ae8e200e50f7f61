from datetime import UTC, datetime, timedelta, timezone

import pytest

from abtech.adapters.clock import FixedClock, SystemClock


def test_system_clock_is_utc():
    now = SystemClock().now_utc()

    assert now.utcoffset() == timedelta(0)
    assert abs((datetime.now(UTC) - now).total_seconds()) < 1.0


def test_fixed_clock_normalizes_to_utc():
    plus_two = timezone(timedelta(hours=2))
    clock = FixedClock(datetime(2025, 6, 1, 14, 0, tzinfo=plus_two))

    assert clock.now_utc() == datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
    assert clock.now_utc().tzinfo == UTC


def test_fixed_clock_advance():
    clock = FixedClock(datetime(2025, 6, 1, tzinfo=UTC))

    clock.advance(hours=24)

    assert clock.now_utc() == datetime(2025, 6, 2, tzinfo=UTC)


def test_fixed_clock_rejects_naive():
    with pytest.raises(ValueError):
        FixedClock(datetime(2025, 6, 1))
