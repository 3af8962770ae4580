"""Tests for the injectable clock."""

from datetime import datetime, timedelta, timezone

from hr_kernel.domain.clock import DeterministicClock, SystemClock


def test_system_clock_is_utc_aware():
    now = SystemClock().now()
    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)


def test_deterministic_clock_repeats():
    clock = DeterministicClock()
    assert clock.now() == clock.now() == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)


def test_advance_and_set_time():
    clock = DeterministicClock(datetime(2024, 6, 30, 23, 59, 59, tzinfo=timezone.utc))

    clock.advance()
    assert clock.now() == datetime(2024, 7, 1, tzinfo=timezone.utc)

    clock.set_time(datetime(2025, 1, 1, tzinfo=timezone.utc))
    assert clock.now() == datetime(2025, 1, 1, tzinfo=timezone.utc)
