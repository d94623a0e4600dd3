"""Millisecond and microsecond timestamp utilities."""

import time
from datetime import datetime, timedelta, timezone

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
MILLIS_PER_DAY = 1000 * 60 * 60 * 24


def now_millis():
    """Current time in milliseconds since Unix epoch."""
    return time.time_ns() // 1_000_000


def now_micros():
    """Current time in microseconds since Unix epoch."""
    return time.time_ns() // 1_000


def _leap_days_before(year):
    # Leap days in proleptic Gregorian years 1..year-1, floor division keeps it valid below year 1
    previous = year - 1
    return previous // 4 - previous // 100 + previous // 400


def year_start_millis(year):
    """Milliseconds from Unix epoch to YEAR-01-01T00:00:00Z, for any integer year."""
    days = 365 * (year - 1970) + _leap_days_before(year) - _leap_days_before(1970)
    return days * MILLIS_PER_DAY


def from_millis(epoch_ms, utc=False):
    """Aware datetime for milliseconds since Unix epoch, in UTC or local time.

    Raises OverflowError when the instant is outside the datetime range.
    """
    dt = UNIX_EPOCH + timedelta(milliseconds=epoch_ms)
    return dt if utc else dt.astimezone()


def format_timestamp(epoch_us=None):
    """Format timestamp as ISO 8601 with microseconds."""
    if epoch_us is None:
        epoch_us = now_micros()

    dt = UNIX_EPOCH + timedelta(microseconds=epoch_us)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z"
