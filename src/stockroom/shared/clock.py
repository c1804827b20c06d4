"""Timestamp helpers shared by the aggregates."""

from datetime import UTC, datetime, timedelta

_TICK = timedelta(microseconds=1)


def utcnow():
    return datetime.now(UTC)


def next_timestamp(previous):
    """Return the current time, nudged past ``previous`` when the clock has not moved."""
    now = utcnow()
    if previous is None:
        return now

    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=UTC)
    if now <= previous:
        return previous + _TICK
    return now
