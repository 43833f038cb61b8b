"""
Time helpers shared across the application.

All timestamps are stored as naive UTC datetimes. Use utcnow_naive() inline;
for column defaults use the callable: default=utcnow_naive.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60


def utcnow_naive() -> datetime:
    """Return the current UTC time without tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def hours_ago(hours: float, now: Optional[datetime] = None) -> datetime:
    """Start of a trailing window of `hours` ending at `now`."""
    return (now or utcnow_naive()) - timedelta(hours=hours)


def days_ago(days: float, now: Optional[datetime] = None) -> datetime:
    return (now or utcnow_naive()) - timedelta(days=days)


def age_in_days(then: Optional[datetime], now: Optional[datetime] = None) -> float:
    """
    Fractional days elapsed between `then` and `now`.

    Aware datetimes are converted to naive UTC first so values read from
    different drivers compare cleanly. Returns 0.0 when `then` is missing.
    """
    if then is None:
        return 0.0
    if then.tzinfo is not None:
        then = then.astimezone(timezone.utc).replace(tzinfo=None)
    now = now or utcnow_naive()
    return (now - then).total_seconds() / SECONDS_PER_DAY


def isoformat_or_none(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
