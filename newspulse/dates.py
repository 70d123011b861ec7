from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone

ONE_DAY = timedelta(days=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_day(moment: date | datetime) -> date:
    """Calendar day of ``moment``; aware datetimes are converted to UTC first."""
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(timezone.utc)
        return moment.date()
    return moment


def age_in_days(day: date | datetime, now: date | datetime) -> int:
    """Whole days between ``day`` and ``now``, never negative.

    Both sides are truncated to their calendar day, so an item dated on the
    same day as ``now`` is 0 days old whatever the hour.
    """
    delta = abs(as_day(now) - as_day(day))
    return math.ceil(delta / ONE_DAY)
