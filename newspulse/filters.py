from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

from .dates import age_in_days
from .models.news import DateRange, FilterCriteria, NewsItem, RollingWindow

PRESET_PERIODS: tuple[int, ...] = (1, 3, 7, 14, 30)
DEFAULT_WINDOW_DAYS = 7


def effective_criteria(criteria: FilterCriteria) -> RollingWindow | DateRange:
    """Incomplete or inverted ranges fall back to the default rolling window."""
    if isinstance(criteria, DateRange) and not criteria.is_active:
        return RollingWindow(max_days_ago=DEFAULT_WINDOW_DAYS)
    return criteria


def apply_filter(
    items: Iterable[NewsItem],
    criteria: FilterCriteria,
    now: dt.date | dt.datetime,
) -> list[NewsItem]:
    """Select the items matching ``criteria``, keeping input order.

    Returned items carry ``days_ago`` recomputed for ``now``; the input is
    left untouched.
    """
    active = effective_criteria(criteria)
    selected: list[NewsItem] = []
    for item in items:
        if isinstance(active, DateRange):
            keep = active.start <= item.date <= active.end
        else:
            keep = age_in_days(item.date, now) <= active.max_days_ago
        if keep:
            selected.append(item.aged(now))
    return selected


def build_criteria(
    period: int | None = None,
    start: dt.date | None = None,
    end: dt.date | None = None,
) -> FilterCriteria:
    if start is not None or end is not None:
        return DateRange(start=start, end=end)
    if period is None:
        period = DEFAULT_WINDOW_DAYS
    return RollingWindow(max_days_ago=period)
