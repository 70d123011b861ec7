from __future__ import annotations

import datetime as dt

from .dates import as_day
from .models.news import NO_LINK, Category, NewsItem

FALLBACK_SOURCE = "NewsPulse"

_FALLBACK_MESSAGES: tuple[tuple[str, str], ...] = (
    (
        "Live news is temporarily unavailable",
        "The news search could not return fresh results right now, so this "
        "placeholder is shown instead. Use refresh or submit a new query to "
        "try again.",
    ),
    (
        "Welcome to NewsPulse",
        "NewsPulse searches for the most recent coverage of your topic and "
        "lets you narrow it down by period or by a custom date range. Live "
        "items appear here as soon as a search succeeds.",
    ),
)


def fallback_news(now: dt.date | dt.datetime) -> list[NewsItem]:
    """Fixed system-authored batch shown whenever a search cannot produce news."""
    today = as_day(now)
    return [
        NewsItem(
            id=position,
            title=title,
            url=NO_LINK,
            source=FALLBACK_SOURCE,
            date=today,
            category=Category.SYSTEM,
            abstract=abstract,
            days_ago=0,
        )
        for position, (title, abstract) in enumerate(_FALLBACK_MESSAGES, start=1)
    ]
