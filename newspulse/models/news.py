from __future__ import annotations

import datetime as dt
import re
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..dates import age_in_days

NO_LINK = "#"


class Category(str, Enum):
    GENERATIVE_AI = "Generative-AI"
    ROBOTICS = "Robotics"
    MARKETS = "Markets"
    EVENTS = "Events"
    SECURITY = "Security"
    TRENDS = "Trends"
    REPORTS = "Reports"
    AGI = "AGI"
    INNOVATION = "Innovation"
    POLICY = "Policy"
    PRIVACY = "Privacy"
    UNCATEGORIZED = "Uncategorized"
    # Reserved for fallback and other system-authored items.
    SYSTEM = "System"

    @classmethod
    def selectable(cls) -> list[Category]:
        """Categories the search API is allowed to assign."""
        return [c for c in cls if c not in (cls.UNCATEGORIZED, cls.SYSTEM)]

    @classmethod
    def normalize(cls, value: str) -> Category:
        key = _category_key(value)
        return _CATEGORY_LOOKUP.get(key, cls.UNCATEGORIZED)


def _category_key(value: str) -> str:
    return re.sub(r"[\s_\-]+", "-", value.strip().lower())


_CATEGORY_LOOKUP: dict[str, Category] = {
    _category_key(c.value): c for c in Category.selectable()
}
_CATEGORY_LOOKUP.update(
    {
        _category_key("IA Generativa"): Category.GENERATIVE_AI,
        _category_key("Robotica"): Category.ROBOTICS,
        _category_key("Mercati"): Category.MARKETS,
        _category_key("Eventi"): Category.EVENTS,
        _category_key("Sicurezza"): Category.SECURITY,
        _category_key("Tendenze"): Category.TRENDS,
        _category_key("Report"): Category.REPORTS,
        _category_key("Innovazione"): Category.INNOVATION,
    }
)


class NewsItem(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    id: int | str = Field(description="Identifier, unique within one batch only")
    title: str = Field(description="Article headline")
    url: str = Field(NO_LINK, description="Article URL, '#' when there is no link")
    source: str = Field(description="Publisher or outlet name")
    date: dt.date = Field(description="Publication day")
    category: Category = Field(description="Normalized topic category")
    abstract: str = Field(description="Two or three sentence summary")
    days_ago: int = Field(
        0, ge=0, description="Age in days relative to the instant it was stamped"
    )

    @property
    def has_link(self) -> bool:
        return self.url != NO_LINK

    def aged(self, now: dt.date | dt.datetime) -> NewsItem:
        return self.model_copy(update={"days_ago": age_in_days(self.date, now)})


class SearchStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FALLBACK_APPLIED = "fallback_applied"


class SearchResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    query: str = Field(description="Query the run was issued for")
    status: SearchStatus
    items: list[NewsItem] = Field(default_factory=list)
    completed_at: dt.datetime = Field(description="Instant the run settled")

    @property
    def used_fallback(self) -> bool:
        return self.status is SearchStatus.FALLBACK_APPLIED


class RollingWindow(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    mode: Literal["rolling"] = "rolling"
    max_days_ago: int = Field(7, ge=0)


class DateRange(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    mode: Literal["range"] = "range"
    start: dt.date | None = None
    end: dt.date | None = None

    @property
    def is_active(self) -> bool:
        if self.start is None or self.end is None:
            return False
        return self.start <= self.end


FilterCriteria = Annotated[RollingWindow | DateRange, Field(discriminator="mode")]


class NewsView(BaseModel):
    """Filtered snapshot of the current result, ready for rendering."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    query: str
    status: SearchStatus
    completed_at: dt.datetime
    criteria: FilterCriteria
    total: int = Field(description="Items in the unfiltered result")
    items: list[NewsItem] = Field(default_factory=list)
