from __future__ import annotations

import datetime as dt
import json
import re
from typing import Any

from dateutil.parser import isoparse
from pydantic import (
    BaseModel,
    ConfigDict,
    StrictStr,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from .dates import as_day
from .errors import NewsValidationError, ValidationErrorKind
from .logging import get_logger
from .models.news import NO_LINK, Category, NewsItem

logger = get_logger(__name__)

NEWS_FIELD = "news"

# Year, month and day must all be present; nothing is filled in from the clock.
_FULL_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}(?:[T ]|\Z)")


class NewsRecord(BaseModel):
    """One record of the ``news`` array exactly as the search API returns it."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    id: Any = None
    title: StrictStr
    url: StrictStr
    source: StrictStr
    date: StrictStr
    category: StrictStr
    abstract: StrictStr

    @field_validator("title", "source", "abstract")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("date")
    @classmethod
    def _known_day(cls, value: str, info: ValidationInfo) -> str:
        day = _parse_day(value)
        if day is None:
            raise ValueError(f"unparseable date {value!r}")
        today = (info.context or {}).get("today")
        if today is not None and day > today:
            raise ValueError(f"date {day.isoformat()} is after {today.isoformat()}")
        return day.isoformat()

    def to_item(self, position: int, now: dt.date | dt.datetime) -> NewsItem:
        item = NewsItem(
            id=_batch_id(self.id, position),
            title=self.title,
            url=self.url or NO_LINK,
            source=self.source,
            date=dt.date.fromisoformat(self.date),
            category=Category.normalize(self.category),
            abstract=self.abstract,
        )
        return item.aged(now)


def _batch_id(value: Any, position: int) -> int | str:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        return position
    return value


def _parse_day(value: str) -> dt.date | None:
    """Calendar day of a full ISO-8601 date or datetime, else None."""
    if not _FULL_DATE_RE.match(value):
        return None
    try:
        parsed = isoparse(value)
    except (ValueError, OverflowError):
        return None
    return as_day(parsed)


def load_news_array(candidate: str) -> list[Any]:
    try:
        payload = json.loads(candidate)
    except (TypeError, ValueError) as exc:
        raise NewsValidationError(
            ValidationErrorKind.MALFORMED_JSON, str(exc)
        ) from exc
    if not isinstance(payload, dict):
        raise NewsValidationError(
            ValidationErrorKind.MISSING_NEWS_ARRAY,
            f"top level is {type(payload).__name__}, expected object",
        )
    records = payload.get(NEWS_FIELD)
    if not isinstance(records, list):
        raise NewsValidationError(
            ValidationErrorKind.MISSING_NEWS_ARRAY,
            f"'{NEWS_FIELD}' is missing or not an array",
        )
    return records


def validate_payload(candidate: str, now: dt.date | dt.datetime) -> list[NewsItem]:
    """Parse an extracted payload into age-stamped news items.

    Records that fail validation are dropped; the batch only fails when none
    survive. Source order is preserved and nothing is deduplicated.
    """
    records = load_news_array(candidate)
    today = as_day(now)
    items: list[NewsItem] = []
    for position, raw in enumerate(records, start=1):
        try:
            record = NewsRecord.model_validate(raw, context={"today": today})
        except ValidationError as exc:
            logger.debug(
                "news_record_dropped",
                position=position,
                errors=[
                    {"loc": list(err["loc"]), "msg": err["msg"]}
                    for err in exc.errors(include_url=False)
                ],
            )
            continue
        items.append(record.to_item(position, now))

    if not items:
        raise NewsValidationError(
            ValidationErrorKind.ALL_RECORDS_INVALID,
            f"none of {len(records)} records passed validation",
        )
    return items
