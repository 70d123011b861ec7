from __future__ import annotations

import datetime as dt
import itertools
from dataclasses import dataclass, field
from typing import Protocol

from .filters import apply_filter, build_criteria, effective_criteria
from .logging import get_logger
from .models.news import FilterCriteria, NewsView, SearchResult

logger = get_logger(__name__)


class SearchRunner(Protocol):
    async def run(self, query: str, now: dt.datetime) -> SearchResult: ...


@dataclass(slots=True)
class AppState:
    """Everything the UI selects plus the one current-result slot."""

    query: str
    criteria: FilterCriteria = field(default_factory=build_criteria)
    result: SearchResult | None = None
    result_token: int = 0


@dataclass(slots=True)
class SearchSession:
    """Runs searches against an :class:`AppState`.

    Every run draws a token from a monotonically increasing counter. A settled
    run is committed only when its token is newer than the committed one, so a
    slow earlier request never replaces the result of a later one.
    """

    runner: SearchRunner
    state: AppState
    _tokens: itertools.count = field(
        default_factory=lambda: itertools.count(1), init=False, repr=False
    )

    async def search(self, query: str, now: dt.datetime) -> SearchResult:
        self.state.query = query
        return await self.refresh(now)

    async def refresh(self, now: dt.datetime) -> SearchResult:
        token = next(self._tokens)
        query = self.state.query
        result = await self.runner.run(query, now)
        if token > self.state.result_token:
            self.state.result = result
            self.state.result_token = token
            logger.info(
                "news_result_committed",
                token=token,
                query=query,
                status=result.status.value,
            )
        else:
            logger.info(
                "news_result_discarded",
                token=token,
                committed_token=self.state.result_token,
                query=query,
            )
        return self.state.result

    async def ensure_loaded(self, now: dt.datetime) -> SearchResult:
        if self.state.result is None:
            return await self.refresh(now)
        return self.state.result

    def view(
        self, now: dt.datetime, criteria: FilterCriteria | None = None
    ) -> NewsView:
        if criteria is not None:
            self.state.criteria = criteria
        result = self.state.result
        if result is None:
            raise LookupError("no search result has been loaded yet")
        return NewsView(
            query=result.query,
            status=result.status,
            completed_at=result.completed_at,
            criteria=effective_criteria(self.state.criteria),
            total=len(result.items),
            items=apply_filter(result.items, self.state.criteria, now),
        )
