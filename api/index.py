from __future__ import annotations

import datetime as dt
from functools import lru_cache

from fastapi import Depends, FastAPI, Query
from fastapi.responses import ORJSONResponse
from mangum import Mangum

from newspulse.config import get_settings
from newspulse.dates import utc_now
from newspulse.filters import build_criteria
from newspulse.http_client import shutdown_http_client
from newspulse.logging import configure_logging
from newspulse.models.news import NewsView
from newspulse.services import NewsSearchService
from newspulse.state import AppState, SearchSession

configure_logging("newspulse-api", level=get_settings().log_level)

app = FastAPI(
    title="NewsPulse API",
    version="0.1.0",
    description=(
        "Topical news found by a generative search, filtered by recency and "
        "built for serverless deployment."
    ),
    default_response_class=ORJSONResponse,
)


@lru_cache
def get_session() -> SearchSession:
    settings = get_settings()
    state = AppState(
        query=settings.default_query,
        criteria=build_criteria(settings.default_period_days),
    )
    return SearchSession(runner=NewsSearchService(settings=settings), state=state)


def get_now() -> dt.datetime:
    return utc_now()


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/news", tags=["news"], response_model=NewsView)
async def news(
    period: int | None = Query(
        None, ge=0, le=3650, description="Rolling window in days (1, 3, 7, 14, 30)"
    ),
    start: dt.date | None = Query(None, description="Custom range start (inclusive)"),
    end: dt.date | None = Query(None, description="Custom range end (inclusive)"),
    session: SearchSession = Depends(get_session),
    now: dt.datetime = Depends(get_now),
):
    await session.ensure_loaded(now)
    criteria = None
    if period is not None or start is not None or end is not None:
        criteria = build_criteria(period, start, end)
    return session.view(now, criteria)


@app.get("/news/search", tags=["news"], response_model=NewsView)
async def news_search(
    q: str = Query(
        ..., min_length=1, max_length=200, pattern=r"\S", description="Search query"
    ),
    session: SearchSession = Depends(get_session),
    now: dt.datetime = Depends(get_now),
):
    await session.search(q.strip(), now)
    return session.view(now)


@app.post("/news/refresh", tags=["news"], response_model=NewsView)
async def news_refresh(
    session: SearchSession = Depends(get_session),
    now: dt.datetime = Depends(get_now),
):
    await session.refresh(now)
    return session.view(now)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await shutdown_http_client()


handler = Mangum(app)
