from __future__ import annotations

import asyncio
import datetime as dt
from dataclasses import dataclass
from typing import Any

import httpx

from ..config import Settings, get_settings
from ..errors import NewsPipelineError, TransportFailure
from ..extract import extract_json
from ..fallback import fallback_news
from ..http_client import MESSAGES_PATH, get_http_client
from ..logging import get_logger
from ..models.news import Category, SearchResult, SearchStatus
from ..validation import validate_payload

logger = get_logger(__name__)

WEB_SEARCH_TOOL = {"type": "web_search_20250305", "name": "web_search"}


def build_search_prompt(
    query: str,
    *,
    lookback_days: int = 30,
    min_items: int = 15,
    max_items: int = 20,
) -> str:
    categories = ", ".join(c.value for c in Category.selectable())
    return f"""Find the most recent and relevant news about "{query}" from the last {lookback_days} days. Return every item inside one JSON object with EXACTLY this structure:

{{
  "news": [
    {{
      "id": 1,
      "title": "Headline of the article",
      "url": "Full URL of the article",
      "source": "Name of the publisher",
      "date": "YYYY-MM-DD",
      "category": "One of: {categories}",
      "abstract": "Detailed 2-3 sentence summary with specific facts from the article"
    }}
  ]
}}

Return at least {min_items}-{max_items} recent, verified articles. RESPOND ONLY WITH VALID JSON, NO OTHER TEXT. Do NOT use backticks or markdown."""


def response_text(payload: Any) -> str:
    """Concatenate the text blocks of a Messages API response."""
    if not isinstance(payload, dict):
        raise TransportFailure("response body is not a JSON object")
    blocks = payload.get("content")
    if not isinstance(blocks, list):
        raise TransportFailure("response has no content blocks")
    texts = [
        block["text"]
        for block in blocks
        if isinstance(block, dict)
        and block.get("type") == "text"
        and isinstance(block.get("text"), str)
    ]
    if not texts:
        raise TransportFailure("response has no text content")
    return "\n".join(texts)


@dataclass(slots=True)
class NewsSearchService:
    settings: Settings | None = None
    client: httpx.AsyncClient | None = None

    def __post_init__(self) -> None:
        if self.settings is None:
            self.settings = get_settings()

    async def run(self, query: str, now: dt.datetime) -> SearchResult:
        """Search, extract and validate news for ``query``.

        Never raises a pipeline failure: any transport, extraction or
        validation error is logged and the fallback batch is returned instead.
        """
        logger.info("news_search_started", query=query)
        try:
            raw_text = await self._fetch_text(query)
            candidate = extract_json(raw_text)
            items = validate_payload(candidate, now)
        except NewsPipelineError as exc:
            logger.warning(
                "news_search_fallback",
                query=query,
                error_kind=exc.kind,
                error=str(exc),
            )
            return SearchResult(
                query=query,
                status=SearchStatus.FALLBACK_APPLIED,
                items=fallback_news(now),
                completed_at=now,
            )

        logger.info("news_search_succeeded", query=query, items=len(items))
        return SearchResult(
            query=query,
            status=SearchStatus.SUCCEEDED,
            items=items,
            completed_at=now,
        )

    async def _fetch_text(self, query: str) -> str:
        timeout = self.settings.search_timeout
        try:
            return await asyncio.wait_for(self._request(query), timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise TransportFailure(f"search timed out after {timeout}s") from exc

    async def _request(self, query: str) -> str:
        client = self.client or await get_http_client()
        settings = self.settings
        body: dict[str, Any] = {
            "model": settings.anthropic_model,
            "max_tokens": settings.anthropic_max_tokens,
            "messages": [
                {
                    "role": "user",
                    "content": build_search_prompt(
                        query,
                        lookback_days=settings.search_lookback_days,
                        min_items=settings.search_min_items,
                        max_items=settings.search_max_items,
                    ),
                }
            ],
        }
        if settings.anthropic_web_search:
            body["tools"] = [WEB_SEARCH_TOOL]

        try:
            response = await client.post(MESSAGES_PATH, json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise TransportFailure(f"search request failed: {exc}") from exc
        except ValueError as exc:
            raise TransportFailure(f"response body is not JSON: {exc}") from exc
        return response_text(payload)
