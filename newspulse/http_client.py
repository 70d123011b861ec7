import asyncio

import httpx

from .config import Settings, get_settings

MESSAGES_PATH = "/v1/messages"

_client: httpx.AsyncClient | None = None
_client_lock = asyncio.Lock()


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Client bound to the Messages API: base URL, auth and version headers."""
    headers = {
        "User-Agent": settings.http_user_agent,
        "content-type": "application/json",
        "anthropic-version": settings.anthropic_version,
    }
    if settings.anthropic_api_key:
        headers["x-api-key"] = settings.anthropic_api_key
    limits = httpx.Limits(
        max_connections=settings.http_max_connections,
        max_keepalive_connections=settings.http_max_keepalive,
    )
    # Reads may take as long as the whole search; connecting may not.
    timeout = httpx.Timeout(settings.search_timeout, connect=settings.http_timeout)
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=timeout,
        limits=limits,
        headers=headers,
    )


async def get_http_client() -> httpx.AsyncClient:
    global _client

    if _client is None:
        async with _client_lock:
            if _client is None:
                _client = build_http_client(get_settings())
    return _client


async def shutdown_http_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
