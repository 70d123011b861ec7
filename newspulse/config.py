from functools import lru_cache
from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="", extra="ignore", populate_by_name=True
    )

    http_timeout: float = Field(10.0, gt=0, alias="HTTP_TIMEOUT")
    http_max_connections: int = Field(20, ge=1, alias="HTTP_MAX_CONNECTIONS")
    http_max_keepalive: int = Field(10, ge=1, alias="HTTP_MAX_KEEPALIVE")
    http_user_agent: str = Field(
        "NewsPulse/0.1 (+https://example.com; contact=admin@example.com)",
        alias="HTTP_USER_AGENT",
    )

    anthropic_base_url: HttpUrl = Field(
        "https://api.anthropic.com", alias="ANTHROPIC_BASE_URL"
    )
    anthropic_api_key: str | None = Field(default=None, alias="ANTHROPIC_API_KEY")
    anthropic_version: str = Field("2023-06-01", alias="ANTHROPIC_VERSION")
    anthropic_model: str = Field(
        "claude-sonnet-4-20250514", alias="ANTHROPIC_MODEL"
    )
    anthropic_max_tokens: int = Field(4000, ge=1, alias="ANTHROPIC_MAX_TOKENS")
    anthropic_web_search: bool = Field(False, alias="ANTHROPIC_WEB_SEARCH")

    search_timeout: float = Field(30.0, gt=0, alias="SEARCH_TIMEOUT")
    search_lookback_days: int = Field(30, ge=1, alias="SEARCH_LOOKBACK_DAYS")
    search_min_items: int = Field(15, ge=1, alias="SEARCH_MIN_ITEMS")
    search_max_items: int = Field(20, ge=1, alias="SEARCH_MAX_ITEMS")

    default_query: str = Field("artificial intelligence AI", alias="DEFAULT_QUERY")
    default_period_days: int = Field(7, ge=0, alias="DEFAULT_PERIOD_DAYS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @property
    def api_base_url(self) -> str:
        return str(self.anthropic_base_url).rstrip("/")


@lru_cache
def get_settings() -> Settings:
    return Settings()
