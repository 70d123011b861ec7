from .filters import apply_filter, build_criteria
from .models.news import (
    Category,
    DateRange,
    NewsItem,
    NewsView,
    RollingWindow,
    SearchResult,
    SearchStatus,
)
from .services import NewsSearchService
from .state import AppState, SearchSession

__all__ = [
    "AppState",
    "Category",
    "DateRange",
    "NewsItem",
    "NewsSearchService",
    "NewsView",
    "RollingWindow",
    "SearchResult",
    "SearchSession",
    "SearchStatus",
    "apply_filter",
    "build_criteria",
]
