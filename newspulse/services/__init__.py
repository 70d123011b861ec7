from .search import NewsSearchService

__all__ = ["NewsSearchService"]
