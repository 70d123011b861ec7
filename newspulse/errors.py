from __future__ import annotations

from enum import Enum


class NewsPipelineError(Exception):
    """Base class for failures that make the search pipeline fall back."""

    kind: str = "pipeline_error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.kind)


class TransportFailure(NewsPipelineError):
    """Raised when the search request could not complete."""

    kind = "transport_failure"


class ExtractionErrorKind(str, Enum):
    NO_JSON_FOUND = "no_json_found"


class ExtractionError(NewsPipelineError):
    """Raised when no JSON object can be isolated from a model response."""

    def __init__(self, kind: ExtractionErrorKind, message: str | None = None) -> None:
        self.kind = kind.value
        self.error_kind = kind
        super().__init__(message or kind.value)


class ValidationErrorKind(str, Enum):
    MALFORMED_JSON = "malformed_json"
    MISSING_NEWS_ARRAY = "missing_news_array"
    ALL_RECORDS_INVALID = "all_records_invalid"


class NewsValidationError(NewsPipelineError):
    """Raised when an extracted payload yields no usable news records."""

    def __init__(self, kind: ValidationErrorKind, message: str | None = None) -> None:
        self.kind = kind.value
        self.error_kind = kind
        super().__init__(message or kind.value)
