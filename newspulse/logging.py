from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

_SECRET_KEYS = {
    "authorization",
    "api_key",
    "apikey",
    "x-api-key",
    "token",
    "access_token",
    "secret",
    "password",
}

_configured = False


def _add_ts(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault(
        "ts", datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    )
    return event_dict


def _add_service(service_name: str):
    def _inner(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return _inner


def _redact_secrets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in list(event_dict.keys()):
        if str(key).lower() in _SECRET_KEYS:
            event_dict[key] = "***redacted***"
    return event_dict


def configure_logging(
    service_name: str = "newspulse", *, level: int | str = logging.INFO
) -> None:
    """Configure one process-wide structlog stack rendering JSON lines to stderr."""
    global _configured

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            _add_ts,
            _add_service(service_name),
            _redact_secrets,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    _configured = True


def get_logger(
    name: str | None = None,
) -> structlog.typing.FilteringBoundLogger:
    if not _configured:
        configure_logging()
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()
