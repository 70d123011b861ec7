from __future__ import annotations

import re

from .errors import ExtractionError, ExtractionErrorKind

_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)


def strip_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def _balanced_end(text: str, start: int) -> int | None:
    """Index of the last ``}`` where brace depth, counted from ``start``, is zero."""
    depth = 0
    in_string = False
    escaped = False
    end: int | None = None
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"' and depth > 0:
            in_string = True
        elif char == "{":
            if depth >= 0:
                depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                end = index
    return end


def extract_json(raw_text: str) -> str:
    """Isolate the JSON object embedded in a model response.

    Code fences are removed, then the region from the first ``{`` to the last
    ``}`` that closes it is returned. Text with no ``{...}`` region raises
    :class:`ExtractionError`.
    """
    if not isinstance(raw_text, str):
        raise ExtractionError(
            ExtractionErrorKind.NO_JSON_FOUND, "response text is not a string"
        )
    text = strip_fences(raw_text)
    start = text.find("{")
    if start == -1:
        raise ExtractionError(
            ExtractionErrorKind.NO_JSON_FOUND, "no '{' in response text"
        )
    end = _balanced_end(text, start)
    if end is None:
        # Unbalanced: hand the greedy region to the validator to reject.
        end = text.rfind("}")
        if end < start:
            raise ExtractionError(
                ExtractionErrorKind.NO_JSON_FOUND, "no closing '}' in response text"
            )
    return text[start : end + 1]
