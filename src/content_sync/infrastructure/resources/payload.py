"""Shape checks for unwrapped response payloads."""

from __future__ import annotations

from typing import Any

from content_sync.core.exceptions import ErrorContext, MalformedResponseError


def require_fields(data: Any, path: str, *fields: str) -> dict[str, Any]:
    """
    Return ``data`` if it is an object carrying every field in ``fields``.

    Raises:
        MalformedResponseError: ``data`` is not a dict or a field is missing/null
    """
    if not isinstance(data, dict):
        msg = f"Expected an object from {path}, got {type(data).__name__}"
        raise MalformedResponseError(msg, payload=data, context=ErrorContext(path=path))
    missing = [name for name in fields if data.get(name) is None]
    if missing:
        msg = f"Response from {path} is missing {', '.join(missing)}"
        raise MalformedResponseError(msg, payload=data, context=ErrorContext(path=path))
    return data


def require_text(data: dict[str, Any], field: str, path: str) -> str:
    value = data[field]
    if not isinstance(value, str) or not value:
        msg = f"Expected a non-empty string for {field!r} from {path}"
        raise MalformedResponseError(msg, payload=data, context=ErrorContext(path=path))
    return value
