"""Response envelope handling.

The backend wraps payloads as ``{success, data, message}`` or
``{success, error}``, but not consistently: some endpoints nest the entity
under ``data.<entity>``, some return it as ``data``, and some return the raw
list. The unwrapping below tolerates all of those shapes. It is a
compatibility shim for the current backend and is kept in this one module so
it can be narrowed to a single contract once the API is consistent.
"""

from typing import Any

from AcademicPortalApp.core.exceptions import ApiError


def ensure_success(payload: Any, fallback: str) -> None:
    """Raise ApiError when the body reports failure (falsy ``success`` plus an ``error``)."""
    if not isinstance(payload, dict):
        return
    if not payload.get("success") and payload.get("error"):
        raise ApiError(str(payload["error"]) or fallback)


def error_message(payload: Any, fallback: str) -> str:
    """Best human-readable message in an error body: ``error``, ``message``, ``detail``."""
    if isinstance(payload, dict):
        for key in ("error", "message", "detail"):
            value = payload.get(key)
            if value and isinstance(value, str):
                return value
    return fallback


def unwrap_list(payload: Any, key: str) -> list:
    """Return the list stored under ``key`` whatever envelope it arrived in.

    Precedence: ``data.<key>``, ``<key>``, ``data`` (when a list), the raw body
    (when a list), else ``[]``.
    """
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        return []
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get(key), list):
        return data[key]
    if isinstance(payload.get(key), list):
        return payload[key]
    if isinstance(data, list):
        return data
    return []


def unwrap_entity(payload: Any, key: str) -> Any:
    """Return the entity stored under ``key``: ``data.<key>``, then ``data``, then the raw body."""
    if not isinstance(payload, dict):
        return payload
    data = payload.get("data")
    if isinstance(data, dict) and data.get(key) is not None:
        return data[key]
    if data is not None:
        return data
    return payload
