"""
Normalize the backend's inconsistent response bodies into one Envelope.

Observed shapes:
- raw array: [...]
- raw record: {"_id": ..., ...}
- {"success": true, "data": [...]} or {"success": true, "data": {...}}
- {"success": true, "<key>": [...]} e.g. jobs, internships, events, event
- {"success": true, "data": {"<key>": [...]}} (nested list)
- {"success": false, "error" | "message": "..."}
Pagination arrives either nested under "pagination" or as top-level
currentPage/totalPages/total* keys.
"""

import math
from typing import Any, Optional, Sequence

from student_hub.models.envelope import Envelope, Pagination

_META_KEYS = frozenset(
    {
        "success",
        "message",
        "error",
        "errors",
        "details",
        "debug",
        "pagination",
        "total",
        "totalPages",
        "currentPage",
        "hasNextPage",
        "hasPrevPage",
        "page",
        "limit",
        "count",
    }
)
_PAGINATION_KEYS = ("currentPage", "totalPages", "hasNextPage", "hasPrevPage")


def _first_present(body: dict[str, Any], keys: Sequence[str]) -> tuple[bool, Any]:
    for key in keys:
        if key in body:
            return True, body[key]
    return False, None


def _unwrap_nested(data: Any, keys: Sequence[str]) -> Any:
    """{"data": {"transactions": [...]}} -> [...]; {"data": {"data": [...]}} -> [...]."""
    if not isinstance(data, dict):
        return data
    for key in (*keys, "data"):
        if isinstance(data.get(key), list):
            return data[key]
    return data


def _total_items(source: dict[str, Any]) -> Optional[int]:
    """Backend names the count after the resource: total, totalJobs, totalInternships..."""
    if "total" in source:
        return int(source["total"])
    for key, value in source.items():
        if key.startswith("total") and key != "totalPages" and isinstance(value, int):
            return value
    return None


def parse_pagination(body: dict[str, Any], page_size: int = 12) -> Optional[Pagination]:
    """Extract pagination from a nested object or top-level keys; None when absent."""
    source = body.get("pagination")
    if not isinstance(source, dict):
        if not any(k in body for k in _PAGINATION_KEYS):
            return None
        source = body

    current = int(source.get("currentPage") or source.get("page") or 1)
    total_items = _total_items(source)
    size = int(source.get("limit") or source.get("pageSize") or page_size)
    if "totalPages" in source:
        total_pages = int(source["totalPages"])
    elif total_items is not None:
        total_pages = max(1, math.ceil(total_items / size))
    else:
        total_pages = current

    has_next = source.get("hasNextPage")
    has_prev = source.get("hasPrevPage")
    return Pagination(
        current_page=current,
        total_pages=total_pages,
        total_items=total_items if total_items is not None else 0,
        page_size=size,
        has_next_page=bool(has_next) if has_next is not None else current < total_pages,
        has_prev_page=bool(has_prev) if has_prev is not None else current > 1,
    )


def _field_errors(body: dict[str, Any]) -> dict[str, str]:
    errors = body.get("errors")
    if isinstance(errors, dict):
        return {str(k): str(v) for k, v in errors.items()}
    return {}


def normalize_envelope(
    body: Any,
    resource_keys: Sequence[str] = (),
    *,
    page_size: int = 12,
) -> Envelope:
    """
    Convert any accepted body shape to an Envelope.
    resource_keys: named keys the resource may use instead of "data" (e.g. ("jobs", "job")).
    Raises ValueError when the body is not a JSON object or array.
    """
    if isinstance(body, list):
        return Envelope(success=True, data=body)
    if not isinstance(body, dict):
        raise ValueError(f"Unexpected response body type: {type(body).__name__}")

    message = body.get("error") or body.get("message")
    if message is not None and not isinstance(message, str):
        message = str(message)
    success = bool(body.get("success", True))
    pagination = parse_pagination(body, page_size=page_size)

    found, data = _first_present(body, ("data", *resource_keys))
    if found:
        data = _unwrap_nested(data, resource_keys)
    elif "success" in body or _is_message_only(body):
        leftovers = [k for k in body if k not in _META_KEYS]
        data = body[leftovers[0]] if len(leftovers) == 1 else None
    else:
        # Bare record (e.g. the created document itself)
        data = body

    return Envelope(
        success=success,
        data=data,
        pagination=pagination,
        message=message,
        field_errors=_field_errors(body),
    )


def _is_message_only(body: dict[str, Any]) -> bool:
    """{"message": "Deadline deleted"} is a status body, not a record."""
    return bool(body) and all(k in _META_KEYS for k in body)
