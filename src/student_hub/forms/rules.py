"""Validation rules: each returns (passed, message, field)."""

from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable, Optional
from urllib.parse import urlparse

from student_hub.models.base import local_day

Draft = dict[str, Any]
RuleFn = Callable[[Draft], tuple[bool, str, str]]

SELECT_SENTINEL = "select"


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_datetime(value: Any) -> Optional[datetime]:
    """datetime-local ('2025-03-01T10:00'), ISO strings, dates and datetimes; None if unparseable."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_date(value: Any) -> Optional[date]:
    parsed = parse_datetime(value)
    return local_day(parsed) if parsed else None


def parse_time(value: Any) -> Optional[time]:
    """time-input text ('14:30' or '14:30:00'); None if blank or unparseable."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return time.fromisoformat(value.strip())
    except ValueError:
        return None


def parse_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def is_url(value: str) -> bool:
    """http(s) URL with a host."""
    parsed = urlparse(value.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def required(field: str, message: str) -> RuleFn:
    def rule(draft: Draft) -> tuple[bool, str, str]:
        if _blank(draft.get(field)):
            return False, message, field
        return True, f"{field} present", field

    return rule


def chosen(field: str, options: Iterable[str], message: str) -> RuleFn:
    """Select inputs: the unselected sentinel and unknown values are rejected."""
    allowed = tuple(options)

    def rule(draft: Draft) -> tuple[bool, str, str]:
        value = draft.get(field)
        if _blank(value) or value == SELECT_SENTINEL or value not in allowed:
            return False, message, field
        return True, f"{field} is {value}", field

    return rule


def optional_choice(field: str, options: Iterable[str], message: str) -> RuleFn:
    allowed = tuple(options)

    def rule(draft: Draft) -> tuple[bool, str, str]:
        value = draft.get(field)
        if _blank(value) or value in allowed:
            return True, f"{field} ok", field
        return False, message, field

    return rule


def valid_datetime(field: str, message: str) -> RuleFn:
    """Skipped when blank; pair with required() for mandatory fields."""

    def rule(draft: Draft) -> tuple[bool, str, str]:
        value = draft.get(field)
        if _blank(value) or parse_datetime(value) is not None:
            return True, f"{field} ok", field
        return False, message, field

    return rule


def valid_time(field: str, message: str) -> RuleFn:
    """Skipped when blank."""

    def rule(draft: Draft) -> tuple[bool, str, str]:
        value = draft.get(field)
        if _blank(value) or parse_time(value) is not None:
            return True, f"{field} ok", field
        return False, message, field

    return rule


def valid_url(field: str, message: str) -> RuleFn:
    def rule(draft: Draft) -> tuple[bool, str, str]:
        value = draft.get(field)
        if _blank(value) or is_url(str(value)):
            return True, f"{field} ok", field
        return False, message, field

    return rule


def positive_amount(field: str, message: str) -> RuleFn:
    def rule(draft: Draft) -> tuple[bool, str, str]:
        amount = parse_decimal(draft.get(field))
        if amount is None or amount <= 0:
            return False, message, field
        return True, f"{field} is {amount}", field

    return rule


def non_negative_amount(field: str, message: str) -> RuleFn:
    def rule(draft: Draft) -> tuple[bool, str, str]:
        value = draft.get(field)
        if _blank(value):
            return True, f"{field} empty", field
        amount = parse_decimal(value)
        if amount is None or amount < 0:
            return False, message, field
        return True, f"{field} is {amount}", field

    return rule


def not_after_today(field: str, message: str, today: Callable[[], date]) -> RuleFn:
    """Calendar-day comparison: today itself is allowed."""

    def rule(draft: Draft) -> tuple[bool, str, str]:
        day = parse_date(draft.get(field))
        if day is None or day <= today():
            return True, f"{field} ok", field
        return False, message, field

    return rule


def not_before_today(field: str, message: str, today: Callable[[], date]) -> RuleFn:
    def rule(draft: Draft) -> tuple[bool, str, str]:
        day = parse_date(draft.get(field))
        if day is None or day >= today():
            return True, f"{field} ok", field
        return False, message, field

    return rule


def max_length(field: str, limit: int, message: str) -> RuleFn:
    def rule(draft: Draft) -> tuple[bool, str, str]:
        value = draft.get(field) or ""
        if len(str(value)) > limit:
            return False, message, field
        return True, f"{field} within {limit} characters", field

    return rule


def int_between(field: str, low: int, high: int, message: str) -> RuleFn:
    def rule(draft: Draft) -> tuple[bool, str, str]:
        value = draft.get(field)
        try:
            number = int(value)
        except (TypeError, ValueError):
            return False, message, field
        if isinstance(value, float) and not value.is_integer():
            return False, message, field
        if not low <= number <= high:
            return False, message, field
        return True, f"{field} is {number}", field

    return rule


def ordered(start_field: str, end_field: str, message: str, *, strict: bool = False) -> RuleFn:
    """end >= start (or end > start when strict). Blank or unparseable ends are skipped."""

    def rule(draft: Draft) -> tuple[bool, str, str]:
        start = parse_datetime(draft.get(start_field))
        end = parse_datetime(draft.get(end_field))
        if start is None or end is None:
            return True, "order not applicable", end_field
        if (start.tzinfo is None) != (end.tzinfo is None):
            start, end = start.replace(tzinfo=None), end.replace(tzinfo=None)
        if end < start or (strict and end == start):
            return False, message, end_field
        return True, f"{end_field} after {start_field}", end_field

    return rule
