"""Calendar-day date buckets, countdowns and deadline labels."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Callable, Iterable, Optional, TypeVar, Union

from student_hub.models.base import local_day

R = TypeVar("R")
DayLike = Union[date, datetime]


class DateBucket(str, Enum):
    OVERDUE = "overdue"
    TODAY = "today"
    TOMORROW = "tomorrow"
    THIS_WEEK = "this_week"
    LATER = "later"


def days_until(target: DayLike, today: Optional[DayLike] = None) -> int:
    """Whole calendar days from today to target; time of day is ignored."""
    reference = local_day(today) if today is not None else date.today()
    return (local_day(target) - reference).days


def classify(target: DayLike, today: Optional[DayLike] = None) -> DateBucket:
    """Midnight-to-midnight comparison: 23:59 today is TODAY, 00:00 tomorrow is TOMORROW."""
    days = days_until(target, today)
    if days < 0:
        return DateBucket.OVERDUE
    if days == 0:
        return DateBucket.TODAY
    if days == 1:
        return DateBucket.TOMORROW
    if days <= 6:
        return DateBucket.THIS_WEEK
    return DateBucket.LATER


def bucket_counts(
    records: Iterable[R],
    when: Callable[[R], DayLike],
    today: Optional[DayLike] = None,
) -> dict[DateBucket, int]:
    counts = {bucket: 0 for bucket in DateBucket}
    for record in records:
        counts[classify(when(record), today)] += 1
    return counts


@dataclass(frozen=True)
class Countdown:
    days: int
    hours: int
    minutes: int
    expired: bool
    urgency: str  # critical | soon | normal | expired

    @property
    def label(self) -> str:
        if self.expired:
            return "Expired"
        if self.days:
            return f"{self.days}d {self.hours}h left"
        return f"{self.hours}h {self.minutes}m left"


def countdown(target: datetime, now: Optional[datetime] = None) -> Countdown:
    """Time remaining until target. critical < 24h, soon < 3 days."""
    if now is None:
        now = datetime.now(target.tzinfo)
    seconds = int((target - now).total_seconds())
    if seconds <= 0:
        return Countdown(0, 0, 0, expired=True, urgency="expired")
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60
    if seconds < 86400:
        urgency = "critical"
    elif seconds < 3 * 86400:
        urgency = "soon"
    else:
        urgency = "normal"
    return Countdown(days, hours, minutes, expired=False, urgency=urgency)


def deadline_label(deadline: Optional[DayLike], today: Optional[DayLike] = None) -> str:
    """Listing label for an opportunity deadline."""
    if deadline is None:
        return "Rolling deadline"
    days = days_until(deadline, today)
    if days < 0:
        return "Deadline passed"
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    return f"{days} days left"
