"""List filters applied to loaded collections before rendering."""

from datetime import date, datetime
from typing import Iterable, Optional, TypeVar

from student_hub.matching import matches_query
from student_hub.models.base import local_day
from student_hub.models.cafeteria import MEAL_ORDER, Menu
from student_hub.models.deadline import Deadline
from student_hub.models.event import CalendarEvent
from student_hub.models.opportunity import Opportunity
from student_hub.views.buckets import DateBucket, DayLike, classify

O = TypeVar("O", bound=Opportunity)

QUICK_FILTERS = ("all", "today", "tomorrow", "this_week", "overdue")


def filter_deadlines(
    deadlines: Iterable[Deadline],
    course: str = "all",
    quick: str = "all",
    today: Optional[DayLike] = None,
) -> list[Deadline]:
    """Course filter plus quick date filter, sorted by due date."""
    if quick not in QUICK_FILTERS:
        raise ValueError(f"Unknown quick filter: {quick}. Expected one of {QUICK_FILTERS}")
    selected = []
    for deadline in deadlines:
        if course not in ("", "all") and deadline.course_code != course:
            continue
        if quick != "all" and classify(deadline.due_date, today) != DateBucket(quick):
            continue
        selected.append(deadline)
    return sorted(selected, key=lambda d: d.due_date)


def search_opportunities(opportunities: Iterable[O], query: str) -> list[O]:
    """Word-boundary search over title, organization, description and tags."""
    return [
        o
        for o in opportunities
        if matches_query(
            [o.title, o.organization or "", o.description or "", " ".join(o.tags)], query
        )
    ]


def open_opportunities(opportunities: Iterable[O], today: Optional[DayLike] = None) -> list[O]:
    """Active listings whose deadline has not passed; rolling deadlines stay open."""
    reference = local_day(today) if today is not None else date.today()
    return [
        o
        for o in opportunities
        if o.status == "active" and (o.deadline is None or local_day(o.deadline) >= reference)
    ]


def upcoming_events(
    events: Iterable[CalendarEvent],
    now: Optional[datetime] = None,
    limit: Optional[int] = None,
) -> list[CalendarEvent]:
    """Events that have not ended yet, soonest first."""
    now = now or datetime.now()
    upcoming = []
    for event in events:
        end, reference = event.end, now
        if (end.tzinfo is None) != (reference.tzinfo is None):
            # naive values are local time
            end, reference = end.astimezone(), reference.astimezone()
        if end >= reference:
            upcoming.append(event)
    upcoming.sort(key=lambda e: e.start)
    return upcoming[:limit] if limit is not None else upcoming


def menus_for_day(
    menus: Iterable[Menu],
    day: date,
    cafeteria: Optional[str] = None,
) -> list[Menu]:
    """Published menus for one day, breakfast to dinner."""
    selected = [
        m
        for m in menus
        if m.date == day
        and m.status == "published"
        and (cafeteria in (None, "", "all") or m.cafeteria == cafeteria)
    ]
    return sorted(selected, key=lambda m: (m.cafeteria, MEAL_ORDER.index(m.meal_type)))
