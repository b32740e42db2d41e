"""Grouping helpers. Every helper partitions its input: no record is lost or duplicated."""

from collections import Counter
from datetime import date
from typing import Callable, Hashable, Iterable, TypeVar

from student_hub.models.base import local_day
from student_hub.models.deadline import Deadline
from student_hub.models.event import CalendarEvent

R = TypeVar("R")
K = TypeVar("K", bound=Hashable)


def group_by(records: Iterable[R], key: Callable[[R], K]) -> dict[K, list[R]]:
    """Groups in first-seen key order; records keep their input order within a group."""
    groups: dict[K, list[R]] = {}
    for record in records:
        groups.setdefault(key(record), []).append(record)
    return groups


def count_by(records: Iterable[R], key: Callable[[R], K]) -> dict[K, int]:
    return dict(Counter(key(r) for r in records))


def distinct_sorted(records: Iterable[R], key: Callable[[R], K]) -> list[K]:
    """Distinct non-empty key values, sorted (e.g. the course filter dropdown)."""
    return sorted({key(r) for r in records if key(r)})


def group_deadlines_by_course(deadlines: Iterable[Deadline]) -> dict[str, dict[str, list[Deadline]]]:
    """course -> {"exams": [...], "assignments": [...]}; courses sorted, entries by due date."""
    by_course = group_by(deadlines, lambda d: d.course_code)
    grouped: dict[str, dict[str, list[Deadline]]] = {}
    for course in sorted(by_course):
        entries = sorted(by_course[course], key=lambda d: d.due_date)
        grouped[course] = {
            "exams": [d for d in entries if d.category == "exam"],
            "assignments": [d for d in entries if d.category == "assignment"],
        }
    return grouped


def group_events_by_day(events: Iterable[CalendarEvent]) -> dict[date, list[CalendarEvent]]:
    """Keyed by start day, days ascending, events by start time."""
    by_day = group_by(sorted(events, key=lambda e: e.start), lambda e: local_day(e.start))
    return {day: by_day[day] for day in sorted(by_day)}


def group_events_by_type(events: Iterable[CalendarEvent]) -> dict[str, list[CalendarEvent]]:
    return group_by(events, lambda e: e.event_type)
