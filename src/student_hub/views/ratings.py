"""Faculty rating aggregates."""

from dataclasses import dataclass
from typing import Iterable

from student_hub.models.rating import SCORE_FIELDS, FacultyRating
from student_hub.views.grouping import group_by


@dataclass(frozen=True)
class RatingSummary:
    faculty_id: str
    count: int
    teaching_quality: float
    engagement: float
    helpfulness: float

    @property
    def overall(self) -> float:
        return round((self.teaching_quality + self.engagement + self.helpfulness) / 3, 2)


def _mean(values: list[int]) -> float:
    return round(sum(values) / len(values), 2) if values else 0.0


def rating_summary(ratings: Iterable[FacultyRating]) -> dict[str, RatingSummary]:
    """Per-faculty averages of each score, keyed by faculty id."""
    summaries = {}
    for faculty_id, group in group_by(ratings, lambda r: r.faculty_id).items():
        averages = {name: _mean([getattr(r, name) for r in group]) for name in SCORE_FIELDS}
        summaries[faculty_id] = RatingSummary(faculty_id=faculty_id, count=len(group), **averages)
    return summaries
