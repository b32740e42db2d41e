"""Faculty ratings."""

from pydantic import Field

from student_hub.models.base import PortalRecord

SCORE_FIELDS = ("teaching_quality", "engagement", "helpfulness")


class FacultyRating(PortalRecord):
    """One student's rating of one faculty member. Scores are 1-5."""

    faculty_id: str
    student_id: str | None = None
    teaching_quality: int = Field(..., ge=1, le=5)
    engagement: int = Field(..., ge=1, le=5)
    helpfulness: int = Field(..., ge=1, le=5)
    comments: str = Field(default="", max_length=500)

    @property
    def overall(self) -> float:
        return round(sum(getattr(self, f) for f in SCORE_FIELDS) / len(SCORE_FIELDS), 2)
