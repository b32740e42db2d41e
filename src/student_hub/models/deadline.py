"""Course deadline (exam or assignment)."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import field_validator

from student_hub.models.base import PortalRecord, coerce_datetime

DEADLINE_CATEGORIES = ("exam", "assignment")
SUBMISSION_MODES = ("online", "offline", "both")


class Deadline(PortalRecord):
    """A dated exam or assignment for one course."""

    course_code: str
    category: Literal["exam", "assignment"]
    name: str
    due_date: datetime
    syllabus: Optional[str] = None

    room: Optional[str] = None  # exam only
    mode: Optional[str] = None  # assignment only
    submission_link: Optional[str] = None  # assignment only
    owner_email: Optional[str] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _parse_due_date(cls, value):
        return coerce_datetime(value)

    @property
    def is_exam(self) -> bool:
        return self.category == "exam"
