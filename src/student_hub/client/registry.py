"""Registry of REST resources the portal exposes."""

from dataclasses import dataclass, field
from typing import Type

from student_hub.models.base import PortalRecord
from student_hub.models.budget import BudgetGoals, Transaction
from student_hub.models.cafeteria import Menu
from student_hub.models.deadline import Deadline
from student_hub.models.event import CalendarEvent
from student_hub.models.opportunity import (
    ApplicationRecord,
    Internship,
    Job,
    SavedOpportunity,
    Scholarship,
)
from student_hub.models.rating import FacultyRating


@dataclass(frozen=True)
class ResourceSpec:
    """
    How one collection endpoint behaves.
    keys: named envelope keys used instead of "data" (e.g. "jobs", "job").
    session_scope: query param -> Session attribute added to collection reads.
    """

    name: str
    path: str
    model: Type[PortalRecord]
    keys: tuple[str, ...] = ()
    session_scope: dict[str, str] = field(default_factory=dict)
    paginated: bool = False

    def item_path(self, record_id: str) -> str:
        return f"{self.path.rstrip('/')}/{record_id}"


class ResourceRegistry:
    """Discovers and provides resource specs by name."""

    _resources: dict[str, ResourceSpec] = {
        "deadlines": ResourceSpec(
            name="deadlines",
            path="/deadlines",
            model=Deadline,
            keys=("deadlines", "deadline"),
            session_scope={"ownerEmail": "email"},
        ),
        "events": ResourceSpec(
            name="events",
            path="/calendar/events",
            model=CalendarEvent,
            keys=("events", "event"),
        ),
        "menus": ResourceSpec(
            name="menus",
            path="/cafeteria/menus",
            model=Menu,
            keys=("menus", "menu"),
        ),
        "jobs": ResourceSpec(
            name="jobs",
            path="/career/jobs",
            model=Job,
            keys=("jobs", "job"),
            paginated=True,
        ),
        "internships": ResourceSpec(
            name="internships",
            path="/career/internships",
            model=Internship,
            keys=("internships", "internship"),
            paginated=True,
        ),
        "scholarships": ResourceSpec(
            name="scholarships",
            path="/career/scholarships",
            model=Scholarship,
            keys=("scholarships", "scholarship"),
            paginated=True,
        ),
        "saved": ResourceSpec(
            name="saved",
            path="/career/student/saved",
            model=SavedOpportunity,
            keys=("saved", "savedOpportunities"),
        ),
        "applications": ResourceSpec(
            name="applications",
            path="/applications",
            model=ApplicationRecord,
            keys=("applications", "application"),
        ),
        "transactions": ResourceSpec(
            name="transactions",
            path="/budget/transactions",
            model=Transaction,
            keys=("transactions", "transaction"),
        ),
        "budget-goals": ResourceSpec(
            name="budget-goals",
            path="/budget/goals",
            model=BudgetGoals,
            keys=("goals",),
        ),
        "ratings": ResourceSpec(
            name="ratings",
            path="/ratings",
            model=FacultyRating,
            keys=("ratings", "rating"),
        ),
    }

    @classmethod
    def get(cls, name: str) -> ResourceSpec:
        """Get the spec for the given resource name."""
        spec = cls._resources.get(name.lower())
        if not spec:
            raise ValueError(f"Unknown resource: {name}. Available: {list(cls._resources.keys())}")
        return spec

    @classmethod
    def register(cls, spec: ResourceSpec) -> None:
        cls._resources[spec.name.lower()] = spec

    @classmethod
    def available_resources(cls) -> list[str]:
        """Return list of registered resource names."""
        return list(cls._resources.keys())

