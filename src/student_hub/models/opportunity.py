"""Career opportunities (jobs, internships, scholarships) and their relationship records."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from student_hub.models.base import PortalRecord, coerce_datetime

OpportunityType = Literal["job", "internship", "scholarship"]
OPPORTUNITY_TYPES: tuple[str, ...] = ("job", "internship", "scholarship")

JOB_TYPES = ("part-time", "remote", "on-campus", "freelance", "internship")
SALARY_CURRENCIES = ("USD", "BDT", "EUR")
SALARY_PERIODS = ("hourly", "weekly", "monthly", "fixed")
APPLICATION_STATUSES = (
    "interested",
    "applied",
    "interview",
    "offer",
    "rejected",
    "accepted",
    "withdrawn",
)


def _organization_name(value: Any) -> Any:
    """Organization arrives as a plain string or as {name, ...}."""
    if isinstance(value, dict):
        return value.get("name")
    return value


class Opportunity(PortalRecord):
    """Fields shared by all listing types."""

    opportunity_type: str = "job"

    title: str = Field(default="", validation_alias=AliasChoices("title", "name"))
    organization: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("organization", "company", "provider"),
    )
    description: Optional[str] = None
    location: Optional[str] = None
    deadline: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("deadline", "applicationDeadline", "application_deadline"),
    )
    tags: list[str] = Field(default_factory=list)
    status: str = "active"

    @field_validator("organization", mode="before")
    @classmethod
    def _flatten_organization(cls, value):
        return _organization_name(value)

    @field_validator("deadline", mode="before")
    @classmethod
    def _parse_deadline(cls, value):
        return coerce_datetime(value) if value else None

    @property
    def key(self) -> tuple[str, str]:
        return (self.opportunity_type, self.id or "")


class Salary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    amount: Decimal
    currency: str = "USD"
    period: str = "hourly"


class Job(Opportunity):
    """Job board listing. company arrives as {name, website, ...} and is flattened to organization."""

    opportunity_type: str = "job"
    job_type: Optional[str] = "part-time"
    short_description: Optional[str] = None
    salary: Optional[Salary] = None
    schedule: Optional[str] = None
    duration: Optional[str] = None
    contact_email: Optional[str] = None
    application_instructions: Optional[str] = None
    company_website: Optional[str] = None
    requirements: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _company_website(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("company"), dict):
            data = {**data, "companyWebsite": data["company"].get("website")}
        return data

    @property
    def compensation(self) -> Optional[Decimal]:
        return self.salary.amount if self.salary else None


class Internship(Opportunity):
    """Internship listing."""

    opportunity_type: str = "internship"
    duration: Optional[str] = None
    stipend: Optional[Decimal] = None
    compensation_type: Optional[str] = None


class Scholarship(Opportunity):
    """Scholarship listing."""

    opportunity_type: str = "scholarship"
    award_amount: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("awardAmount", "award_amount", "amount"),
    )
    min_cgpa: Optional[float] = None


class SavedOpportunity(PortalRecord):
    """Relationship: a user saved an opportunity. Unique per (user, type, opportunity)."""

    user_id: Optional[str] = None
    opportunity_type: OpportunityType
    opportunity_id: str
    saved_at: Optional[datetime] = None
    notes: Optional[str] = None
    applied: bool = False
    applied_at: Optional[datetime] = None

    @field_validator("opportunity_id", mode="before")
    @classmethod
    def _flatten_opportunity(cls, value):
        # Populated references arrive as the full opportunity document
        if isinstance(value, dict):
            return value.get("_id") or value.get("id")
        return value

    @property
    def key(self) -> tuple[str, str]:
        return (self.opportunity_type, self.opportunity_id)


class ApplicationRecord(PortalRecord):
    """A user's tracked application for an opportunity."""

    type: str = "job"
    opportunity_id: Optional[str] = None
    title: Optional[str] = None
    organization: Optional[str] = None
    status: str = "interested"
    applied_at: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("status")
    @classmethod
    def _known_status(cls, value: str) -> str:
        if value not in APPLICATION_STATUSES:
            raise ValueError(f"Unknown application status: {value}")
        return value


OPPORTUNITY_MODELS: dict[str, type[Opportunity]] = {
    "job": Job,
    "internship": Internship,
    "scholarship": Scholarship,
}
