"""Concrete forms for each portal record type."""

from datetime import date, datetime, time
from typing import Any, Callable, Optional

from student_hub.controllers.resource import RemoteResourceController
from student_hub.forms.controller import FormController
from student_hub.forms.rules import (
    Draft,
    RuleFn,
    chosen,
    int_between,
    max_length,
    non_negative_amount,
    not_after_today,
    not_before_today,
    optional_choice,
    ordered,
    parse_date,
    parse_datetime,
    parse_decimal,
    parse_time,
    positive_amount,
    required,
    valid_datetime,
    valid_time,
    valid_url,
)
from student_hub.models.base import local_day, to_local
from student_hub.models.budget import CATEGORIES_BY_TYPE, BudgetGoals, Transaction
from student_hub.models.deadline import DEADLINE_CATEGORIES, SUBMISSION_MODES, Deadline
from student_hub.models.event import CalendarEvent
from student_hub.models.opportunity import JOB_TYPES, SALARY_CURRENCIES, SALARY_PERIODS, Job
from student_hub.models.rating import SCORE_FIELDS, FacultyRating
from student_hub.session import Session

Clock = Callable[[], date]

LOCAL_INPUT_FORMAT = "%Y-%m-%dT%H:%M"


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def _amount(value: Any) -> float:
    number = parse_decimal(value)
    return float(number) if number is not None else 0.0


class DeadlineForm(FormController[Deadline]):
    """Exam or assignment entry. Exams carry a room; assignments carry a mode and link."""

    def defaults(self) -> dict[str, Any]:
        return {
            "course_code": "",
            "category": "select",
            "name": "",
            "due_date": "",
            "syllabus": "",
            "room": "",
            "mode": "",
            "submission_link": "",
        }

    def rules(self) -> list[RuleFn]:
        return [
            required("course_code", "Course code is required"),
            chosen("category", DEADLINE_CATEGORIES, "Please select a category"),
            required("name", "Name is required"),
            required("due_date", "Due date is required"),
            valid_datetime("due_date", "Due date is not a valid date"),
            valid_url("submission_link", "Submission link must be a valid URL"),
            optional_choice("mode", SUBMISSION_MODES, "Mode must be online, offline or both"),
        ]

    def build_payload(self) -> dict[str, Any]:
        values = self.values
        due = parse_datetime(values["due_date"])
        payload: dict[str, Any] = {
            "courseCode": _text(values["course_code"]).upper(),
            "category": values["category"],
            "name": _text(values["name"]),
            "dueDate": due.isoformat() if due else None,
            "syllabus": _text(values["syllabus"]),
        }
        if values["category"] == "exam":
            payload["room"] = _text(values["room"])
        else:
            payload["mode"] = _text(values["mode"]) or "online"
            payload["submissionLink"] = _text(values["submission_link"])
        if self.session.email:
            payload["ownerEmail"] = self.session.email
        return payload

    def values_from_record(self, record: Deadline) -> dict[str, Any]:
        return {
            "course_code": record.course_code,
            "category": record.category,
            "name": record.name,
            "due_date": to_local(record.due_date).strftime(LOCAL_INPUT_FORMAT),
            "syllabus": record.syllabus or "",
            "room": record.room or "",
            "mode": record.mode or "",
            "submission_link": record.submission_link or "",
        }


EVENT_TYPE_MAP = {
    "academic": "academic",
    "club": "club",
    "exam": "exam",
    "holiday": "holiday",
    "other": "general",
}
EVENT_CATEGORY_MAP = {
    "academic": "Academic Dates",
    "club": "Club Activities",
    "exam": "Exam Schedule",
    "holiday": "Holiday",
    "other": "General",
}


def _event_window(draft: Draft) -> tuple[Optional[datetime], Optional[datetime]]:
    """Combine date and time inputs. No start time means an all-day event."""
    start_day = parse_date(draft.get("start_date"))
    end_day = parse_date(draft.get("end_date")) or start_day
    if start_day is None or end_day is None:
        return None, None
    start_time = parse_time(draft.get("start_time"))
    end_time = parse_time(draft.get("end_time"))
    if start_time is None:
        return (
            datetime.combine(start_day, time(0, 0, 0)),
            datetime.combine(end_day, time(23, 59, 59)),
        )
    return (
        datetime.combine(start_day, start_time),
        datetime.combine(end_day, end_time or time(23, 59)),
    )


def _times_ordered(draft: Draft) -> tuple[bool, str, str]:
    if parse_time(draft.get("start_time")) is None or parse_time(draft.get("end_time")) is None:
        return True, "times not both set", "end_time"
    start, end = _event_window(draft)
    if start is None or end is None or end > start:
        return True, "end time after start time", "end_time"
    return False, "End time must be after start time", "end_time"


class EventForm(FormController[CalendarEvent]):
    """Calendar event with separate date and time inputs."""

    def defaults(self) -> dict[str, Any]:
        return {
            "title": "",
            "type": "academic",
            "start_date": "",
            "end_date": "",
            "start_time": "",
            "end_time": "",
            "description": "",
            "location": "",
        }

    def rules(self) -> list[RuleFn]:
        return [
            required("title", "Title is required"),
            required("start_date", "Start date is required"),
            valid_datetime("start_date", "Start date is not a valid date"),
            valid_datetime("end_date", "End date is not a valid date"),
            valid_time("start_time", "Start time must be HH:MM"),
            valid_time("end_time", "End time must be HH:MM"),
            chosen("type", EVENT_TYPE_MAP, "Unknown event type"),
            ordered("start_date", "end_date", "End date cannot be before start date"),
            _times_ordered,
        ]

    def build_payload(self) -> dict[str, Any]:
        values = self.values
        start, end = _event_window(values)
        kind = values["type"]
        return {
            "title": _text(values["title"]),
            "description": _text(values["description"]),
            "location": _text(values["location"]),
            "organizer": "User",
            "eventType": EVENT_TYPE_MAP.get(kind, "general"),
            "category": EVENT_CATEGORY_MAP.get(kind, "General"),
            "isUniversityEvent": kind == "academic",
            "start": start.isoformat() if start else None,
            "end": end.isoformat() if end else None,
            "allDay": parse_time(values["start_time"]) is None,
        }

    def values_from_record(self, record: CalendarEvent) -> dict[str, Any]:
        kind = next((k for k, v in EVENT_TYPE_MAP.items() if v == record.event_type), "other")
        start, end = to_local(record.start), to_local(record.end)
        return {
            "title": record.title,
            "type": kind,
            "start_date": start.date().isoformat(),
            "end_date": end.date().isoformat(),
            "start_time": "" if record.all_day else start.strftime("%H:%M"),
            "end_time": "" if record.all_day else end.strftime("%H:%M"),
            "description": record.description,
            "location": record.location,
        }


def _category_for_type(draft: Draft) -> tuple[bool, str, str]:
    allowed = CATEGORIES_BY_TYPE.get(draft.get("type") or "", ())
    if draft.get("category") in allowed:
        return True, f"category is {draft.get('category')}", "category"
    return False, "Please select a valid category", "category"


class TransactionForm(FormController[Transaction]):
    """Income or expense entry. The clock is injectable for date checks."""

    def __init__(
        self,
        resource: RemoteResourceController[Transaction],
        session: Optional[Session] = None,
        today: Optional[Clock] = None,
    ):
        self.today: Clock = today or date.today
        super().__init__(resource, session)

    def defaults(self) -> dict[str, Any]:
        return {
            "type": "expense",
            "category": "",
            "amount": "",
            "date": self.today().isoformat(),
            "description": "",
            "payment_method": "cash",
            "is_essential": False,
            "tags": "",
        }

    def rules(self) -> list[RuleFn]:
        return [
            positive_amount("amount", "Amount must be greater than 0"),
            chosen("type", CATEGORIES_BY_TYPE, "Type must be income or expense"),
            _category_for_type,
            required("date", "Date is required"),
            valid_datetime("date", "Date is not valid"),
            not_after_today("date", "Date cannot be in the future", self.today),
            max_length("description", 200, "Description cannot exceed 200 characters"),
        ]

    def set_field(self, name: str, value: Any) -> None:
        """Switching type clears a category that no longer fits."""
        super().set_field(name, value)
        if name == "type" and self.values["category"] not in CATEGORIES_BY_TYPE.get(value, ()):
            self.values["category"] = ""

    def build_payload(self) -> dict[str, Any]:
        values = self.values
        tags = values["tags"]
        if isinstance(tags, str):
            tags = [t.strip() for t in tags.split(",") if t.strip()]
        return {
            "type": values["type"],
            "category": values["category"],
            "amount": _amount(values["amount"]),
            "date": parse_date(values["date"]).isoformat(),
            "description": _text(values["description"]),
            "paymentMethod": values["payment_method"],
            "isEssential": bool(values["is_essential"]),
            "tags": list(tags),
        }

    def values_from_record(self, record: Transaction) -> dict[str, Any]:
        return {
            "type": record.type,
            "category": record.category,
            "amount": str(record.amount),
            "date": record.date.isoformat(),
            "description": record.description,
            "payment_method": record.payment_method or "cash",
            "is_essential": record.is_essential,
            "tags": ", ".join(record.tags),
        }


class BudgetGoalsForm(FormController[BudgetGoals]):
    def defaults(self) -> dict[str, Any]:
        return {"monthly_budget": "", "monthly_income": "", "savings_goal": ""}

    def rules(self) -> list[RuleFn]:
        return [
            non_negative_amount("monthly_budget", "Monthly budget cannot be negative"),
            non_negative_amount("monthly_income", "Monthly income cannot be negative"),
            non_negative_amount("savings_goal", "Savings goal cannot be negative"),
        ]

    def build_payload(self) -> dict[str, Any]:
        return {
            "monthlyBudget": _amount(self.values["monthly_budget"]),
            "monthlyIncome": _amount(self.values["monthly_income"]),
            "savingsGoal": _amount(self.values["savings_goal"]),
        }

    def values_from_record(self, record: BudgetGoals) -> dict[str, Any]:
        return {
            "monthly_budget": str(record.monthly_budget),
            "monthly_income": str(record.monthly_income),
            "savings_goal": str(record.savings_goal),
        }


class FacultyRatingForm(FormController[FacultyRating]):
    """Three 1-5 scores plus optional comments; the student comes from the session."""

    def defaults(self) -> dict[str, Any]:
        return {
            "faculty_id": "",
            "teaching_quality": None,
            "engagement": None,
            "helpfulness": None,
            "comments": "",
        }

    def rules(self) -> list[RuleFn]:
        score_rules = [
            int_between(name, 1, 5, f"{name.replace('_', ' ').capitalize()} must be between 1 and 5")
            for name in SCORE_FIELDS
        ]
        return [
            required("faculty_id", "Please choose a faculty member"),
            *score_rules,
            max_length("comments", 500, "Comments cannot exceed 500 characters"),
        ]

    def build_payload(self) -> dict[str, Any]:
        values = self.values
        payload: dict[str, Any] = {
            "facultyId": _text(values["faculty_id"]),
            "teachingQuality": int(values["teaching_quality"]),
            "engagement": int(values["engagement"]),
            "helpfulness": int(values["helpfulness"]),
            "comments": _text(values["comments"]),
        }
        if self.session.user_id:
            payload["studentId"] = self.session.user_id
        return payload


JOB_TYPE_LABELS = {
    job_type: " ".join(word.capitalize() for word in job_type.split("-")) for job_type in JOB_TYPES
}


def _lines(value: Any) -> list[str]:
    """Multi-entry inputs arrive as a list or one entry per line."""
    if isinstance(value, str):
        value = value.splitlines()
    return [_text(v) for v in value or () if _text(v)]


class JobForm(FormController[Job]):
    """
    Admin job posting for the career board.

    company_name becomes company.name and the salary_* fields become the salary
    object. Title, company, both descriptions, salary amount and deadline are required.
    """

    def __init__(
        self,
        resource: RemoteResourceController[Job],
        session: Optional[Session] = None,
        today: Optional[Clock] = None,
    ):
        self.today: Clock = today or date.today
        super().__init__(resource, session)

    def defaults(self) -> dict[str, Any]:
        return {
            "title": "",
            "company_name": "",
            "company_website": "",
            "description": "",
            "short_description": "",
            "job_type": "part-time",
            "location": "Remote",
            "salary_amount": "",
            "salary_currency": "USD",
            "salary_period": "hourly",
            "requirements": "",
            "responsibilities": "",
            "deadline": "",
            "contact_email": "",
            "tags": "",
            "status": "draft",
        }

    def rules(self) -> list[RuleFn]:
        return [
            required("title", "Job title is required"),
            required("company_name", "Company name is required"),
            required("description", "Description is required"),
            required("short_description", "Short description is required"),
            max_length("short_description", 250, "Short description cannot exceed 250 characters"),
            chosen("job_type", JOB_TYPE_LABELS, "Please select a job type"),
            required("salary_amount", "Salary amount is required"),
            non_negative_amount("salary_amount", "Salary amount cannot be negative"),
            chosen("salary_currency", SALARY_CURRENCIES, "Currency must be USD, BDT or EUR"),
            chosen("salary_period", SALARY_PERIODS, "Please select a salary period"),
            required("deadline", "Application deadline is required"),
            valid_datetime("deadline", "Application deadline is not a valid date"),
            not_before_today("deadline", "Application deadline cannot be in the past", self.today),
            valid_url("company_website", "Company website must be a valid URL"),
        ]

    def build_payload(self) -> dict[str, Any]:
        values = self.values
        deadline = parse_datetime(values["deadline"])
        tags = values["tags"]
        if isinstance(tags, str):
            tags = [t.strip() for t in tags.split(",") if t.strip()]
        return {
            "title": _text(values["title"]),
            "company": {
                "name": _text(values["company_name"]),
                "website": _text(values["company_website"]),
            },
            "description": _text(values["description"]),
            "shortDescription": _text(values["short_description"]),
            "jobType": values["job_type"],
            "location": _text(values["location"]) or "Remote",
            "salary": {
                "amount": _amount(values["salary_amount"]),
                "currency": values["salary_currency"],
                "period": values["salary_period"],
            },
            "requirements": _lines(values["requirements"]),
            "responsibilities": _lines(values["responsibilities"]),
            "deadline": deadline.isoformat() if deadline else None,
            "contactEmail": _text(values["contact_email"]),
            "status": values["status"],
            "tags": list(tags),
        }

    def values_from_record(self, record: Job) -> dict[str, Any]:
        salary = record.salary
        return {
            "title": record.title,
            "company_name": record.organization or "",
            "company_website": record.company_website or "",
            "description": record.description or "",
            "short_description": record.short_description or "",
            "job_type": record.job_type or "part-time",
            "location": record.location or "Remote",
            "salary_amount": str(salary.amount) if salary else "",
            "salary_currency": salary.currency if salary else "USD",
            "salary_period": salary.period if salary else "hourly",
            "requirements": "\n".join(record.requirements),
            "responsibilities": "\n".join(record.responsibilities),
            "deadline": local_day(record.deadline).isoformat() if record.deadline else "",
            "contact_email": record.contact_email or "",
            "tags": ", ".join(record.tags),
            "status": record.status,
        }
