"""Unit tests for the concrete portal forms."""

from datetime import date

import pytest

from student_hub.client.registry import ResourceRegistry
from student_hub.controllers import RemoteResourceController
from student_hub.forms import (
    BudgetGoalsForm,
    DeadlineForm,
    EventForm,
    FacultyRatingForm,
    JobForm,
    TransactionForm,
)
from student_hub.forms.definitions import JOB_TYPE_LABELS
from student_hub.models import CalendarEvent
from student_hub.models.opportunity import Job

TODAY = date(2025, 1, 10)


def _resource(api, name: str) -> RemoteResourceController:
    return RemoteResourceController(api, ResourceRegistry.get(name))


class TestDeadlineForm:
    """Tests for DeadlineForm rules and payload."""

    def test_exam_payload(self, api) -> None:
        """Exams keep the room, drop mode/link and carry the owner email."""
        form = DeadlineForm(_resource(api, "deadlines"))
        form.set_fields(
            course_code="cse220",
            category="exam",
            name="Midterm",
            due_date="2025-03-01T10:00",
            room="UB40101",
            mode="online",
            submission_link="https://example.com",
        )
        assert form.validate().ok is True
        payload = form.build_payload()
        assert payload["courseCode"] == "CSE220"
        assert payload["dueDate"] == "2025-03-01T10:00:00"
        assert payload["room"] == "UB40101"
        assert payload["ownerEmail"] == "student@g.bracu.ac.bd"
        assert "mode" not in payload
        assert "submissionLink" not in payload

    def test_assignment_payload(self, api) -> None:
        """Assignments drop the room and default the mode to online."""
        form = DeadlineForm(_resource(api, "deadlines"))
        form.set_fields(course_code="CSE220", category="assignment", name="Lab", due_date="2025-03-01T23:59", room="X")
        payload = form.build_payload()
        assert "room" not in payload
        assert payload["mode"] == "online"
        assert payload["submissionLink"] == ""

    @pytest.mark.parametrize(
        "field,value,message",
        [
            ("due_date", "next friday", "Due date is not a valid date"),
            ("submission_link", "not a url", "Submission link must be a valid URL"),
            ("submission_link", "ftp://files.example.com", "Submission link must be a valid URL"),
            ("mode", "carrier pigeon", "Mode must be online, offline or both"),
        ],
    )
    def test_invalid_values(self, api, field: str, value: str, message: str) -> None:
        """Each malformed value is reported on its field."""
        form = DeadlineForm(_resource(api, "deadlines"))
        form.set_fields(course_code="CSE220", category="assignment", name="Lab", due_date="2025-03-01T23:59")
        form.set_field(field, value)
        form.validate()
        assert form.errors == {field: message}


class TestEventForm:
    """Tests for EventForm rules and payload mapping."""

    def test_all_day_event(self, api) -> None:
        """No start time: the event runs 00:00:00 to 23:59:59 and end defaults to start."""
        form = EventForm(_resource(api, "events"))
        form.set_fields(title="Convocation", type="academic", start_date="2025-02-14")
        assert form.validate().ok is True
        payload = form.build_payload()
        assert payload["start"] == "2025-02-14T00:00:00"
        assert payload["end"] == "2025-02-14T23:59:59"
        assert payload["allDay"] is True
        assert payload["eventType"] == "academic"
        assert payload["category"] == "Academic Dates"
        assert payload["isUniversityEvent"] is True

    def test_type_and_category_mapping(self, api) -> None:
        """'other' maps to the general enum and category."""
        form = EventForm(_resource(api, "events"))
        form.set_fields(title="Meetup", type="other", start_date="2025-02-14", start_time="15:00", end_time="17:00")
        payload = form.build_payload()
        assert payload["eventType"] == "general"
        assert payload["category"] == "General"
        assert payload["start"] == "2025-02-14T15:00:00"
        assert payload["end"] == "2025-02-14T17:00:00"
        assert payload["allDay"] is False

    def test_end_date_before_start(self, api) -> None:
        """End date must not precede the start date."""
        form = EventForm(_resource(api, "events"))
        form.set_fields(title="Fest", start_date="2025-02-14", end_date="2025-02-13")
        form.validate()
        assert form.errors == {"end_date": "End date cannot be before start date"}

    def test_end_time_not_after_start(self, api) -> None:
        """With both times set, the end must be strictly later."""
        form = EventForm(_resource(api, "events"))
        form.set_fields(title="Club", type="club", start_date="2025-02-14", start_time="15:00", end_time="15:00")
        form.validate()
        assert form.errors == {"end_time": "End time must be after start time"}

    def test_multi_day_times(self, api) -> None:
        """An earlier clock time on a later day is fine."""
        form = EventForm(_resource(api, "events"))
        form.set_fields(
            title="Hackathon",
            type="club",
            start_date="2025-02-14",
            end_date="2025-02-15",
            start_time="18:00",
            end_time="09:00",
        )
        assert form.validate().ok is True

    @pytest.mark.parametrize("field", ["start_time", "end_time"])
    def test_malformed_time_rejected(self, api, field: str) -> None:
        """An impossible clock time is a field error, never a silent all-day event."""
        form = EventForm(_resource(api, "events"))
        form.set_fields(title="Seminar", type="academic", start_date="2025-03-05", start_time="10:00", end_time="11:00")
        form.set_field(field, "25:99")
        assert form.validate().ok is False
        label = "Start" if field == "start_time" else "End"
        assert form.errors == {field: f"{label} time must be HH:MM"}

    def test_all_day_flag_follows_parsed_start_time(self, api) -> None:
        """allDay and the 00:00-23:59:59 window always agree."""
        form = EventForm(_resource(api, "events"))
        form.set_fields(title="Seminar", start_date="2025-03-05", start_time="  ")
        payload = form.build_payload()
        assert payload["allDay"] is True
        assert payload["start"] == "2025-03-05T00:00:00"
        assert payload["end"] == "2025-03-05T23:59:59"

    def test_edit_shows_local_times(self, api, dhaka_zone) -> None:
        """Stored UTC bounds are shown as local date and time inputs."""
        event = CalendarEvent.model_validate(
            {
                "_id": "e1",
                "title": "Seminar",
                "start": "2025-03-04T20:00:00.000Z",
                "end": "2025-03-04T21:30:00.000Z",
                "eventType": "academic",
            }
        )
        form = EventForm(_resource(api, "events"))
        form.edit(event)
        assert form.values["start_date"] == "2025-03-05"
        assert form.values["start_time"] == "02:00"
        assert form.values["end_time"] == "03:30"

    def test_title_and_start_required(self, api) -> None:
        """Blank title and start date are both reported."""
        form = EventForm(_resource(api, "events"))
        form.validate()
        assert form.errors == {"title": "Title is required", "start_date": "Start date is required"}


class TestTransactionForm:
    """Tests for TransactionForm rules and payload."""

    def _make(self, api) -> TransactionForm:
        return TransactionForm(_resource(api, "transactions"), today=lambda: TODAY)

    def test_defaults_to_today(self, api) -> None:
        """The date field starts at the injected today."""
        assert self._make(api).values["date"] == "2025-01-10"

    def test_valid_payload(self, api) -> None:
        """Amounts become numbers and tags a list."""
        form = self._make(api)
        form.set_fields(amount="250.50", category="food_groceries", tags="weekly, groceries", description="Bazar")
        assert form.validate().ok is True
        payload = form.build_payload()
        assert payload["amount"] == 250.5
        assert payload["type"] == "expense"
        assert payload["date"] == "2025-01-10"
        assert payload["tags"] == ["weekly", "groceries"]
        assert payload["paymentMethod"] == "cash"

    def test_rules(self, api) -> None:
        """Zero amount, category of the wrong type, future date and long description are rejected."""
        form = self._make(api)
        form.set_fields(amount="0", category="salary", date="2025-01-11", description="x" * 201)
        form.validate()
        assert form.errors == {
            "amount": "Amount must be greater than 0",
            "category": "Please select a valid category",
            "date": "Date cannot be in the future",
            "description": "Description cannot exceed 200 characters",
        }

    def test_today_allowed(self, api) -> None:
        """Today itself is not in the future."""
        form = self._make(api)
        form.set_fields(amount=10, category="rent", date="2025-01-10")
        assert form.validate().ok is True

    def test_switching_type_clears_category(self, api) -> None:
        """An expense category does not survive a switch to income."""
        form = self._make(api)
        form.set_field("category", "rent")
        form.set_field("type", "income")
        assert form.values["category"] == ""


class TestBudgetGoalsForm:
    """Tests for BudgetGoalsForm."""

    def test_negative_rejected(self, api) -> None:
        """Negative goals are invalid; blanks are allowed."""
        form = BudgetGoalsForm(_resource(api, "budget-goals"))
        form.set_fields(monthly_budget="-5", savings_goal="abc")
        form.validate()
        assert set(form.errors) == {"monthly_budget", "savings_goal"}

    def test_payload(self, api) -> None:
        """Blank values are sent as zero."""
        form = BudgetGoalsForm(_resource(api, "budget-goals"))
        form.set_fields(monthly_budget="15000", monthly_income="")
        assert form.build_payload() == {"monthlyBudget": 15000.0, "monthlyIncome": 0.0, "savingsGoal": 0.0}


class TestFacultyRatingForm:
    """Tests for FacultyRatingForm."""

    def test_scores_must_be_one_to_five(self, api) -> None:
        """Out-of-range and non-numeric scores are rejected."""
        form = FacultyRatingForm(_resource(api, "ratings"))
        form.set_fields(faculty_id="f1", teaching_quality=0, engagement="great", helpfulness=6)
        form.validate()
        assert set(form.errors) == {"teaching_quality", "engagement", "helpfulness"}

    def test_payload_includes_student(self, api) -> None:
        """The student id comes from the session."""
        form = FacultyRatingForm(_resource(api, "ratings"))
        form.set_fields(faculty_id="f1", teaching_quality="5", engagement=4, helpfulness=3, comments="Clear lectures")
        assert form.validate().ok is True
        payload = form.build_payload()
        assert payload["studentId"] == "u-100"
        assert payload["teachingQuality"] == 5

    def test_comment_limit(self, api) -> None:
        """Comments are capped at 500 characters."""
        form = FacultyRatingForm(_resource(api, "ratings"))
        form.set_fields(faculty_id="f1", teaching_quality=5, engagement=5, helpfulness=5, comments="x" * 501)
        form.validate()
        assert form.errors == {"comments": "Comments cannot exceed 500 characters"}


class TestJobForm:
    """Tests for JobForm."""

    def _make(self, api) -> JobForm:
        return JobForm(_resource(api, "jobs"), today=lambda: TODAY)

    def _fill(self, form: JobForm) -> None:
        form.set_fields(
            title="Teaching Assistant",
            company_name="CSE Department",
            description="Assist with CSE110 labs.",
            short_description="Lab TA, 10 hours a week",
            job_type="on-campus",
            salary_amount="5000",
            salary_currency="BDT",
            salary_period="monthly",
            deadline="2025-01-31",
            requirements="CGPA above 3.5\n\nCompleted CSE110",
            tags="teaching, cse",
        )

    def test_payload_matches_job_document(self, api) -> None:
        """company and salary are nested objects; the deadline key is 'deadline'."""
        form = self._make(api)
        self._fill(form)
        assert form.validate().ok is True
        payload = form.build_payload()
        assert payload["company"] == {"name": "CSE Department", "website": ""}
        assert payload["salary"] == {"amount": 5000.0, "currency": "BDT", "period": "monthly"}
        assert payload["jobType"] == "on-campus"
        assert payload["shortDescription"] == "Lab TA, 10 hours a week"
        assert payload["deadline"] == "2025-01-31T00:00:00"
        assert payload["location"] == "Remote"
        assert payload["requirements"] == ["CGPA above 3.5", "Completed CSE110"]
        assert payload["tags"] == ["teaching", "cse"]
        assert "applicationDeadline" not in payload
        assert "compensation" not in payload

    def test_required_fields(self, api) -> None:
        """Title, company, both descriptions, salary amount and deadline must be filled."""
        form = self._make(api)
        form.validate()
        assert set(form.errors) == {
            "title",
            "company_name",
            "description",
            "short_description",
            "salary_amount",
            "deadline",
        }

    def test_rules(self, api) -> None:
        """Unknown job type, past deadline and an overlong short description are rejected."""
        form = self._make(api)
        self._fill(form)
        form.set_fields(job_type="full-time", deadline="2025-01-09", short_description="x" * 251)
        form.validate()
        assert form.errors == {
            "job_type": "Please select a job type",
            "deadline": "Application deadline cannot be in the past",
            "short_description": "Short description cannot exceed 250 characters",
        }

    def test_job_type_labels(self) -> None:
        """Each backend job type has a display label."""
        assert JOB_TYPE_LABELS == {
            "part-time": "Part Time",
            "remote": "Remote",
            "on-campus": "On Campus",
            "freelance": "Freelance",
            "internship": "Internship",
        }

    def test_edit_round_trips_backend_record(self, api) -> None:
        """Editing a stored job restores nested company and salary values."""
        job = Job.model_validate(
            {
                "_id": "j1",
                "title": "Library Assistant",
                "company": {"name": "BRAC University Library", "website": "https://library.bracu.ac.bd"},
                "description": "Shelving and front desk.",
                "shortDescription": "Front desk help",
                "jobType": "part-time",
                "salary": {"amount": 150, "currency": "BDT", "period": "hourly"},
                "deadline": "2025-02-01T00:00:00Z",
                "status": "active",
            }
        )
        form = self._make(api)
        form.edit(job)
        assert form.values["company_name"] == "BRAC University Library"
        assert form.values["company_website"] == "https://library.bracu.ac.bd"
        assert form.values["salary_amount"] == "150"
        assert form.values["deadline"] == "2025-02-01"
        assert form.validate().ok is True
