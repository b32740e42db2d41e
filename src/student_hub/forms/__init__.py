"""Draft editing, local validation and submission for portal records."""

from student_hub.forms.controller import FormController, FormState
from student_hub.forms.definitions import (
    BudgetGoalsForm,
    DeadlineForm,
    EventForm,
    FacultyRatingForm,
    JobForm,
    TransactionForm,
)

__all__ = [
    "BudgetGoalsForm",
    "DeadlineForm",
    "EventForm",
    "FacultyRatingForm",
    "FormController",
    "FormState",
    "JobForm",
    "TransactionForm",
]
