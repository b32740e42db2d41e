"""Data models for portal records and the response envelope."""

from student_hub.models.base import PortalRecord
from student_hub.models.budget import BudgetGoals, Transaction
from student_hub.models.cafeteria import Menu, MenuItem
from student_hub.models.deadline import Deadline
from student_hub.models.envelope import Envelope, Pagination
from student_hub.models.event import CalendarEvent
from student_hub.models.opportunity import (
    ApplicationRecord,
    Internship,
    Job,
    Opportunity,
    SavedOpportunity,
    Scholarship,
)
from student_hub.models.rating import FacultyRating

__all__ = [
    "ApplicationRecord",
    "BudgetGoals",
    "CalendarEvent",
    "Deadline",
    "Envelope",
    "FacultyRating",
    "Internship",
    "Job",
    "Menu",
    "MenuItem",
    "Opportunity",
    "Pagination",
    "PortalRecord",
    "SavedOpportunity",
    "Scholarship",
    "Transaction",
]
