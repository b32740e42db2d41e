"""Pure derived-view helpers over loaded collections."""

from student_hub.views.budget import (
    BudgetStatus,
    BudgetSummary,
    CategoryShare,
    DaySummary,
    MonthSummary,
    budget_status,
    category_breakdown,
    day_buckets,
    month_calendar,
    monthly_breakdown,
    savings_progress,
    summarize,
)
from student_hub.views.buckets import (
    Countdown,
    DateBucket,
    bucket_counts,
    classify,
    countdown,
    days_until,
    deadline_label,
)
from student_hub.views.filters import (
    filter_deadlines,
    menus_for_day,
    open_opportunities,
    search_opportunities,
    upcoming_events,
)
from student_hub.views.grouping import (
    count_by,
    distinct_sorted,
    group_by,
    group_deadlines_by_course,
    group_events_by_day,
    group_events_by_type,
)
from student_hub.views.ratings import RatingSummary, rating_summary

__all__ = [
    "BudgetStatus",
    "BudgetSummary",
    "CategoryShare",
    "Countdown",
    "DateBucket",
    "DaySummary",
    "MonthSummary",
    "RatingSummary",
    "bucket_counts",
    "budget_status",
    "category_breakdown",
    "classify",
    "count_by",
    "countdown",
    "day_buckets",
    "days_until",
    "deadline_label",
    "distinct_sorted",
    "filter_deadlines",
    "group_by",
    "group_deadlines_by_course",
    "group_events_by_day",
    "group_events_by_type",
    "menus_for_day",
    "month_calendar",
    "monthly_breakdown",
    "open_opportunities",
    "rating_summary",
    "savings_progress",
    "search_opportunities",
    "summarize",
    "upcoming_events",
]
