"""Budget tracker aggregates: per-day buckets, month calendar, summaries and goal status."""

import calendar
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from student_hub.models.budget import Transaction, category_label

ZERO = Decimal("0")

# Weeks start on Sunday
_CALENDAR = calendar.Calendar(firstweekday=calendar.SUNDAY)


@dataclass
class DaySummary:
    day: date
    income: Decimal = ZERO
    expense: Decimal = ZERO
    count: int = 0

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense

    def add(self, transaction: Transaction) -> None:
        if transaction.type == "income":
            self.income += transaction.amount
        else:
            self.expense += transaction.amount
        self.count += 1


@dataclass(frozen=True)
class BudgetSummary:
    total_income: Decimal
    total_expense: Decimal
    income_count: int
    expense_count: int

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense

    @property
    def transaction_count(self) -> int:
        return self.income_count + self.expense_count


@dataclass(frozen=True)
class CategoryShare:
    category: str
    total: Decimal
    count: int
    percent: float

    @property
    def label(self) -> str:
        return category_label(self.category)


@dataclass(frozen=True)
class MonthSummary:
    month: str  # YYYY-MM
    income: Decimal
    expense: Decimal

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True)
class BudgetStatus:
    level: str  # info | success | warning | danger
    percent_used: float
    remaining: Decimal
    message: str


def day_buckets(transactions: Iterable[Transaction]) -> dict[date, DaySummary]:
    """Per calendar day income, expense, net balance and count; days ascending."""
    buckets: dict[date, DaySummary] = {}
    for transaction in transactions:
        buckets.setdefault(transaction.date, DaySummary(transaction.date)).add(transaction)
    return {day: buckets[day] for day in sorted(buckets)}


def month_calendar(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
) -> list[list[Optional[DaySummary]]]:
    """
    Weeks of seven cells, Sunday first. Days outside the month are None padding.
    Days in the month without transactions get an empty DaySummary.
    """
    buckets = day_buckets(t for t in transactions if (t.date.year, t.date.month) == (year, month))
    weeks: list[list[Optional[DaySummary]]] = []
    for week in _CALENDAR.monthdayscalendar(year, month):
        cells: list[Optional[DaySummary]] = []
        for day_number in week:
            if day_number == 0:
                cells.append(None)
                continue
            day = date(year, month, day_number)
            cells.append(buckets.get(day) or DaySummary(day))
        weeks.append(cells)
    while weeks and all(cell is None for cell in weeks[-1]):
        weeks.pop()
    return weeks


def summarize(transactions: Iterable[Transaction]) -> BudgetSummary:
    income = expense = ZERO
    income_count = expense_count = 0
    for t in transactions:
        if t.type == "income":
            income += t.amount
            income_count += 1
        else:
            expense += t.amount
            expense_count += 1
    return BudgetSummary(income, expense, income_count, expense_count)


def category_breakdown(
    transactions: Iterable[Transaction],
    transaction_type: str = "expense",
) -> list[CategoryShare]:
    """Totals per category for one transaction type, largest first."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    counts: dict[str, int] = defaultdict(int)
    for t in transactions:
        if t.type != transaction_type:
            continue
        totals[t.category] += t.amount
        counts[t.category] += 1

    grand_total = sum(totals.values(), ZERO)
    shares = [
        CategoryShare(
            category=category,
            total=total,
            count=counts[category],
            percent=round(float(total / grand_total * 100), 1) if grand_total else 0.0,
        )
        for category, total in totals.items()
    ]
    return sorted(shares, key=lambda s: (-s.total, s.category))


def monthly_breakdown(transactions: Iterable[Transaction]) -> list[MonthSummary]:
    """Income and expense per calendar month, oldest first."""
    income: dict[str, Decimal] = defaultdict(lambda: ZERO)
    expense: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for t in transactions:
        month = f"{t.date.year:04d}-{t.date.month:02d}"
        if t.type == "income":
            income[month] += t.amount
        else:
            expense[month] += t.amount
    months = sorted(set(income) | set(expense))
    return [MonthSummary(m, income[m], expense[m]) for m in months]


def budget_status(spent: Decimal, monthly_budget: Optional[Decimal]) -> BudgetStatus:
    """success below 70% of the budget, warning below 90%, danger from there on."""
    if not monthly_budget or monthly_budget <= 0:
        return BudgetStatus("info", 0.0, ZERO, "No monthly budget set")
    percent = float(spent / monthly_budget * 100)
    remaining = monthly_budget - spent
    if percent < 70:
        level, message = "success", "On track"
    elif percent < 90:
        level, message = "warning", "Approaching your monthly budget"
    elif percent <= 100:
        level, message = "danger", "Monthly budget almost used up"
    else:
        level, message = "danger", "Over budget"
    return BudgetStatus(level, round(percent, 1), remaining, message)


def savings_progress(balance: Decimal, savings_goal: Optional[Decimal]) -> float:
    """Percent of the savings goal covered by a positive balance, clamped to 0-100."""
    if not savings_goal or savings_goal <= 0 or balance <= 0:
        return 0.0
    return round(min(100.0, float(balance / savings_goal * 100)), 1)
