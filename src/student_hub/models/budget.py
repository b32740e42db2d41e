"""Budget tracker transactions and goals."""

import datetime as dt
from decimal import Decimal
from typing import Literal, Optional

from pydantic import Field, field_validator

from student_hub.models.base import PortalRecord, coerce_date

INCOME_CATEGORIES = (
    "salary",
    "allowance",
    "scholarship",
    "freelance",
    "investment",
    "gift",
    "other_income",
)
EXPENSE_CATEGORIES = (
    "tuition_fees",
    "books_supplies",
    "rent",
    "utilities",
    "food_groceries",
    "transportation",
    "entertainment",
    "shopping",
    "healthcare",
    "subscriptions",
    "dining_out",
    "other_expense",
)
CATEGORIES_BY_TYPE: dict[str, tuple[str, ...]] = {
    "income": INCOME_CATEGORIES,
    "expense": EXPENSE_CATEGORIES,
}
PAYMENT_METHODS = ("cash", "card", "mobile_banking", "online_transfer", "other")


def category_label(category: str) -> str:
    """'food_groceries' -> 'Food Groceries'; a few labels differ from the plain title-case."""
    special = {"books_supplies": "Books & Supplies", "food_groceries": "Food & Groceries"}
    return special.get(category, category.replace("_", " ").title())


class Transaction(PortalRecord):
    """One income or expense entry on a calendar day."""

    type: Literal["income", "expense"]
    category: str
    amount: Decimal = Field(..., gt=0)
    date: dt.date
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    payment_method: Optional[str] = None
    is_essential: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value):
        return coerce_date(value)

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == "income" else -self.amount


class BudgetGoals(PortalRecord):
    """Per-user monthly targets."""

    monthly_budget: Decimal = Decimal("0")
    monthly_income: Decimal = Decimal("0")
    savings_goal: Decimal = Decimal("0")
    expense_limits: dict[str, Decimal] = Field(default_factory=dict)
