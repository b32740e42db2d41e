"""Cafeteria menus."""

import datetime as dt
from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from student_hub.models.base import PortalRecord, coerce_date

CAFETERIA_NAMES = {
    "main": "Main Cafeteria",
    "annex": "Annex Building Cafeteria",
    "ub": "UB Cafeteria",
    "faculty": "Faculty Cafeteria",
}
MEAL_ORDER = ("breakfast", "lunch", "dinner")


class MenuItem(BaseModel):
    """One food item on a menu, flattened from {item: {...}, available, specialNote}."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: str
    price: Optional[Decimal] = None
    category: Optional[str] = None
    available: bool = True
    special_note: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: dict[str, Any]) -> "MenuItem":
        item = entry.get("item")
        if isinstance(item, dict):
            merged = {**item, **{k: v for k, v in entry.items() if k != "item"}}
            return cls.model_validate(merged)
        return cls.model_validate(entry)


class Menu(PortalRecord):
    """Published menu for one meal at one cafeteria on one day."""

    date: dt.date
    meal_type: Literal["breakfast", "lunch", "dinner"]
    cafeteria: str = "main"
    status: str = "published"
    items: list[MenuItem] = Field(
        default_factory=list,
        validation_alias="foodItems",
    )

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value):
        return coerce_date(value)

    @field_validator("items", mode="before")
    @classmethod
    def _flatten_items(cls, value):
        if not value:
            return []
        return [MenuItem.from_entry(v) if isinstance(v, dict) else v for v in value]

    @property
    def cafeteria_name(self) -> str:
        return CAFETERIA_NAMES.get(self.cafeteria, "Cafeteria")

    @property
    def available_items(self) -> list[MenuItem]:
        return [i for i in self.items if i.available]
