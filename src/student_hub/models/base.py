"""Common base for records exchanged with the portal backend."""

from datetime import date, datetime
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PortalRecord(BaseModel):
    """
    Backend record with an opaque id.
    Accepts camelCase or snake_case keys and keeps unknown fields,
    since record shapes are owned by the backend.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("_id", "id"),
    )

    def to_payload(self) -> dict[str, Any]:
        """camelCase JSON body for writes; never includes the id."""
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        data.pop("id", None)
        data.pop("_id", None)
        return data


def to_local(value: datetime) -> datetime:
    """Aware datetimes shifted into the local zone; naive ones are already local."""
    return value.astimezone() if value.tzinfo is not None else value


def local_day(value: Union[date, datetime]) -> date:
    """Calendar day as the user sees it. 20:00Z on Mar 1 is Mar 2 in UTC+6."""
    if isinstance(value, datetime):
        return to_local(value).date()
    return value


def coerce_date(value: Any) -> Any:
    """Accept 'YYYY-MM-DD', full ISO datetimes (incl. trailing Z) or datetime objects as a local date."""
    if isinstance(value, datetime):
        return local_day(value)
    if isinstance(value, str) and len(value) > 10:
        try:
            return local_day(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return value
    return value


def coerce_datetime(value: Any) -> Any:
    """Accept ISO strings with trailing Z, and promote bare dates to midnight."""
    if isinstance(value, str) and value.endswith("Z"):
        return value[:-1] + "+00:00"
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    return value
