"""Form controller: draft field values, local validation, submit via a resource controller."""

import logging
from enum import Enum
from typing import Any, Generic, Optional

from pydantic.alias_generators import to_snake

from student_hub.controllers.resource import RemoteResourceController, Result, T
from student_hub.errors import ValidationError
from student_hub.forms.rules import RuleFn
from student_hub.session import Session

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class FormController(Generic[T]):
    """
    Holds draft values for one record and submits them through a resource controller.

    IDLE -> EDITING -> VALIDATING -> SUBMITTING -> (SUCCESS -> IDLE) | (ERROR -> EDITING)

    Subclasses provide defaults(), rules(), and usually build_payload() and
    values_from_record(). Validation is synchronous and never touches the network.
    """

    def __init__(
        self,
        resource: RemoteResourceController[T],
        session: Optional[Session] = None,
    ):
        self.resource = resource
        self.session = session or resource.session
        self.values: dict[str, Any] = self.defaults()
        self.errors: dict[str, str] = {}
        self.banner: Optional[str] = None
        self.editing_id: Optional[str] = None
        self.state = FormState.IDLE
        self.transitions: list[FormState] = [FormState.IDLE]
        resource.on_removed(self._on_record_removed)

    # -- subclass hooks -------------------------------------------------------------

    def defaults(self) -> dict[str, Any]:
        return {}

    def rules(self) -> list[RuleFn]:
        return []

    def build_payload(self) -> dict[str, Any]:
        return dict(self.values)

    def values_from_record(self, record: T) -> dict[str, Any]:
        data = record.model_dump()
        return {name: data.get(name, default) for name, default in self.defaults().items()}

    # -- state --------------------------------------------------------------------------

    def _transition(self, state: FormState) -> None:
        self.state = state
        self.transitions.append(state)

    @property
    def is_editing_existing(self) -> bool:
        return self.editing_id is not None

    def set_field(self, name: str, value: Any) -> None:
        """Local mutation only. Unknown field names raise KeyError."""
        if name not in self.values:
            raise KeyError(f"Unknown field: {name}. Fields: {list(self.values.keys())}")
        self.values[name] = value
        self.errors.pop(name, None)
        if self.state != FormState.EDITING:
            self._transition(FormState.EDITING)

    def set_fields(self, **values: Any) -> None:
        for name, value in values.items():
            self.set_field(name, value)

    def validate(self) -> Result[None]:
        """Run every rule; keep the first message per field."""
        self._transition(FormState.VALIDATING)
        field_errors: dict[str, str] = {}
        for rule_fn in self.rules():
            passed, message, field = rule_fn(self.values)
            if not passed and field not in field_errors:
                field_errors[field] = message

        self.errors = field_errors
        self._transition(FormState.EDITING)
        if field_errors:
            return Result.failure(ValidationError(field_errors), field_errors)
        return Result.success(None)

    def submit(self) -> Result[T]:
        """Validate, then create or update depending on editing_id. Invalid drafts never reach the network."""
        if self.state == FormState.SUBMITTING:
            return Result.cancel()

        validation = self.validate()
        if not validation.ok:
            logger.debug("Form for %s rejected locally: %s", self.resource.spec.name, self.errors)
            return Result.failure(validation.error, validation.field_errors)

        self.banner = None
        self._transition(FormState.SUBMITTING)
        payload = self.build_payload()
        if self.editing_id is not None:
            result = self.resource.update(self.editing_id, payload)
        else:
            result = self.resource.create(payload)

        if result.ok:
            self._transition(FormState.SUCCESS)
            self.reset()
            return result
        if result.cancelled:
            self._transition(FormState.EDITING)
            return result

        self._transition(FormState.ERROR)
        self.banner = result.message
        self.errors = self._map_server_errors(result.field_errors)
        self._transition(FormState.EDITING)
        return result

    def _map_server_errors(self, server_errors: dict[str, str]) -> dict[str, str]:
        """Backend keys are camelCase; attach them to matching draft fields."""
        mapped: dict[str, str] = {}
        for key, message in server_errors.items():
            name = key if key in self.values else to_snake(key)
            if name in self.values:
                mapped[name] = message
        return mapped

    def edit(self, record: T) -> None:
        """Load an existing record into the draft; the next submit updates it."""
        self.values = {**self.defaults(), **self.values_from_record(record)}
        self.editing_id = record.id
        self.errors = {}
        self.banner = None
        self._transition(FormState.EDITING)

    def reset(self) -> None:
        """Back to defaults with no edit target."""
        self.values = self.defaults()
        self.errors = {}
        self.banner = None
        self.editing_id = None
        self._transition(FormState.IDLE)

    def _on_record_removed(self, record_id: str) -> None:
        if self.editing_id is not None and record_id == self.editing_id:
            logger.debug("Record %s under edit was removed; resetting form", record_id)
            self.reset()
