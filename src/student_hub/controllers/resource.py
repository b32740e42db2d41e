"""Remote resource controller: cached server state plus CRUD for one resource type."""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Generic, Optional, TypeVar

from pydantic import ValidationError as ModelValidationError

from student_hub.client.base import ApiClient
from student_hub.client.registry import ResourceSpec
from student_hub.errors import ApiError, MalformedResponseError, PortalError
from student_hub.models.base import PortalRecord
from student_hub.models.envelope import Envelope
from student_hub.session import Session

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=PortalRecord)
V = TypeVar("V")


@dataclass
class Result(Generic[V]):
    """Outcome of a controller or form operation."""

    ok: bool
    value: Optional[V] = None
    error: Optional[PortalError] = None
    field_errors: dict[str, str] = field(default_factory=dict)
    cancelled: bool = False

    @classmethod
    def success(cls, value: Optional[V] = None) -> "Result[V]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(
        cls,
        error: Optional[PortalError],
        field_errors: Optional[dict[str, str]] = None,
    ) -> "Result[V]":
        return cls(ok=False, error=error, field_errors=dict(field_errors or {}))

    @classmethod
    def cancel(cls) -> "Result[V]":
        return cls(ok=False, cancelled=True)

    @property
    def message(self) -> Optional[str]:
        return self.error.user_message if self.error else None


@dataclass
class ResourceState(Generic[T]):
    """What the rendering layer reads. items/current survive failed refreshes."""

    items: list[T] = field(default_factory=list)
    current: Optional[T] = None
    loading: bool = False
    error: Optional[PortalError] = None
    loaded_at: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return not self.loading and self.error is None and not self.items

    @property
    def error_message(self) -> Optional[str]:
        return self.error.user_message if self.error else None


RemovedListener = Callable[[str], None]


class RemoteResourceController(Generic[T]):
    """
    Mediates between a caller and one REST collection endpoint.

    - load/get replace the cache on success; on failure only state.error changes
      (stale-but-available).
    - create/update/remove refetch the collection after a successful write.
    - Every request takes a generation token. Loads superseded by a newer load,
      and any response after dispose(), are discarded without touching state.
    """

    def __init__(
        self,
        api: ApiClient,
        spec: ResourceSpec,
        session: Optional[Session] = None,
    ):
        self.api = api
        self.spec = spec
        self.session = session or api.session
        self.state: ResourceState[T] = ResourceState()
        self._last_params: dict[str, Any] = {}
        self._generation = 0
        self._disposed = False
        self._lock = threading.Lock()
        self._removed_listeners: list[RemovedListener] = []

    # -- generation bookkeeping -------------------------------------------------

    def _begin(self) -> int:
        with self._lock:
            if self._disposed:
                raise RuntimeError(f"Controller for {self.spec.name} has been disposed")
            self._generation += 1
            return self._generation

    def _is_current(self, token: int) -> bool:
        with self._lock:
            return not self._disposed and token == self._generation

    def _is_live(self) -> bool:
        with self._lock:
            return not self._disposed

    @property
    def disposed(self) -> bool:
        return not self._is_live()

    def dispose(self) -> None:
        """Tear down: late responses are ignored and further operations raise RuntimeError."""
        with self._lock:
            self._disposed = True
        self._removed_listeners.clear()
        logger.debug("Disposed %s controller", self.spec.name)

    # -- helpers ------------------------------------------------------------------

    def _scoped_params(self, params: Optional[dict[str, Any]]) -> dict[str, Any]:
        scoped: dict[str, Any] = {}
        for param, attr in self.spec.session_scope.items():
            value = getattr(self.session, attr, None)
            if value:
                scoped[param] = value
        scoped.update(params or {})
        return scoped

    def _parse_one(self, data: Any) -> T:
        if isinstance(data, list):
            if not data:
                raise MalformedResponseError("Expected a record, got an empty list")
            data = data[0]
        try:
            return self.spec.model.model_validate(data)
        except ModelValidationError as e:
            raise MalformedResponseError(
                f"Invalid {self.spec.name} record: {e.error_count()} field error(s)"
            ) from e

    def _parse_many(self, envelope: Envelope) -> list[T]:
        try:
            return [self.spec.model.model_validate(d) for d in envelope.as_list()]
        except ModelValidationError as e:
            raise MalformedResponseError(
                f"Invalid {self.spec.name} list: {e.error_count()} field error(s)"
            ) from e

    def _fail(self, token: int, error: PortalError, action: str) -> Result:
        logger.warning("%s %s failed: %s", action, self.spec.name, error)
        if self._is_current(token):
            self.state.error = error
            self.state.loading = False
        return Result.failure(error, getattr(error, "field_errors", None))

    def _on_envelope(self, envelope: Envelope) -> None:
        """Hook for subclasses that read more than data (e.g. pagination)."""

    # -- reads ----------------------------------------------------------------------

    def load(self, params: Optional[dict[str, Any]] = None) -> Result[list[T]]:
        """GET the collection. Params are remembered for refresh and refetch-after-write, even on failure."""
        token = self._begin()
        self._last_params = dict(params or {})
        query = self._scoped_params(params)
        self.state.loading = True
        try:
            envelope = self.api.get(
                self.spec.path, params=query, resource_keys=self.spec.keys
            )
            items = self._parse_many(envelope)
        except ApiError as e:
            return self._fail(token, e, "load")

        if not self._is_current(token):
            logger.debug("Discarding superseded %s load (token=%d)", self.spec.name, token)
            return Result.cancel()

        self.state.items = items
        self.state.error = None
        self.state.loading = False
        self.state.loaded_at = datetime.now(timezone.utc)
        self._on_envelope(envelope)
        return Result.success(items)

    def refresh(self) -> Result[list[T]]:
        """User-triggered retry of the most recent load, failed or not."""
        return self.load(self._last_params)

    def get(self, record_id: str) -> Result[T]:
        """GET one record into state.current."""
        token = self._begin()
        self.state.loading = True
        try:
            envelope = self.api.get(
                self.spec.item_path(record_id), resource_keys=self.spec.keys
            )
            record = self._parse_one(envelope.data)
        except ApiError as e:
            return self._fail(token, e, "get")

        if not self._is_current(token):
            return Result.cancel()
        self.state.current = record
        self.state.error = None
        self.state.loading = False
        return Result.success(record)

    def find(self, record_id: str) -> Optional[T]:
        """Look up a cached record without a network call."""
        return next((r for r in self.state.items if r.id == record_id), None)

    # -- writes ---------------------------------------------------------------------

    def _write(self, action: str, call: Callable[[], Envelope]) -> Result:
        token = self._begin()
        try:
            envelope = call()
            record = self._parse_one(envelope.data) if envelope.data else None
        except ApiError as e:
            return self._fail(token, e, action)

        if not self._is_live():
            logger.debug("Ignoring %s response after dispose", action)
            return Result.cancel()
        self.state.error = None
        self.load(self._last_params)
        return Result.success(record)

    def create(self, payload: dict[str, Any]) -> Result[T]:
        """POST a new record, then refetch."""
        return self._write(
            "create",
            lambda: self.api.post(self.spec.path, json=payload, resource_keys=self.spec.keys),
        )

    def update(self, record_id: str, payload: dict[str, Any]) -> Result[T]:
        """PUT changes to one record, then refetch."""
        return self._write(
            "update",
            lambda: self.api.put(
                self.spec.item_path(record_id), json=payload, resource_keys=self.spec.keys
            ),
        )

    def remove(
        self,
        record_id: str,
        confirm: Optional[Callable[[str], bool]] = None,
    ) -> Result[None]:
        """DELETE one record after an optional confirmation, notify listeners, then refetch."""
        if confirm is not None and not confirm(record_id):
            return Result.cancel()
        token = self._begin()
        try:
            self.api.delete(self.spec.item_path(record_id), resource_keys=self.spec.keys)
        except ApiError as e:
            return self._fail(token, e, "remove")

        if not self._is_live():
            return Result.cancel()
        self.state.error = None
        if self.state.current is not None and self.state.current.id == record_id:
            self.state.current = None
        for listener in list(self._removed_listeners):
            listener(record_id)
        self.load(self._last_params)
        return Result.success(None)

    def on_removed(self, listener: RemovedListener) -> None:
        """Register a callback invoked with the id of each successfully removed record."""
        self._removed_listeners.append(listener)
