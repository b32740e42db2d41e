"""Paginated listing controller for jobs, internships and scholarships."""

from typing import Any, Optional

from student_hub.client.base import ApiClient
from student_hub.client.registry import ResourceSpec
from student_hub.controllers.resource import RemoteResourceController, Result, T
from student_hub.models.envelope import Envelope, Pagination
from student_hub.session import Session


class PaginatedResourceController(RemoteResourceController[T]):
    """Remote resource controller that pages through a listing with a fixed page size."""

    def __init__(
        self,
        api: ApiClient,
        spec: ResourceSpec,
        session: Optional[Session] = None,
        page_size: Optional[int] = None,
    ):
        super().__init__(api, spec, session)
        self.page_size = page_size or api.settings.page_size
        self.pagination = Pagination(page_size=self.page_size)
        self.filters: dict[str, Any] = {}

    def _on_envelope(self, envelope: Envelope) -> None:
        if envelope.pagination is not None:
            self.pagination = envelope.pagination
        else:
            # Unpaginated reply: everything fits on the requested page
            page = int(self._last_params.get("page", 1))
            self.pagination = Pagination(
                current_page=page,
                total_pages=page,
                total_items=len(self.state.items),
                page_size=self.page_size,
                has_next_page=False,
                has_prev_page=page > 1,
            )

    def load_page(self, page: int = 1, filters: Optional[dict[str, Any]] = None) -> Result[list[T]]:
        """Load one page; filters replace the current filter set when given."""
        if page < 1:
            raise ValueError(f"Page numbers start at 1, got {page}")
        if filters is not None:
            self.filters = {k: v for k, v in filters.items() if v not in (None, "", "all")}
        return self.load({**self.filters, "page": page, "limit": self.page_size})

    def next_page(self) -> Result[list[T]]:
        if not self.pagination.has_next_page:
            return Result.cancel()
        return self.load_page(self.pagination.current_page + 1)

    def previous_page(self) -> Result[list[T]]:
        if not self.pagination.has_prev_page:
            return Result.cancel()
        return self.load_page(self.pagination.current_page - 1)
