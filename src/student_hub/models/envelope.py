"""Normalized response envelope and pagination."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Listing position; has_* flags are derived when the backend omits them."""

    current_page: int = 1
    total_pages: int = 1
    total_items: int = 0
    page_size: int = 12
    has_next_page: bool = False
    has_prev_page: bool = False


class Envelope(BaseModel):
    """The single response shape every controller sees."""

    success: bool = True
    data: Any = None
    pagination: Optional[Pagination] = None
    message: Optional[str] = None
    field_errors: dict[str, str] = Field(default_factory=dict)

    def as_list(self) -> list[Any]:
        """Data as a list; a single record becomes a one-element list, None becomes []."""
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return self.data
        return [self.data]
