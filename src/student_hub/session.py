"""Explicit session context passed to the API client and controllers."""

from typing import Optional

from pydantic import BaseModel, Field


class Session(BaseModel):
    """Signed-in user and the cookies that authenticate their requests."""

    user_id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    role: str = "student"
    cookies: dict[str, str] = Field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id or self.cookies)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
