"""Error taxonomy for portal operations."""

from typing import Optional


class PortalError(Exception):
    """Base class for all student hub errors."""

    kind: str = "unknown"
    default_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def user_message(self) -> str:
        """Single human-readable line suitable for a banner."""
        return self.message


class ValidationError(PortalError):
    """Local, pre-network validation failure with per-field messages."""

    kind = "validation"
    default_message = "Please fix the highlighted fields."

    def __init__(self, field_errors: dict[str, str], message: Optional[str] = None):
        super().__init__(message)
        self.field_errors = dict(field_errors)


class ApiError(PortalError):
    """Failure at the network boundary."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class NetworkError(ApiError):
    """No response received (connection refused, DNS failure, timeout)."""

    kind = "network"
    default_message = "Could not reach the server. Check your connection and try again."

    @property
    def user_message(self) -> str:
        return self.default_message


class ClientError(ApiError):
    """4xx response, or a 2xx envelope with success=false."""

    kind = "client"
    default_message = "The request was rejected by the server."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        field_errors: Optional[dict[str, str]] = None,
    ):
        super().__init__(message, status_code=status_code, url=url)
        self.field_errors = dict(field_errors or {})

    @property
    def unauthorized(self) -> bool:
        return self.status_code in (401, 403)

    @property
    def user_message(self) -> str:
        if self.status_code == 401:
            return "Session expired or unauthorized. Please log in again."
        if self.status_code == 403:
            return "You do not have permission to do that."
        if self.status_code == 404 and self.message == self.default_message:
            return "The requested item was not found."
        return self.message


class ServerError(ApiError):
    """5xx response."""

    kind = "server"
    default_message = "The server ran into a problem. Please try again later."


class MalformedResponseError(ApiError):
    """Response body could not be interpreted."""

    kind = "unknown"
    default_message = "The server sent an unexpected response."

    @property
    def user_message(self) -> str:
        return self.default_message
