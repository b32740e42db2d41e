"""HTTP client for the portal backend. All responses leave here as an Envelope or a typed error."""

import logging
from typing import Any, Optional, Sequence

import httpx

from student_hub.client.envelope import normalize_envelope
from student_hub.config import PortalSettings
from student_hub.errors import (
    ClientError,
    MalformedResponseError,
    NetworkError,
    ServerError,
)
from student_hub.models.envelope import Envelope
from student_hub.session import Session

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Thin wrapper over httpx.Client.
    Sends session cookies with every request, prefixes relative paths with the API prefix,
    and collapses transport/status/body failures into the ApiError taxonomy.
    """

    DEFAULT_HEADERS = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }

    def __init__(
        self,
        settings: Optional[PortalSettings] = None,
        session: Optional[Session] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.settings = settings or PortalSettings()
        self.session = session or Session()
        self._client = client or httpx.Client(
            base_url=self.settings.base_url,
            timeout=self.settings.timeout,
            follow_redirects=True,
            headers={**self.DEFAULT_HEADERS, "User-Agent": self.settings.user_agent},
        )
        for name, value in self.session.cookies.items():
            self._client.cookies.set(name, value)

    def _url(self, path: str) -> str:
        """Ensure API calls go to the API prefix; absolute URLs pass through."""
        if path.startswith(("http://", "https://")):
            return path
        prefix = self.settings.api_prefix.rstrip("/")
        if not path.startswith("/"):
            path = "/" + path
        if prefix and not path.startswith(prefix + "/"):
            path = prefix + path
        return path

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
        resource_keys: Sequence[str] = (),
    ) -> Envelope:
        """
        Issue one request and return the normalized envelope.
        Raises NetworkError, ClientError, ServerError or MalformedResponseError.
        """
        url = self._url(path)
        clean_params = {k: v for k, v in (params or {}).items() if v is not None and v != ""}
        logger.debug("%s %s params=%s", method, url, clean_params)
        try:
            resp = self._client.request(method, url, params=clean_params or None, json=json)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request timed out: {e}", url=url) from e
        except httpx.RequestError as e:
            raise NetworkError(str(e) or type(e).__name__, url=url) from e

        body = self._decode(resp, url)

        if resp.status_code >= 500:
            message = _message_from(body)
            raise ServerError(message, status_code=resp.status_code, url=url)
        if resp.status_code >= 400:
            raise ClientError(
                _message_from(body),
                status_code=resp.status_code,
                url=url,
                field_errors=_errors_from(body),
            )
        if body is None:
            return Envelope(success=True, data=None)

        try:
            envelope = normalize_envelope(
                body, resource_keys, page_size=self.settings.page_size
            )
        except ValueError as e:
            raise MalformedResponseError(str(e), status_code=resp.status_code, url=url) from e

        if not envelope.success:
            raise ClientError(
                envelope.message,
                status_code=resp.status_code,
                url=url,
                field_errors=envelope.field_errors,
            )
        return envelope

    def _decode(self, resp: httpx.Response, url: str) -> Any:
        """JSON body, or None for empty bodies. Error statuses tolerate non-JSON bodies."""
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            if resp.status_code >= 400:
                return None
            content_type = resp.headers.get("content-type", "")
            logger.warning(
                "Non-JSON response from %s (status=%s, content-type=%s)",
                url,
                resp.status_code,
                content_type,
            )
            raise MalformedResponseError(
                "Expected JSON from server", status_code=resp.status_code, url=url
            ) from e

    def get(self, path: str, **kwargs) -> Envelope:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> Envelope:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> Envelope:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs) -> Envelope:
        return self.request("DELETE", path, **kwargs)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _message_from(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        return str(message) if message else None
    return None


def _errors_from(body: Any) -> dict[str, str]:
    if isinstance(body, dict) and isinstance(body.get("errors"), dict):
        return {str(k): str(v) for k, v in body["errors"].items()}
    return {}
