"""
HTTP client wrapper for the ReferHub REST API.

Attaches the bearer token from the session store to every authenticated
call and turns error responses into ``ApiError``.
"""

import logging
from typing import Any, Optional

import requests

from referhub.core.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed API call: an error response or a transport failure."""

    def __init__(self, status_code: Optional[int], detail: Any = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"API error {status_code}: {detail}")

    def message(self, fallback: str) -> str:
        """Server-provided detail when it is human-readable, else ``fallback``."""
        if isinstance(self.detail, str) and self.detail.strip():
            return self.detail
        return fallback


class ApiClient:
    """
    Thin wrapper around a requests-style session.

    Args:
        session: SessionStore the bearer token is read from
        base_url: Backend origin; defaults to REACT_APP_BACKEND_URL
        transport: Object with a ``requests.Session``-style ``request`` method
        timeout: Per-request timeout in seconds
    """

    def __init__(self, session, base_url: Optional[str] = None, transport=None, timeout: float = 30):
        self.session = session
        if base_url is None:
            base_url = settings.REACT_APP_BACKEND_URL
        self.api_root = f"{base_url.rstrip('/')}/api"
        self.transport = transport if transport is not None else requests.Session()
        self.timeout = timeout

    def auth_headers(self) -> dict[str, str]:
        token = self.session.token
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def request(self, method: str, path: str, auth: bool = True, **kwargs) -> Any:
        """
        Issue one request against ``{api_root}{path}``.

        Returns:
            The decoded JSON body, or None when the response has no body

        Raises:
            ApiError: on a status >= 400 or when the request could not be sent
        """
        headers = dict(kwargs.pop("headers", None) or {})
        if auth:
            headers.update(self.auth_headers())

        url = f"{self.api_root}{path}"
        try:
            response = self.transport.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise ApiError(None, str(e)) from e

        if response.status_code >= 400:
            raise ApiError(response.status_code, _error_detail(response))

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> Any:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)


def _error_detail(response) -> Any:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("detail")
    return None
