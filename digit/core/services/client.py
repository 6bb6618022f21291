"""Low-level HTTP client for DIGIT platform services.

Handles bearer authentication, tenant/client headers and HTTP operations.
"""
from __future__ import annotations
import json
import logging
import os
from typing import Any, Dict, Optional

import requests

from .exceptions import RemoteRequestError

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 30.0


def request_timeout() -> float:
    """Return the per-request timeout in seconds (``DIGIT_REQUEST_TIMEOUT``)."""
    raw = os.environ.get("DIGIT_REQUEST_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid DIGIT_REQUEST_TIMEOUT=%r", raw)
        return DEFAULT_REQUEST_TIMEOUT
    return value if value > 0 else DEFAULT_REQUEST_TIMEOUT


def parse_body(resp: requests.Response) -> Any:
    """Return the JSON body of a response, its raw text, or None when empty."""
    text = resp.text or ""
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


class DigitClient:
    """HTTP client for DIGIT services with token-backed authentication.

    Features:
    - Bearer token obtained from a token manager on every call (refreshed when expired)
    - Tenant and client headers derived from the token claims
    - Centralized error handling

    Usage:
        client = DigitClient("https://digit.example.org", token_manager)
        resp = client.post("/workflow/v1/process", json=payload, headers=client.tenant_headers())
    """

    def __init__(self, base_url: str, token_manager=None, timeout: Optional[float] = None):
        """Initialize DIGIT client.

        Args:
            base_url: Gateway base URL (e.g. https://digit.example.org)
            token_manager: Object exposing get_valid_token(); None for unauthenticated calls
            timeout: Request timeout in seconds (defaults to DIGIT_REQUEST_TIMEOUT or 30)
        """
        if not base_url:
            raise ValueError("server URL is required")
        self.base_url = base_url.rstrip("/")
        self.token_manager = token_manager
        self.timeout = timeout if timeout is not None else request_timeout()

    # ─────────────────────────────────────────────────────────────────────
    # Headers
    # ─────────────────────────────────────────────────────────────────────

    def _auth_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        merged = dict(headers or {})
        if self.token_manager is not None:
            merged["Authorization"] = f"Bearer {self.token_manager.get_valid_token()}"
        return merged

    def tenant_headers(self) -> Dict[str, str]:
        """Return the ``X-Tenant-ID`` header derived from the current token."""
        if self.token_manager is None:
            return {}
        return {"X-Tenant-ID": self.token_manager.tenant_id()}

    def client_headers(self) -> Dict[str, str]:
        """Return both ``X-Tenant-ID`` and ``X-Client-ID`` headers."""
        if self.token_manager is None:
            return {}
        headers = self.tenant_headers()
        headers["X-Client-ID"] = self.token_manager.client_id()
        return headers

    # ─────────────────────────────────────────────────────────────────────
    # HTTP verbs
    # ─────────────────────────────────────────────────────────────────────

    def get(self, path: str, params: Optional[Dict] = None, **kwargs) -> requests.Response:
        """Execute GET request.

        Raises:
            RemoteRequestError: On HTTP or transport error
        """
        url = f"{self.base_url}{path}"
        headers = self._auth_headers(kwargs.pop("headers", None))
        return self._send("get", url, params=params, headers=headers, **kwargs)

    def post(self, path: str, json: Optional[Any] = None, data: Optional[Dict] = None, **kwargs) -> requests.Response:
        """Execute POST request.

        Raises:
            RemoteRequestError: On HTTP or transport error
        """
        url = f"{self.base_url}{path}"
        headers = self._auth_headers(kwargs.pop("headers", None))
        return self._send("post", url, json=json, data=data, headers=headers, **kwargs)

    def put(self, path: str, json: Optional[Any] = None, **kwargs) -> requests.Response:
        """Execute PUT request.

        Raises:
            RemoteRequestError: On HTTP or transport error
        """
        url = f"{self.base_url}{path}"
        headers = self._auth_headers(kwargs.pop("headers", None))
        return self._send("put", url, json=json, headers=headers, **kwargs)

    def delete(self, path: str, params: Optional[Dict] = None, **kwargs) -> requests.Response:
        """Execute DELETE request.

        Raises:
            RemoteRequestError: On HTTP or transport error
        """
        url = f"{self.base_url}{path}"
        headers = self._auth_headers(kwargs.pop("headers", None))
        return self._send("delete", url, params=params, headers=headers, **kwargs)

    def _send(self, verb: str, url: str, **kwargs) -> requests.Response:
        logger.debug("%s %s", verb.upper(), url)
        method = getattr(requests, verb)
        try:
            resp = method(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise RemoteRequestError(None, str(e), url) from e
        self._handle_error(resp, url)
        return resp

    @staticmethod
    def _handle_error(resp: requests.Response, endpoint: str) -> None:
        """Raise RemoteRequestError for any non-2xx response."""
        if not 200 <= resp.status_code < 300:
            raise RemoteRequestError(resp.status_code, resp.text, endpoint)
