"""Pytest shared fixtures: network guard, isolated config and JWT helpers."""
import json
import pathlib
import sys
import time
from types import SimpleNamespace
from typing import Any, Optional

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import jwt
import pytest
import requests

TEST_SIGNING_SECRET = "digit-test-signing-secret-0123456789abcdef"
SERVER = "https://digit.example.org"
ISSUER = f"{SERVER}/keycloak/realms/ACME"


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
class StubResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, text: Optional[str] = None):
        self._payload = payload
        self.status_code = status_code
        if text is not None:
            self.text = text
        else:
            self.text = "" if payload is None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(response=self)


@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """
    Prevent unit tests from hitting live DIGIT endpoints.

    Integration tests are explicitly marked with @pytest.mark.integration and
    are allowed to perform real HTTP calls by skipping this fixture.
    """
    if request.node.get_closest_marker("integration"):
        return

    def _blocked(verb):
        def _stub(url, *args, **kwargs):
            raise RuntimeError(f"Unexpected HTTP {verb} in unit test: {url}")
        return _stub

    for verb in ("get", "post", "put", "delete"):
        monkeypatch.setattr(requests, verb, _blocked(verb.upper()))


class HttpRecorder:
    """Routes stubbed requests by method and path suffix and records every call.

    Several responses registered for the same route are returned in order;
    the last one is repeated.
    """

    def __init__(self):
        self.calls = []
        self._routes = []

    def add(self, method: str, path_suffix: str, payload: Any = None, status_code: int = 200,
            text: Optional[str] = None) -> None:
        response = StubResponse(payload, status_code, text)
        for route in self._routes:
            if route.method == method.upper() and route.suffix == path_suffix:
                route.responses.append(response)
                return
        self._routes.append(SimpleNamespace(method=method.upper(), suffix=path_suffix, responses=[response]))

    def calls_to(self, method: str, path_suffix: str):
        return [
            call for call in self.calls
            if call.method == method.upper() and call.url.split("?")[0].endswith(path_suffix)
        ]

    def _handler(self, method: str):
        def _call(url, *args, **kwargs):
            self.calls.append(SimpleNamespace(method=method, url=url, kwargs=kwargs))
            path = url.split("?")[0]
            for route in self._routes:
                if route.method == method and path.endswith(route.suffix):
                    if len(route.responses) > 1:
                        return route.responses.pop(0)
                    return route.responses[0]
            raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")
        return _call

    def install(self, monkeypatch) -> "HttpRecorder":
        for verb in ("get", "post", "put", "delete"):
            monkeypatch.setattr(requests, verb, self._handler(verb.upper()))
        return self


class FakeTokens:
    """Token manager stand-in with a fixed token and identity."""

    def __init__(self, token="tok"):
        self.token = token
        self.calls = 0

    def get_valid_token(self):
        self.calls += 1
        return self.token

    def tenant_id(self):
        return "ACME"

    def client_id(self):
        return "client-123"


@pytest.fixture()
def http(monkeypatch):
    """Recorder replacing requests.get/post/put/delete for the test."""
    return HttpRecorder().install(monkeypatch)


# ─────────────────────────────────────────────────────────────────────────────
# Isolated local state
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def isolated_home(monkeypatch, tmp_path):
    """Point the config file at a temp directory."""
    monkeypatch.setenv("DIGIT_CONFIG", str(tmp_path / "digit" / "config.yaml"))
    monkeypatch.delenv("DIGIT_REQUEST_TIMEOUT", raising=False)
    monkeypatch.delenv("DIGIT_LOG_LEVEL", raising=False)
    return tmp_path / "digit"


# ─────────────────────────────────────────────────────────────────────────────
# JWT Token Helpers
# ─────────────────────────────────────────────────────────────────────────────
def make_jwt(
    sub: Optional[str] = "client-123",
    iss: Optional[str] = ISSUER,
    exp_offset: Optional[int] = 3600,
    now: Optional[float] = None,
    **extra,
) -> str:
    """Create an HS256 token; claims passed as None are omitted."""
    issued = int(now if now is not None else time.time())
    payload = {"iat": issued, "preferred_username": "admin"}
    if sub is not None:
        payload["sub"] = sub
    if iss is not None:
        payload["iss"] = iss
    if exp_offset is not None:
        payload["exp"] = issued + exp_offset
    payload.update(extra)
    return jwt.encode(payload, TEST_SIGNING_SECRET, algorithm="HS256")


@pytest.fixture()
def valid_token() -> str:
    return make_jwt()


@pytest.fixture()
def expired_token() -> str:
    return make_jwt(exp_offset=-60)


# ─────────────────────────────────────────────────────────────────────────────
# Pytest Configuration
# ─────────────────────────────────────────────────────────────────────────────
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (requires a running DIGIT stack)"
    )
