"""Unit tests for the DIGIT HTTP client."""
import pytest
import requests

from digit.core.services.client import DigitClient, parse_body, request_timeout
from digit.core.services.exceptions import RemoteRequestError
from tests.conftest import SERVER, FakeTokens, StubResponse


def test_bearer_and_tenant_headers_are_sent(http):
    http.add("GET", "/workflow/v1/process/definition", {"id": "p1"})
    client = DigitClient(SERVER + "/", FakeTokens())

    client.get("/workflow/v1/process/definition", params={"id": "p1"}, headers=client.client_headers())

    call = http.calls[0]
    assert call.url == f"{SERVER}/workflow/v1/process/definition"
    assert call.kwargs["headers"] == {
        "Authorization": "Bearer tok",
        "X-Tenant-ID": "ACME",
        "X-Client-ID": "client-123",
    }
    assert call.kwargs["params"] == {"id": "p1"}


def test_unauthenticated_client_sends_no_authorization(http):
    http.add("POST", "/account/v1", {"tenant": {"name": "acme"}})
    client = DigitClient(SERVER)

    client.post("/account/v1", json={"tenant": {}}, headers={"X-Client-Id": "test-client"})

    assert "Authorization" not in http.calls[0].kwargs["headers"]
    assert client.tenant_headers() == {}


@pytest.mark.parametrize("status", [400, 401, 404, 409, 500])
def test_non_2xx_raises_remote_error(http, status):
    http.add("DELETE", "/workflow/v1/process", text="nope", status_code=status)
    client = DigitClient(SERVER, FakeTokens())

    with pytest.raises(RemoteRequestError) as excinfo:
        client.delete("/workflow/v1/process", params={"code": "X"})

    assert excinfo.value.status_code == status
    assert excinfo.value.message == "nope"
    assert excinfo.value.endpoint.endswith("/workflow/v1/process")


@pytest.mark.parametrize("status", [200, 201, 204])
def test_2xx_statuses_are_accepted(http, status):
    http.add("PUT", "/users/u1", text="", status_code=status)
    resp = DigitClient(SERVER, FakeTokens()).put("/users/u1", json={"enabled": True})
    assert resp.status_code == status


def test_transport_errors_become_remote_errors(monkeypatch):
    def refused(*args, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(requests, "get", refused)
    with pytest.raises(RemoteRequestError) as excinfo:
        DigitClient(SERVER).get("/boundary/v1")
    assert excinfo.value.status_code is None


def test_timeout_is_always_passed(http, monkeypatch):
    monkeypatch.setenv("DIGIT_REQUEST_TIMEOUT", "7.5")
    http.add("GET", "/x", {})
    DigitClient(SERVER).get("/x")
    assert http.calls[0].kwargs["timeout"] == 7.5


def test_invalid_timeout_env_falls_back(monkeypatch):
    monkeypatch.setenv("DIGIT_REQUEST_TIMEOUT", "soon")
    assert request_timeout() == 30.0


def test_server_url_is_required():
    with pytest.raises(ValueError):
        DigitClient("")


def test_parse_body_variants():
    assert parse_body(StubResponse({"id": "x"})) == {"id": "x"}
    assert parse_body(StubResponse(text="plain text")) == "plain text"
    assert parse_body(StubResponse(text="  ")) is None
