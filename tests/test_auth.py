"""Unit tests for the password grant and the token manager."""
import pytest
import requests
import yaml

from digit.config.settings import AuthConfig, CLIConfig
from digit.core import auth
from digit.core.services.exceptions import AuthenticationError, NoCredentialsError
from tests.conftest import SERVER, make_jwt

TOKEN_PATH = "/keycloak/realms/ACME/protocol/openid-connect/token"


def make_credentials(**overrides) -> AuthConfig:
    values = {
        "server_url": SERVER,
        "realm": "ACME",
        "client_id": "auth-server",
        "client_secret": "changeme",
        "username": "admin",
        "password": "admin-pass",
    }
    values.update(overrides)
    return AuthConfig(**values)


@pytest.fixture()
def config(isolated_home):
    return CLIConfig(server=SERVER, path=isolated_home / "config.yaml")


class TestGetJwtToken:
    def test_posts_password_grant_form(self, http):
        http.add("POST", TOKEN_PATH, {"access_token": "T1", "expires_in": 300})

        token = auth.get_jwt_token(SERVER, "ACME", "auth-server", "changeme", "admin", "admin-pass")

        assert token == "T1"
        call = http.calls_to("POST", TOKEN_PATH)[0]
        assert call.url == f"{SERVER}/keycloak/realms/ACME/protocol/openid-connect/token"
        assert call.kwargs["data"] == {
            "grant_type": "password",
            "client_id": "auth-server",
            "client_secret": "changeme",
            "username": "admin",
            "password": "admin-pass",
        }
        assert call.kwargs["timeout"] > 0

    @pytest.mark.parametrize("missing", range(6))
    def test_every_parameter_is_required(self, missing):
        params = [SERVER, "ACME", "auth-server", "changeme", "admin", "admin-pass"]
        params[missing] = ""
        with pytest.raises(ValueError):
            auth.get_jwt_token(*params)

    def test_rejected_grant_carries_status_and_body(self, http):
        http.add("POST", TOKEN_PATH, {"error": "invalid_grant"}, status_code=401)

        with pytest.raises(AuthenticationError) as excinfo:
            auth.get_jwt_token(SERVER, "ACME", "auth-server", "changeme", "admin", "wrong")

        assert excinfo.value.status_code == 401
        assert "invalid_grant" in excinfo.value.body

    def test_response_without_access_token_fails(self, http):
        http.add("POST", TOKEN_PATH, {"token_type": "Bearer"})
        with pytest.raises(AuthenticationError):
            auth.get_jwt_token(SERVER, "ACME", "auth-server", "changeme", "admin", "admin-pass")

    def test_transport_failure_is_authentication_error(self, monkeypatch):
        def boom(*args, **kwargs):
            raise requests.ConnectionError("connection refused")

        monkeypatch.setattr(requests, "post", boom)
        with pytest.raises(AuthenticationError, match="connection refused"):
            auth.get_jwt_token(SERVER, "ACME", "auth-server", "changeme", "admin", "admin-pass")


class TestTokenManager:
    def test_valid_cached_token_is_reused(self, config, valid_token):
        config.jwt_token = valid_token
        manager = auth.TokenManager(config)
        assert manager.get_valid_token() == valid_token

    def test_expired_token_is_refreshed_and_persisted(self, config, expired_token, http, capsys):
        config.jwt_token = expired_token
        config.auth_config = make_credentials()
        http.add("POST", TOKEN_PATH, {"access_token": "T2"})

        manager = auth.TokenManager(config)

        assert manager.get_valid_token() == "T2"
        assert config.jwt_token == "T2"
        saved = yaml.safe_load(config.path.read_text())
        assert saved["jwt_token"] == "T2"
        assert len(http.calls_to("POST", TOKEN_PATH)) == 1
        assert "refreshed" in capsys.readouterr().err

    def test_expired_token_without_credentials_fails(self, config, expired_token):
        config.jwt_token = expired_token
        with pytest.raises(NoCredentialsError):
            auth.TokenManager(config).get_valid_token()

    def test_missing_token_without_credentials_fails(self, config):
        with pytest.raises(NoCredentialsError, match="digit config set"):
            auth.TokenManager(config).get_valid_token()

    def test_missing_token_with_credentials_authenticates(self, config, http):
        config.auth_config = make_credentials()
        fresh = make_jwt()
        http.add("POST", TOKEN_PATH, {"access_token": fresh})

        assert auth.TokenManager(config).get_valid_token() == fresh

    def test_refresh_failure_propagates_without_retry(self, config, expired_token, http):
        config.jwt_token = expired_token
        config.auth_config = make_credentials()
        http.add("POST", TOKEN_PATH, {"error": "invalid_grant"}, status_code=400)

        with pytest.raises(AuthenticationError):
            auth.TokenManager(config).get_valid_token()

        assert len(http.calls_to("POST", TOKEN_PATH)) == 1
        assert config.jwt_token == expired_token

    def test_pinned_token_is_never_refreshed(self, config, expired_token):
        config.auth_config = make_credentials()
        manager = auth.TokenManager(config, pinned_token=expired_token)
        assert manager.get_valid_token() == expired_token

    def test_clock_controls_expiry(self, config):
        token = make_jwt(exp_offset=100, now=1_000_000)
        config.jwt_token = token
        config.auth_config = make_credentials()
        assert auth.TokenManager(config, clock=lambda: 1_000_000).get_valid_token() == token

    def test_derived_identity(self, config, valid_token):
        config.jwt_token = valid_token
        manager = auth.TokenManager(config)
        assert manager.tenant_id() == "ACME"
        assert manager.client_id() == "client-123"
        assert manager.authorization_header() == f"Bearer {valid_token}"
