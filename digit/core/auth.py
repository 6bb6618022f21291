"""Token lifecycle management: password grant and transparent refresh.

Typical flow::

    config = CLIConfig.load()
    manager = TokenManager(config)
    token = manager.get_valid_token()   # cached, or refreshed with stored credentials

A token passed explicitly (``--jwt-token``) is pinned: it is used as-is and
never refreshed or persisted.
"""
from __future__ import annotations

import logging
import sys
import time
from typing import Callable, Optional

import requests

from digit.config.settings import CLIConfig
from .claims import extract_client_id, extract_tenant_id, is_expired
from .services.client import request_timeout
from .services.exceptions import AuthenticationError, NoCredentialsError

logger = logging.getLogger(__name__)


def token_endpoint(server: str, realm: str) -> str:
    """Return the OpenID Connect token endpoint behind the DIGIT gateway."""
    return f"{server.rstrip('/')}/keycloak/realms/{realm}/protocol/openid-connect/token"


def get_jwt_token(
    server: str,
    realm: str,
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
    timeout: Optional[float] = None,
) -> str:
    """Obtain an access token with the OAuth2 password grant.

    Args:
        server: Gateway base URL
        realm: Realm (tenant account) the user belongs to
        client_id: Confidential client ID
        client_secret: Client secret
        username: User name
        password: User password
        timeout: Request timeout in seconds

    Returns:
        Encoded access token

    Raises:
        ValueError: If any parameter is empty
        AuthenticationError: If the identity provider rejects the grant
    """
    required = {
        "server URL": server,
        "realm": realm,
        "client ID": client_id,
        "client secret": client_secret,
        "username": username,
        "password": password,
    }
    for label, value in required.items():
        if not value:
            raise ValueError(f"{label} is required")

    url = token_endpoint(server, realm)
    form = {
        "grant_type": "password",
        "client_id": client_id,
        "client_secret": client_secret,
        "username": username,
        "password": password,
    }
    try:
        resp = requests.post(
            url,
            data=form,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=timeout if timeout is not None else request_timeout(),
        )
    except requests.RequestException as e:
        raise AuthenticationError(f"token request to {url} failed: {e}") from e

    if resp.status_code != 200:
        raise AuthenticationError(
            f"authentication failed with status {resp.status_code}: {resp.text}",
            status_code=resp.status_code,
            body=resp.text,
        )
    try:
        token = resp.json().get("access_token")
    except (ValueError, AttributeError) as e:
        raise AuthenticationError(f"invalid token response: {e}", status_code=200, body=resp.text) from e
    if not token:
        raise AuthenticationError("token response contains no access_token", status_code=200, body=resp.text)
    return token


class TokenManager:
    """Keeps a valid access token available for outgoing requests.

    Single-threaded by contract: concurrent callers observing an expired
    token would each perform their own refresh.
    """

    def __init__(
        self,
        config: CLIConfig,
        pinned_token: Optional[str] = None,
        clock: Callable[[], float] = time.time,
        timeout: Optional[float] = None,
    ):
        """Initialize token manager.

        Args:
            config: Loaded CLI configuration (token cache and credential set)
            pinned_token: Token supplied explicitly; never refreshed
            clock: Time source in epoch seconds
            timeout: Timeout for the token request
        """
        self.config = config
        self.pinned_token = pinned_token or None
        self._clock = clock
        self._timeout = timeout

    def get_valid_token(self) -> str:
        """Return a token that is not within the expiry margin.

        Raises:
            NoCredentialsError: If no token is cached and no credentials are stored
            AuthenticationError: If the refresh grant is rejected
        """
        if self.pinned_token:
            if is_expired(self.pinned_token, now=self._clock()):
                logger.warning("Explicit JWT token is expired; using it without refresh")
            return self.pinned_token

        token = self.config.jwt_token
        if not token:
            if self.config.auth_config is None:
                raise NoCredentialsError("no JWT token found. Please run 'digit config set'")
            logger.info("No cached token, authenticating with stored credentials")
            return self.refresh()

        if not is_expired(token, now=self._clock()):
            return token

        print("[auth] JWT token expired, refreshing...", file=sys.stderr)
        return self.refresh()

    def refresh(self) -> str:
        """Obtain a new token with the stored credential set and persist it.

        Raises:
            NoCredentialsError: If no credential set is stored
            AuthenticationError: If the grant is rejected
        """
        creds = self.config.auth_config
        if creds is None:
            raise NoCredentialsError(
                "no authentication config found. Please run 'digit config set' with credentials"
            )
        token = get_jwt_token(
            creds.server_url,
            creds.realm,
            creds.client_id,
            creds.client_secret,
            creds.username,
            creds.password,
            timeout=self._timeout,
        )
        self.config.jwt_token = token
        self.config.save()
        print("[auth] ✓ Token refreshed successfully!", file=sys.stderr)
        return token

    def authorization_header(self) -> str:
        return f"Bearer {self.get_valid_token()}"

    def tenant_id(self) -> str:
        return extract_tenant_id(self.get_valid_token())

    def client_id(self) -> str:
        return extract_client_id(self.get_valid_token())
