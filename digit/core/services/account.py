"""Tenant account provisioning."""
from __future__ import annotations

import sys
from typing import Any

from digit.core.validators import require, validate_email
from .client import DigitClient, parse_body

DEFAULT_CLIENT_ID = "test-client"


class AccountService:
    """Creates tenant accounts.

    Account creation happens before any realm exists, so the client is
    expected to carry no token manager.
    """

    def __init__(self, client: DigitClient):
        self.client = client

    def create_account(
        self,
        name: str,
        email: str,
        active: bool = True,
        client_id: str = DEFAULT_CLIENT_ID,
    ) -> Any:
        """Create a tenant account.

        Args:
            name: Tenant name
            email: Tenant contact email
            active: Whether the tenant starts active
            client_id: Value for the X-Client-Id header

        Returns:
            Parsed response body

        Raises:
            ValueError: If name or email is invalid
            RemoteRequestError: On HTTP error
        """
        name = require(name, "account name")
        email = validate_email(email)
        payload = {
            "tenant": {
                "name": name,
                "email": email,
                "isActive": active,
                "additionalAttributes": {},
            }
        }
        resp = self.client.post(
            "/account/v1",
            json=payload,
            headers={"X-Client-Id": client_id or DEFAULT_CLIENT_ID},
        )
        print(f"[account] ✓ Account '{name}' created", file=sys.stderr)
        return parse_body(resp)
