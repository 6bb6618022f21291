"""Realm role management."""
from __future__ import annotations
import sys
from typing import Any

from digit.core.validators import require
from .client import DigitClient, parse_body
from .exceptions import RemoteRequestError, RoleNotFoundError
from .users import UserService, admin_path


class RoleService:
    """Service for managing realm roles and their assignment to users."""

    def __init__(self, client: DigitClient):
        self.client = client
        self.users = UserService(client)

    def get_role(self, realm: str, role_name: str) -> dict:
        """Fetch a realm role representation.

        Raises:
            RoleNotFoundError: If the role does not exist
        """
        try:
            resp = self.client.get(admin_path(realm, f"/roles/{role_name}"))
        except RemoteRequestError as e:
            if e.status_code == 404:
                raise RoleNotFoundError(f"role '{role_name}' not found in realm '{realm}'") from e
            raise
        role = parse_body(resp)
        if not isinstance(role, dict):
            raise RoleNotFoundError(f"role '{role_name}' not found in realm '{realm}'")
        return role

    def create_role(self, realm: str, role_name: str, description: str = "") -> Any:
        role_name = require(role_name, "role name")
        payload = {"name": role_name, "description": description or "", "composite": False}
        resp = self.client.post(admin_path(realm, "/roles"), json=payload)
        print(f"[roles] ✓ Role '{role_name}' created in '{realm}'", file=sys.stderr)
        return parse_body(resp)

    def assign_role(self, realm: str, username: str, role_name: str) -> Any:
        """Grant a realm role to a user.

        Args:
            realm: Realm name
            username: Target username
            role_name: Realm role to grant

        Raises:
            UserNotFoundError: If the user does not exist
            RoleNotFoundError: If the role does not exist
        """
        role_name = require(role_name, "role name")
        user_id = self.users.get_user_id(realm, username)
        role = self.get_role(realm, role_name)
        resp = self.client.post(admin_path(realm, f"/users/{user_id}/role-mappings/realm"), json=[role])
        print(f"[roles] ✓ Role '{role_name}' assigned to '{username}'", file=sys.stderr)
        return parse_body(resp)
