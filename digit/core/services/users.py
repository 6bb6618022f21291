"""User management through the identity provider admin API."""
from __future__ import annotations
import logging
import sys
from typing import Any, Dict, List, Optional

from digit.core.validators import require, validate_email
from .client import DigitClient, parse_body
from .exceptions import UserNotFoundError

logger = logging.getLogger(__name__)


def admin_path(realm: str, suffix: str = "") -> str:
    """Return the admin API path for a realm (tenant account)."""
    return f"/keycloak/admin/realms/{require(realm, 'account')}{suffix}"


class UserService:
    """Service for managing users of a tenant realm."""

    def __init__(self, client: DigitClient):
        """Initialize user service.

        Args:
            client: Authenticated DIGIT client
        """
        self.client = client

    def get_user_by_username(self, realm: str, username: str) -> Optional[dict]:
        """Return the user whose username matches, ignoring case.

        The identity provider stores usernames in lowercase.

        Args:
            realm: Realm name
            username: Username to search for

        Returns:
            User representation or None if not found
        """
        resp = self.client.get(admin_path(realm, "/users"), params={"username": username})
        users = parse_body(resp)
        if not isinstance(users, list):
            return None
        wanted = username.lower()
        for user in users:
            if isinstance(user, dict) and str(user.get("username") or "").lower() == wanted:
                return user
        return None

    def get_user_id(self, realm: str, username: str) -> str:
        """Resolve a username to its identifier.

        Raises:
            UserNotFoundError: If no user matches exactly
        """
        user = self.get_user_by_username(realm, require(username, "username"))
        if not user or not user.get("id"):
            raise UserNotFoundError(f"user '{username}' not found in realm '{realm}'")
        return user["id"]

    def create_user(self, realm: str, username: str, password: str, email: str) -> Any:
        """Create an enabled user with a permanent password.

        Raises:
            ValueError: If a field is missing or the email is invalid
            RemoteRequestError: On HTTP error (e.g. 409 when the user exists)
        """
        username = require(username, "username")
        password = require(password, "password")
        payload = {
            "username": username,
            "email": validate_email(email),
            "enabled": True,
            "emailVerified": True,
            "credentials": [{"type": "password", "value": password, "temporary": False}],
            "attributes": {},
        }
        resp = self.client.post(admin_path(realm, "/users"), json=payload)
        print(f"[users] ✓ User '{username}' created in '{realm}'", file=sys.stderr)
        return parse_body(resp)

    def reset_password(self, realm: str, username: str, new_password: str) -> Any:
        new_password = require(new_password, "new password")
        user_id = self.get_user_id(realm, username)
        payload = {"type": "password", "value": new_password, "temporary": False}
        resp = self.client.put(admin_path(realm, f"/users/{user_id}/reset-password"), json=payload)
        print(f"[users] ✓ Password reset for '{username}'", file=sys.stderr)
        return parse_body(resp)

    def delete_user(self, realm: str, username: str) -> Any:
        user_id = self.get_user_id(realm, username)
        resp = self.client.delete(admin_path(realm, f"/users/{user_id}"))
        print(f"[users] ✓ User '{username}' deleted", file=sys.stderr)
        return parse_body(resp)

    def search_users(self, realm: str, username: Optional[str] = None) -> List[dict]:
        """List users, optionally filtered by username (server-side prefix search)."""
        params = {"username": username} if username else None
        resp = self.client.get(admin_path(realm, "/users"), params=params)
        users = parse_body(resp)
        return users if isinstance(users, list) else []

    def update_user(
        self,
        realm: str,
        username: str,
        email: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> Any:
        """Update profile fields of an existing user.

        Only the fields that are given are sent.

        Raises:
            ValueError: If no field is given
            UserNotFoundError: If the user does not exist
        """
        updates: Dict[str, Any] = {}
        if email:
            updates["email"] = validate_email(email)
        if first_name:
            updates["firstName"] = first_name
        if last_name:
            updates["lastName"] = last_name
        if enabled is not None:
            updates["enabled"] = enabled
        if not updates:
            raise ValueError("at least one field to update is required (email, first name, last name, enabled)")

        user_id = self.get_user_id(realm, username)
        resp = self.client.put(admin_path(realm, f"/users/{user_id}"), json=updates)
        logger.info("Updated %s for user %s", ", ".join(sorted(updates)), username)
        print(f"[users] ✓ User '{username}' updated", file=sys.stderr)
        return parse_body(resp)
