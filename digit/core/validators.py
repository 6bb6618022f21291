"""Input validation helpers for command and payload fields."""
from __future__ import annotations

from typing import List, Optional


def require(value: Optional[str], field: str) -> str:
    """Return a stripped, non-empty value.

    Raises:
        ValueError: If the value is missing or blank
    """
    if value is None or not str(value).strip():
        raise ValueError(f"{field} is required")
    return str(value).strip()


def validate_email(email: str) -> str:
    """Validate email address.

    Args:
        email: Email address to validate

    Returns:
        Normalized email address

    Raises:
        ValueError: If email is invalid
    """
    email = (email or "").strip().lower()
    if not email or "@" not in email:
        raise ValueError("Invalid email format")

    local, domain = email.rsplit("@", 1)
    if not local or not domain or "." not in domain:
        raise ValueError("Invalid email format")
    if len(email) > 254:
        raise ValueError("Email exceeds maximum length")

    return email


def parse_bool(value, field: str) -> bool:
    """Parse ``true``/``false`` style flag values.

    Raises:
        ValueError: If the value is not a recognised boolean literal
    """
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in {"true", "1", "yes", "y"}:
        return True
    if normalized in {"false", "0", "no", "n"}:
        return False
    raise ValueError(f"{field} must be 'true' or 'false'")


def parse_int(value, field: str, minimum: Optional[int] = None) -> int:
    """Parse an integer flag value, optionally enforcing a lower bound."""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be an integer")
    if minimum is not None and number < minimum:
        raise ValueError(f"{field} must be at least {minimum}")
    return number


def parse_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated flag into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
