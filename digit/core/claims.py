"""JWT claims decoding for tokens issued by the DIGIT identity provider.

The CLI only *holds* tokens: signatures are verified by the services that
receive them, so decoding here skips signature and claim validation and only
reads the payload.
"""
from __future__ import annotations

import binascii
import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from jwt.utils import base64url_decode

from .services.exceptions import MalformedTokenError

logger = logging.getLogger(__name__)

EXPIRY_MARGIN_SECONDS = 30


def _numeric(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


@dataclass(frozen=True)
class TokenClaims:
    """Decoded payload of an access token."""
    sub: Optional[str] = None
    iss: Optional[str] = None
    exp: Optional[float] = None
    iat: Optional[float] = None
    preferred_username: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TokenClaims":
        return cls(
            sub=payload.get("sub"),
            iss=payload.get("iss"),
            exp=_numeric(payload.get("exp")),
            iat=_numeric(payload.get("iat")),
            preferred_username=payload.get("preferred_username"),
            email=payload.get("email"),
            name=payload.get("name"),
            given_name=payload.get("given_name"),
            family_name=payload.get("family_name"),
            raw=dict(payload),
        )


def decode_claims(token: str) -> TokenClaims:
    """Decode the payload segment of a JWT without verifying it.

    Args:
        token: Encoded token (header.payload.signature)

    Returns:
        Decoded claims

    Raises:
        MalformedTokenError: If the token does not have three segments or the
            payload is not a base64url-encoded JSON object
    """
    if not token or not isinstance(token, str):
        raise MalformedTokenError("token is empty")
    if token.count(".") != 2:
        raise MalformedTokenError("invalid JWT token format: expected 3 segments")
    try:
        payload = json.loads(base64url_decode(token.split(".")[1]))
    except (binascii.Error, ValueError) as e:
        raise MalformedTokenError(f"failed to decode JWT payload: {e}") from e
    if not isinstance(payload, dict):
        raise MalformedTokenError("JWT payload is not a JSON object")
    return TokenClaims.from_payload(payload)


def is_expired(token: str, now: Optional[float] = None) -> bool:
    """Return True when the token expires within the safety margin.

    Undecodable tokens and tokens without a numeric ``exp`` count as expired.
    """
    try:
        claims = decode_claims(token)
    except MalformedTokenError as e:
        logger.debug("Treating undecodable token as expired: %s", e)
        return True
    if claims.exp is None:
        return True
    current = time.time() if now is None else now
    return current + EXPIRY_MARGIN_SECONDS > claims.exp


def extract_tenant_id(token: str) -> str:
    """Return the tenant identifier: the last path segment of the issuer.

    ``https://host/keycloak/realms/ACME`` yields ``ACME``.
    """
    claims = decode_claims(token)
    if not claims.iss:
        raise MalformedTokenError("issuer (iss) claim not found in JWT token")
    segments = [part for part in urlparse(claims.iss).path.split("/") if part]
    if not segments:
        raise MalformedTokenError(f"unable to extract tenant ID from issuer: {claims.iss}")
    return segments[-1]


def extract_client_id(token: str) -> str:
    """Return the subject claim, used as the DIGIT client identifier."""
    claims = decode_claims(token)
    if not claims.sub:
        raise MalformedTokenError("subject (sub) claim not found in JWT token")
    return claims.sub


def get_expiry_time(token: str) -> datetime:
    """Return the token expiry as an aware UTC datetime."""
    claims = decode_claims(token)
    if claims.exp is None:
        raise MalformedTokenError("expiration (exp) claim not found in JWT token")
    return datetime.fromtimestamp(claims.exp, tz=timezone.utc)
