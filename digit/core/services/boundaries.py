"""Administrative boundary creation."""
from __future__ import annotations
from typing import Any, Dict, List

from .client import DigitClient, parse_body


class BoundaryService:
    def __init__(self, client: DigitClient):
        self.client = client

    def create_boundaries(self, boundaries: List[Dict[str, Any]]) -> Any:
        """Create boundaries in one request.

        Args:
            boundaries: Entries with code, geometry and optional additionalDetails
        """
        if not boundaries:
            raise ValueError("at least one boundary is required")
        for index, boundary in enumerate(boundaries):
            if not isinstance(boundary, dict) or not boundary.get("code"):
                raise ValueError(f"boundary #{index + 1} is missing a code")
        resp = self.client.post("/boundary/v1", json={"boundary": boundaries}, headers=self.client.client_headers())
        return parse_body(resp)
