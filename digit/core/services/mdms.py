"""Master data (MDMS) schemas and records."""
from __future__ import annotations
from typing import Any, Dict, List, Optional

from digit.core.validators import require
from .client import DigitClient, parse_body


class MdmsService:
    """Service for MDMS schema definitions and master data records."""

    def __init__(self, client: DigitClient):
        self.client = client

    def create_schema(self, code: str, description: str, definition: Dict[str, Any], is_active: bool = True) -> Any:
        """Register a JSON-schema definition under ``code``.

        Raises:
            ValueError: If code, description or definition is missing
        """
        if not definition:
            raise ValueError("definition is required")
        payload = {
            "SchemaDefinition": {
                "code": require(code, "code"),
                "description": require(description, "description"),
                "definition": definition,
                "isActive": bool(is_active),
            }
        }
        resp = self.client.post("/mdms-v2/v1/schema", json=payload, headers=self.client.client_headers())
        return parse_body(resp)

    def create_data(self, records: List[Dict[str, Any]]) -> Any:
        """Create master data records.

        Args:
            records: Entries with schemaCode, uniqueIdentifier, data and isActive
        """
        if not records:
            raise ValueError("MDMS data is required")
        resp = self.client.post("/mdms-v2/v2", json={"Mdms": records}, headers=self.client.client_headers())
        return parse_body(resp)

    def search_schema(self, code: str) -> Any:
        resp = self.client.get(
            "/mdms-v2/v1/schema",
            params={"code": require(code, "schema code")},
            headers=self.client.client_headers(),
        )
        return parse_body(resp)

    def search_data(self, schema_code: str, unique_identifiers: Optional[str] = None) -> Any:
        params = {"schemaCode": require(schema_code, "schema code")}
        if unique_identifiers:
            params["uniqueIdentifiers"] = unique_identifiers
        resp = self.client.get("/mdms-v2/v2", params=params, headers=self.client.client_headers())
        return parse_body(resp)
