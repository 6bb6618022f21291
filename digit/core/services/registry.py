"""Registry service: schemas and registry records."""
from __future__ import annotations
from typing import Any, Dict, Optional

from digit.core.validators import require
from .client import DigitClient, parse_body

DEFAULT_REGISTRY_SERVER = "http://localhost:8085"


class RegistryService:
    """Service for registry schemas and the records stored against them."""

    def __init__(self, client: DigitClient):
        self.client = client

    def create_schema(self, schema_code: str, definition: Dict[str, Any]) -> Any:
        if not definition:
            raise ValueError("definition is required")
        payload = {"schemaCode": require(schema_code, "schema code"), "definition": definition}
        resp = self.client.post("/registry/v1/schema", json=payload, headers=self.client.client_headers())
        return parse_body(resp)

    def search_schema(self, schema_code: str, version: Optional[str] = None) -> Any:
        params = {"version": version} if version else None
        resp = self.client.get(
            f"/registry/v1/schema/{require(schema_code, 'schema code')}",
            params=params,
            headers=self.client.client_headers(),
        )
        return parse_body(resp)

    def delete_schema(self, schema_code: str) -> Any:
        resp = self.client.delete(
            f"/registry/v1/schema/{require(schema_code, 'schema code')}",
            headers=self.client.client_headers(),
        )
        return parse_body(resp)

    def create_data(self, schema_code: str, data: Dict[str, Any]) -> Any:
        """Store a record validated against ``schema_code``.

        Raises:
            ValueError: If the schema code or data is missing
        """
        if not data:
            raise ValueError("data is required")
        resp = self.client.post(
            "/registry/v1/data",
            params={"schemaCode": require(schema_code, "schema code")},
            json={"data": data},
            headers=self.client.client_headers(),
        )
        return parse_body(resp)

    def search_data(self, schema_code: str, registry_id: Optional[str] = None) -> Any:
        params = {"schemaCode": require(schema_code, "schema code")}
        if registry_id:
            params["registryId"] = registry_id
        resp = self.client.get("/registry/v1/data/_registry", params=params, headers=self.client.client_headers())
        return parse_body(resp)

    def delete_data(self, schema_code: str, registry_id: str) -> Any:
        resp = self.client.delete(
            f"/registry/v1/data/{require(registry_id, 'registry ID')}",
            params={"schemaCode": require(schema_code, "schema code")},
            headers=self.client.client_headers(),
        )
        return parse_body(resp)
