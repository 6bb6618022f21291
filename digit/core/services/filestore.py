"""Filestore document categories."""
from __future__ import annotations
from typing import Any, List

from digit.core.validators import require
from .client import DigitClient, parse_body


class FilestoreService:
    def __init__(self, client: DigitClient):
        self.client = client

    def create_document_category(
        self,
        category_type: str,
        code: str,
        allowed_formats: List[str],
        min_size: int = 1024,
        max_size: int = 1024000,
        is_sensitive: bool = False,
        is_active: bool = True,
        description: str = "",
    ) -> Any:
        """Create a document category.

        Sizes are in bytes and are sent as strings.

        Raises:
            ValueError: If type, code or formats are missing, or sizes are inconsistent
        """
        if not allowed_formats:
            raise ValueError("allowed formats are required")
        if min_size < 0 or max_size < min_size:
            raise ValueError("max size must be greater than or equal to min size")
        payload = {
            "type": require(category_type, "type"),
            "code": require(code, "code"),
            "allowedFormats": list(allowed_formats),
            "minSize": str(min_size),
            "maxSize": str(max_size),
            "isSensitive": bool(is_sensitive),
            "isActive": bool(is_active),
            "description": description or "",
        }
        resp = self.client.post(
            "/filestore/v1/files/document-categories",
            json=payload,
            headers=self.client.tenant_headers(),
        )
        return parse_body(resp)
