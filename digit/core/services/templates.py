"""Notification template management."""
from __future__ import annotations
from typing import Any

from digit.core.validators import require
from .client import DigitClient, parse_body

TEMPLATE_PATH = "/notification/v1/template"


class TemplateService:
    """Create, search and delete notification templates for the current tenant."""

    def __init__(self, client: DigitClient):
        self.client = client

    def create_template(
        self,
        template_id: str,
        version: str,
        template_type: str,
        subject: str,
        content: str,
        is_html: bool = False,
    ) -> Any:
        """Create a notification template.

        Args:
            template_id: Template identifier
            version: Template version (e.g. 1.0.0)
            template_type: Channel type (EMAIL, SMS)
            subject: Message subject
            content: Message body, with [PLACEHOLDER] tokens
            is_html: Whether the content is HTML

        Raises:
            ValueError: If a required field is missing
            RemoteRequestError: On HTTP error
        """
        payload = {
            "templateId": require(template_id, "template ID"),
            "version": require(version, "version"),
            "type": require(template_type, "type"),
            "subject": require(subject, "subject"),
            "content": require(content, "content"),
            "isHTML": bool(is_html),
        }
        resp = self.client.post(TEMPLATE_PATH, json=payload, headers=self.client.tenant_headers())
        return parse_body(resp)

    def search_templates(self, template_id: str) -> Any:
        resp = self.client.get(
            TEMPLATE_PATH,
            params={"templateId": require(template_id, "template ID")},
            headers=self.client.tenant_headers(),
        )
        return parse_body(resp)

    def delete_template(self, template_id: str, version: str) -> Any:
        resp = self.client.delete(
            TEMPLATE_PATH,
            params={"templateId": require(template_id, "template ID"), "version": require(version, "version")},
            headers=self.client.tenant_headers(),
        )
        return parse_body(resp)
