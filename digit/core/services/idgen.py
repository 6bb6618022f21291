"""ID generation template management."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

from digit.core.validators import require
from .client import DigitClient, parse_body

IDGEN_PATH = "/idgen/v1/template"


@dataclass
class IdGenConfig:
    """Format of generated identifiers: pattern, sequence and random part."""
    template: str = "{ORG}-{DATE:yyyyMMdd}-{SEQ}-{RAND}"
    scope: str = "daily"
    start: int = 1
    padding_length: int = 4
    padding_char: str = "0"
    random_length: int = 2
    random_charset: str = "A-Z0-9"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "template": self.template,
            "sequence": {
                "scope": self.scope,
                "start": self.start,
                "padding": {"length": self.padding_length, "char": self.padding_char},
            },
            "random": {"length": self.random_length, "charset": self.random_charset},
        }


class IdGenService:
    def __init__(self, client: DigitClient):
        self.client = client

    def create_template(self, template_code: str, config: IdGenConfig) -> Any:
        payload = {
            "templateCode": require(template_code, "template code"),
            "config": config.to_payload(),
        }
        resp = self.client.post(IDGEN_PATH, json=payload, headers=self.client.client_headers())
        return parse_body(resp)

    def search_template(self, template_code: str) -> Any:
        resp = self.client.get(
            IDGEN_PATH,
            params={"templateCode": require(template_code, "template code")},
            headers=self.client.client_headers(),
        )
        return parse_body(resp)

    def delete_template(self, template_code: str, version: str) -> Any:
        resp = self.client.delete(
            IDGEN_PATH,
            params={"templateCode": require(template_code, "template code"), "version": require(version, "version")},
            headers=self.client.client_headers(),
        )
        return parse_body(resp)
