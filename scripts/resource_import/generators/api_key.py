"""API keys, labelled by the id of their owning principal."""

from __future__ import annotations

from scripts.resource_import.base_generator import BaseGenerator
from scripts.resource_import.client import SERVICES
from scripts.resource_import.resources import Resource, new_simple_resource


class ApiKeyGenerator(BaseGenerator):
    RESOURCE_TYPE = "confluent_api_key"
    SERVICE = SERVICES["api_keys"]

    def create_resource(self, item: dict) -> Resource:
        owner = (item.get("spec") or {}).get("owner") or {}
        return new_simple_resource(
            item.get("id", ""),
            owner.get("id", ""),
            self.RESOURCE_TYPE,
            self.PROVIDER_NAME,
        )
