"""IAM v2 service accounts."""

from __future__ import annotations

from scripts.resource_import.base_generator import BaseGenerator
from scripts.resource_import.client import SERVICES
from scripts.resource_import.resources import Resource, new_simple_resource


class ServiceAccountGenerator(BaseGenerator):
    RESOURCE_TYPE = "confluent_service_account"
    SERVICE = SERVICES["service_accounts"]

    def create_resource(self, item: dict) -> Resource:
        return new_simple_resource(
            item.get("id", ""),
            item.get("display_name", ""),
            self.RESOURCE_TYPE,
            self.PROVIDER_NAME,
        )
