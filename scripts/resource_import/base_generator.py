"""Abstract base class for all resource generators."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

from scripts.resource_import.client import (ApiClient, ServiceDescriptor,
                                            client_from_config)
from scripts.resource_import.config import ImportConfig
from scripts.resource_import.pagination import LIST_PAGE_SIZE, collect_all
from scripts.resource_import.resources import Resource

logger = logging.getLogger("resource_import.generator")


class BaseGenerator(ABC):
    """Each generator declares SERVICE and RESOURCE_TYPE and maps one item."""

    PROVIDER_NAME: str = "confluent"
    RESOURCE_TYPE: str = ""
    SERVICE: ServiceDescriptor

    def __init__(
        self, config: ImportConfig, client: Optional[ApiClient] = None
    ) -> None:
        self.config = config
        self._client = client
        self.resources: list[Resource] = []

    @property
    def client(self) -> ApiClient:
        if self._client is None:
            self._client = client_from_config(self.config, self.SERVICE)
        return self._client

    @abstractmethod
    def create_resource(self, item: dict) -> Resource:
        """Map one API item to its descriptor."""

    def create_resources(self, items: list[dict]) -> list[Resource]:
        return [self.create_resource(item) for item in items]

    def fetch_page(self, page_token: Optional[str]) -> tuple[list[dict], dict]:
        page = self.client.list_page(LIST_PAGE_SIZE, page_token)
        return page.items, page.metadata

    def init_resources(self) -> list[Resource]:
        """Collect every page, then map the items. Replaces earlier results."""
        self.resources = []
        items = collect_all(self.fetch_page, self.SERVICE.kind)
        self.resources = self.create_resources(items)
        return self.resources

    def init_resources_with_tracking(self) -> list[Resource]:
        """Wrap init_resources() with timing and outcome logging."""
        started = time.monotonic()
        extra = {"service": self.SERVICE.name, "resource_type": self.RESOURCE_TYPE}
        try:
            resources = self.init_resources()
        except Exception as exc:
            logger.error(
                "Collection failed: %s", exc,
                extra={**extra, "duration_s": round(time.monotonic() - started, 3)},
            )
            raise
        logger.info(
            "Collection complete",
            extra={
                **extra,
                "resources": len(resources),
                "duration_s": round(time.monotonic() - started, 3),
            },
        )
        return resources

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
