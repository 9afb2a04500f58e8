"""Generic Confluent Cloud API client built from a service descriptor."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

from scripts.resource_import.config import ApiCredentials, ImportConfig
from scripts.resource_import.transport import (DEFAULT_RETRY_POLICY,
                                               RetryableSession, RetryPolicy)

logger = logging.getLogger("resource_import.client")

CLOUD_CREDENTIALS = "cloud"
KAFKA_CREDENTIALS = "kafka"

_CREDENTIAL_LABELS = {
    CLOUD_CREDENTIALS: "Confluent Cloud API Key",
    KAFKA_CREDENTIALS: "Kafka API Key",
}


@dataclass(frozen=True)
class ServiceDescriptor:
    name: str
    path: str
    kind: str  # human-readable, used in error messages
    credentials: str = CLOUD_CREDENTIALS


SERVICES: dict[str, ServiceDescriptor] = {
    "service_accounts": ServiceDescriptor(
        name="service_accounts",
        path="/iam/v2/service-accounts",
        kind="Service Accounts",
    ),
    "api_keys": ServiceDescriptor(
        name="api_keys",
        path="/iam/v2/api-keys",
        kind="API Keys",
    ),
}


class ListPage(NamedTuple):
    items: list[dict]
    metadata: dict[str, Any]


class ApiClient:
    """List operations against a single backing API."""

    def __init__(
        self,
        base_url: str,
        service: ServiceDescriptor,
        session: RetryableSession,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.service = service
        self.session = session

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.service.path}"

    def list_page(
        self, page_size: int, page_token: Optional[str] = None
    ) -> ListPage:
        params: dict[str, Any] = {"page_size": page_size}
        if page_token:
            params["page_token"] = page_token

        resp = self.session.get(self.url, params=params)
        resp.raise_for_status()
        body = resp.json()
        return ListPage(
            items=list(body.get("data") or []),
            metadata=body.get("metadata") or {},
        )

    def close(self) -> None:
        self.session.close()


def build_api_client(
    endpoint: str,
    service: ServiceDescriptor,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    credentials: Optional[ApiCredentials] = None,
    timeout: Optional[float] = None,
) -> ApiClient:
    """Wire base URL, retrying transport and basic auth for one service."""
    session = RetryableSession(policy=policy, timeout=timeout)
    session.headers.update({"Accept": "application/json"})

    if credentials is not None and credentials.complete:
        session.auth = (credentials.key, credentials.secret)
    else:
        logger.warning(
            "Could not find %s",
            _CREDENTIAL_LABELS.get(service.credentials, "API Key"),
            extra={"service": service.name},
        )
    return ApiClient(endpoint, service, session)


def client_from_config(config: ImportConfig, service: ServiceDescriptor) -> ApiClient:
    credentials = (
        config.kafka if service.credentials == KAFKA_CREDENTIALS else config.cloud
    )
    return build_api_client(
        config.endpoint,
        service,
        policy=config.retry.policy(),
        credentials=credentials,
        timeout=config.request_timeout,
    )
