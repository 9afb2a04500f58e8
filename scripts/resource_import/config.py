"""Configuration via environment variables with cloud-native secret support.

Supports:
  - Environment variables (local dev)
  - .env files
  - AWS Secrets Manager / GCP Secret Manager references for credentials
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from scripts.resource_import.secrets import resolve_env_secret
from scripts.resource_import.transport import RetryPolicy

DEFAULT_ENDPOINT = "https://api.confluent.cloud"


@dataclass(frozen=True)
class ApiCredentials:
    key: str = ""
    secret: str = ""

    @property
    def complete(self) -> bool:
        return bool(self.key and self.secret)


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 4
    min_wait: float = 1.0
    max_wait: float = 30.0

    def policy(self) -> RetryPolicy:
        return RetryPolicy(
            min_wait=self.min_wait,
            max_wait=self.max_wait,
            max_retries=self.max_retries,
        )


@dataclass(frozen=True)
class ImportConfig:
    endpoint: str = DEFAULT_ENDPOINT
    cloud: ApiCredentials = field(default_factory=ApiCredentials)
    kafka: ApiCredentials = field(default_factory=ApiCredentials)
    retry: RetryConfig = field(default_factory=RetryConfig)
    request_timeout: float = 30.0


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def load_config(
    endpoint: Optional[str] = None,
    max_retries: Optional[int] = None,
) -> ImportConfig:
    """Load configuration from the environment; explicit arguments win.

    Missing credentials are not an error here: the API client warns and
    sends unauthenticated requests, leaving rejection to the server.
    """
    load_dotenv()

    if max_retries is not None and max_retries < 0:
        raise ValueError(f"max_retries must not be negative, got {max_retries}")

    retry = RetryConfig(
        max_retries=(
            max_retries
            if max_retries is not None
            else _env_int("CONFLUENT_MAX_RETRIES", 4)
        ),
        min_wait=_env_float("CONFLUENT_RETRY_WAIT_MIN", 1.0),
        max_wait=_env_float("CONFLUENT_RETRY_WAIT_MAX", 30.0),
    )

    return ImportConfig(
        endpoint=(endpoint or os.environ.get("CONFLUENT_ENDPOINT") or DEFAULT_ENDPOINT),
        cloud=ApiCredentials(
            key=resolve_env_secret("CONFLUENT_CLOUD_API_KEY"),
            secret=resolve_env_secret("CONFLUENT_CLOUD_API_SECRET"),
        ),
        kafka=ApiCredentials(
            key=resolve_env_secret("KAFKA_API_KEY"),
            secret=resolve_env_secret("KAFKA_API_SECRET"),
        ),
        retry=retry,
        request_timeout=_env_float("CONFLUENT_REQUEST_TIMEOUT", 30.0),
    )
