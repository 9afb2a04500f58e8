"""Retrying HTTP transport with exponential backoff."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

import requests

logger = logging.getLogger("resource_import.transport")

# 501 means "not implemented" and is never going to succeed on retry
_PERMANENT_SERVER_ERRORS = frozenset({501})


@dataclass(frozen=True)
class RetryPolicy:
    min_wait: float = 1.0
    max_wait: float = 30.0
    max_retries: int = 4

    def wait(self, attempt: int) -> float:
        """Backoff before retry number ``attempt`` (0-based)."""
        return min(self.min_wait * (2 ** attempt), self.max_wait)


DEFAULT_RETRY_POLICY = RetryPolicy()


def is_retryable_status(status_code: int) -> bool:
    if status_code == 429:
        return True
    return 500 <= status_code < 600 and status_code not in _PERMANENT_SERVER_ERRORS


class RetryableSession(requests.Session):
    """Session that retries 429, 5xx (except 501) and network failures.

    TLS errors (certificate verification included) surface on the first
    attempt.

    Once retries are exhausted the last response is returned as-is (or the
    last network exception re-raised); interpreting the status code is left
    to the caller.
    """

    def __init__(
        self,
        policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        timeout: Optional[float] = None,
    ) -> None:
        super().__init__()
        self.policy = policy
        self.timeout = timeout

    def send(self, request: requests.PreparedRequest, **kwargs) -> requests.Response:
        if self.timeout is not None and kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout

        attempt = 0
        while True:
            try:
                response = super().send(request, **kwargs)
            except requests.exceptions.SSLError:
                # certificate failures are not transient
                raise
            except (requests.ConnectionError, requests.Timeout) as exc:
                if attempt >= self.policy.max_retries:
                    raise
                self._backoff_sleep(attempt, request, str(exc))
                attempt += 1
                continue

            if not is_retryable_status(response.status_code):
                return response
            if attempt >= self.policy.max_retries:
                logger.warning(
                    "Giving up on %s %s after %d retries (status %d)",
                    request.method, request.url, attempt, response.status_code,
                )
                return response

            # Release the connection before resending
            response.close()
            self._backoff_sleep(attempt, request, f"status {response.status_code}")
            attempt += 1

    def _backoff_sleep(
        self, attempt: int, request: requests.PreparedRequest, reason: str
    ) -> None:
        delay = self.policy.wait(attempt)
        logger.warning(
            "%s %s failed (%s), retrying in %.1fs",
            request.method, request.url, reason, delay,
            extra={"attempt": attempt + 1},
        )
        time.sleep(delay)
