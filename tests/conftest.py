"""Shared test fixtures for the test suite."""
import json
from unittest.mock import patch

import pytest
import requests
from requests.adapters import BaseAdapter

ENDPOINT = "https://api.confluent.cloud"


def make_response(status_code=200, body=None, url=ENDPOINT):
    """Build a requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body if body is not None else {}).encode()
    response._content_consumed = True
    response.headers["Content-Type"] = "application/json"
    response.url = url
    response.encoding = "utf-8"
    return response


def list_body(items, next_url=None, include_next=True):
    metadata = {"first": f"{ENDPOINT}/iam/v2/service-accounts"}
    if include_next:
        metadata["next"] = next_url
    return {"api_version": "iam/v2", "data": items, "metadata": metadata}


class FakeAdapter(BaseAdapter):
    """Replays queued responses (or raises queued exceptions) in order."""

    def __init__(self, outcomes):
        super().__init__()
        self.outcomes = list(outcomes)
        self.requests = []
        self.send_kwargs = []

    def send(self, request, **kwargs):
        self.requests.append(request)
        self.send_kwargs.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        outcome.request = request
        return outcome

    def close(self):
        pass


def mount(session, outcomes):
    adapter = FakeAdapter(outcomes)
    session.mount("https://", adapter)
    return adapter


@pytest.fixture
def no_sleep():
    """Patch out backoff sleeps and expose the mock to assert on delays."""
    with patch("scripts.resource_import.transport.time.sleep") as sleep:
        yield sleep
