"""
End-to-end tests for the resource generators over a fake HTTP adapter.
"""

import logging

import pytest

from conftest import ENDPOINT, list_body, make_response, mount
from scripts.resource_import.base_generator import BaseGenerator
from scripts.resource_import.client import SERVICES, build_api_client
from scripts.resource_import.config import ApiCredentials, ImportConfig
from scripts.resource_import.exceptions import CollectionError
from scripts.resource_import.generators.api_key import ApiKeyGenerator
from scripts.resource_import.generators.service_account import \
    ServiceAccountGenerator
from scripts.resource_import.resources import Resource

CREDS = ApiCredentials(key="KEY", secret="SECRET")
SA_URL = f"{ENDPOINT}/iam/v2/service-accounts"
KEYS_URL = f"{ENDPOINT}/iam/v2/api-keys"


def _generator(cls, outcomes):
    client = build_api_client(ENDPOINT, cls.SERVICE, credentials=CREDS)
    adapter = mount(client.session, outcomes)
    return cls(ImportConfig(cloud=CREDS), client=client), adapter


def _sa(sa_id, name):
    return {"id": sa_id, "display_name": name, "description": ""}


class TestBaseGenerator:
    def test_cannot_instantiate_base_class(self):
        with pytest.raises(TypeError, match="Can't instantiate abstract class"):
            BaseGenerator(ImportConfig())

    def test_client_is_built_lazily_from_config(self):
        generator = ServiceAccountGenerator(ImportConfig(cloud=CREDS))

        assert generator._client is None
        assert generator.client.url == SA_URL
        assert generator.client is generator.client


class TestServiceAccountGenerator:
    def test_two_pages(self, no_sleep):
        generator, adapter = _generator(ServiceAccountGenerator, [
            make_response(200, list_body(
                [_sa("sa-a", "A"), _sa("sa-b", "B")],
                next_url=f"{SA_URL}?page_size=99&page_token=TOK2",
            )),
            make_response(200, list_body([_sa("sa-c", "C")], include_next=False)),
        ])

        resources = generator.init_resources()

        assert resources == [
            Resource("sa-a", "A", "confluent_service_account", "confluent"),
            Resource("sa-b", "B", "confluent_service_account", "confluent"),
            Resource("sa-c", "C", "confluent_service_account", "confluent"),
        ]
        assert generator.resources == resources
        assert len(adapter.requests) == 2
        assert "page_token=TOK2" in adapter.requests[1].url

    def test_empty_account_list(self, no_sleep):
        generator, adapter = _generator(ServiceAccountGenerator, [
            make_response(200, list_body([], include_next=False)),
        ])

        assert generator.init_resources() == []
        assert len(adapter.requests) == 1

    def test_transient_failure_is_invisible(self, no_sleep):
        generator, adapter = _generator(ServiceAccountGenerator, [
            make_response(200, list_body(
                [_sa("sa-a", "A")], next_url=f"{SA_URL}?page_token=TOK2",
            )),
            make_response(503),
            make_response(503),
            make_response(200, list_body([_sa("sa-b", "B")], next_url="")),
        ])

        resources = generator.init_resources()

        assert [r.id for r in resources] == ["sa-a", "sa-b"]
        assert len(adapter.requests) == 4
        assert no_sleep.call_count == 2

    def test_missing_page_token_yields_no_resources(self, no_sleep):
        generator, _ = _generator(ServiceAccountGenerator, [
            make_response(200, list_body(
                [_sa("sa-a", "A")], next_url=f"{SA_URL}?page_token=TOK2",
            )),
            make_response(200, list_body(
                [_sa("sa-b", "B")], next_url=f"{SA_URL}?page_size=99",
            )),
        ])

        with pytest.raises(CollectionError, match="error reading Service Accounts"):
            generator.init_resources()
        assert generator.resources == []

    def test_exhausted_retries_surface_upstream_error(self, no_sleep):
        generator, adapter = _generator(
            ServiceAccountGenerator, [make_response(503) for _ in range(5)]
        )

        with pytest.raises(CollectionError, match="503"):
            generator.init_resources()
        assert len(adapter.requests) == 5

    def test_tracking_logs_and_reraises(self, no_sleep, caplog):
        generator, _ = _generator(ServiceAccountGenerator, [make_response(401)])

        with caplog.at_level(logging.ERROR, logger="resource_import.generator"):
            with pytest.raises(CollectionError):
                generator.init_resources_with_tracking()

        assert any("Collection failed" in r.getMessage() for r in caplog.records)

    def test_tracking_returns_resources(self, no_sleep):
        generator, _ = _generator(ServiceAccountGenerator, [
            make_response(200, list_body([_sa("sa-a", "A")])),
        ])

        assert [r.id for r in generator.init_resources_with_tracking()] == ["sa-a"]


class TestApiKeyGenerator:
    def test_label_is_owner_id(self, no_sleep):
        generator, _ = _generator(ApiKeyGenerator, [
            make_response(200, list_body(
                [{"id": "KEY1", "spec": {"owner": {"id": "sa-a", "kind": "ServiceAccount"}}}],
                next_url=f"{KEYS_URL}?page_token=P2",
            )),
            make_response(200, list_body(
                [{"id": "KEY2", "spec": {"owner": {"id": "u-b", "kind": "User"}}}],
            )),
        ])

        resources = generator.init_resources()

        assert resources == [
            Resource("KEY1", "sa-a", "confluent_api_key", "confluent"),
            Resource("KEY2", "u-b", "confluent_api_key", "confluent"),
        ]

    def test_key_without_owner(self, no_sleep):
        generator, _ = _generator(ApiKeyGenerator, [
            make_response(200, list_body([{"id": "KEY1", "spec": {}}])),
        ])

        assert generator.init_resources()[0].name == ""

    def test_item_without_id_maps_to_empty_id(self, no_sleep):
        generator, _ = _generator(ServiceAccountGenerator, [
            make_response(200, list_body([{"display_name": "orphan"}])),
        ])

        assert generator.init_resources() == [
            Resource("", "orphan", "confluent_service_account", "confluent"),
        ]


class TestRerun:
    def test_failed_rerun_discards_earlier_results(self, no_sleep):
        generator, _ = _generator(ServiceAccountGenerator, [
            make_response(200, list_body([_sa("sa-a", "A")])),
            make_response(403),
        ])

        assert [r.id for r in generator.init_resources()] == ["sa-a"]
        with pytest.raises(CollectionError):
            generator.init_resources()
        assert generator.resources == []
