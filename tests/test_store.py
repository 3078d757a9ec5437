"""JSON-backed tenant configuration store."""

from __future__ import annotations

import json

import pytest

from deployhook.store import JsonConfigStore

from .conftest import SECRET


@pytest.fixture
def store(apps_file, webhooks_file, logger):
    return JsonConfigStore(apps_file, webhooks_file, logger)


class TestTenantExists:
    def test_known_tenants(self, store):
        assert store.tenant_exists("bob")
        assert store.tenant_exists("carol")

    def test_unknown_tenant(self, store):
        assert not store.tenant_exists("mallory")

    def test_missing_file_means_not_found(self, tmp_path, webhooks_file, logger, caplog):
        store = JsonConfigStore(tmp_path / "nope.json", webhooks_file, logger)
        assert not store.tenant_exists("bob")
        assert "Config file not found" in caplog.text

    def test_malformed_file_means_not_found(self, apps_file, webhooks_file, logger, caplog):
        apps_file.write_text("{not json")
        store = JsonConfigStore(apps_file, webhooks_file, logger)
        assert not store.tenant_exists("bob")
        assert "Config file unreadable" in caplog.text

    def test_non_object_file_means_not_found(self, apps_file, webhooks_file, logger):
        apps_file.write_text(json.dumps(["bob"]))
        store = JsonConfigStore(apps_file, webhooks_file, logger)
        assert not store.tenant_exists("bob")

    def test_rereads_source_on_every_call(self, store, apps_file):
        assert not store.tenant_exists("dave")
        apps_file.write_text(json.dumps({"dave": {}}))
        assert store.tenant_exists("dave")
        assert not store.tenant_exists("bob")


class TestGetSecret:
    def test_configured_secret_is_bytes(self, store):
        assert store.get_secret("bob") == SECRET.encode()

    def test_tenant_without_secret(self, store):
        assert store.get_secret("carol") is None

    @pytest.mark.parametrize(
        "entry",
        [{"secret": ""}, {"secret": None}, {"secret": 1234}, {}, "plain-string", None],
    )
    def test_unusable_secret_is_absent(self, webhooks_file, apps_file, logger, entry):
        webhooks_file.write_text(json.dumps({"bob": entry}))
        store = JsonConfigStore(apps_file, webhooks_file, logger)
        assert store.get_secret("bob") is None

    def test_unreadable_webhooks_file(self, apps_file, tmp_path, logger):
        store = JsonConfigStore(apps_file, tmp_path, logger)  # a directory, not a file
        assert store.get_secret("bob") is None
