"""Testes do espelho de entidades em memória."""

from __future__ import annotations

import threading

from app.domain.entities import Application, ApplicationKeyMapping, KeyManager, Subscription
from app.infra.stores import MemoryEntityStore, marshal_entity


def _app(uuid: str, tenant_domain: str = "", name: str = "") -> Application:
    return Application.model_validate(
        {"uuid": uuid, "name": name or uuid, "tenantDomain": tenant_domain}
    )


class TestMarshalEntity:
    def test_backfills_empty_tenant_domain(self) -> None:
        app = marshal_entity(_app("a1"), "carbon.super")
        assert app.tenant_domain == "carbon.super"

    def test_keeps_existing_tenant_domain(self) -> None:
        app = marshal_entity(_app("a1", tenant_domain="wso2.com"), "carbon.super")
        assert app.tenant_domain == "wso2.com"

    def test_accepts_misspelled_tenant_alias(self) -> None:
        sub = Subscription.model_validate({"subscriptionId": 7, "tenanDomain": "t.com"})
        assert sub.tenant_domain == "t.com"
        assert sub.model_dump(by_alias=True)["tenanDomain"] == "t.com"


class TestMemoryEntityStore:
    """Substituição integral e leitura do espelho."""

    def test_replace_applications_replaces_whole_map(self) -> None:
        store = MemoryEntityStore()
        store.replace_applications([_app("a1"), _app("a2")])

        count = store.replace_applications([_app("a3")])

        assert count == 1
        assert store.get_application("a1") is None
        assert store.get_application("a3") is not None
        assert [app.uuid for app in store.list_applications()] == ["a3"]

    def test_replace_with_empty_snapshot_clears_map(self) -> None:
        store = MemoryEntityStore()
        store.replace_applications([_app("a1")])
        assert store.replace_applications([]) == 0
        assert store.list_applications() == []

    def test_tenant_domain_backfilled_on_replace(self) -> None:
        store = MemoryEntityStore(tenant_domain="carbon.super")
        store.replace_applications([_app("a1")])
        assert store.get_application("a1").tenant_domain == "carbon.super"

    def test_duplicate_key_last_wins(self) -> None:
        store = MemoryEntityStore()
        store.replace_applications([_app("a1", name="first"), _app("a1", name="second")])
        assert store.get_application("a1").name == "second"

    def test_subscriptions_keyed_by_id(self) -> None:
        store = MemoryEntityStore()
        store.replace_subscriptions(
            [Subscription.model_validate({"subscriptionId": 3, "apiUUID": "api-1"})]
        )
        assert store.get_subscription(3).api_uuid == "api-1"
        assert store.get_subscription(4) is None

    def test_key_mappings_keyed_by_reference(self) -> None:
        store = MemoryEntityStore()
        mapping = ApplicationKeyMapping.model_validate(
            {"consumerKey": "ck", "keyManager": "Resident Key Manager", "keyType": "PRODUCTION"}
        )
        store.replace_key_mappings([mapping])
        assert store.get_key_mapping("ck:Resident Key Manager") == store.list_key_mappings()[0]

    def test_key_managers_keyed_by_name(self) -> None:
        store = MemoryEntityStore()
        store.replace_key_managers([KeyManager(name="km", enabled=True)])
        assert store.get_key_manager("km").enabled is True

    def test_counts(self) -> None:
        store = MemoryEntityStore()
        store.replace_applications([_app("a1"), _app("a2")])
        assert store.counts() == {
            "applications": 2,
            "subscriptions": 0,
            "application_key_mappings": 0,
            "key_managers": 0,
        }

    def test_concurrent_readers_see_complete_snapshots(self) -> None:
        store = MemoryEntityStore()
        small = [_app(f"s{i}") for i in range(10)]
        large = [_app(f"l{i}") for i in range(500)]
        store.replace_applications(small)
        observed: set[int] = set()
        stop = threading.Event()

        def reader() -> None:
            while not stop.is_set():
                observed.add(len(store.list_applications()))

        thread = threading.Thread(target=reader)
        thread.start()
        for _ in range(50):
            store.replace_applications(large)
            store.replace_applications(small)
        stop.set()
        thread.join()

        assert observed <= {10, 500}
