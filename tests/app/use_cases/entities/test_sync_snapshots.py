"""Testes do pull de snapshots e helpers de snapshot."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from app.infra.stores import MemoryEntityStore
from app.use_cases.entities import (
    EntityKind,
    SyncEntitySnapshotsUseCase,
    replace_snapshot,
    serialize_snapshot,
)
from utils.errors import SnapshotSourceError


def _source(**overrides) -> MagicMock:
    source = MagicMock()
    source.fetch_applications = AsyncMock(return_value=[{"uuid": "a1", "name": "app"}])
    source.fetch_subscriptions = AsyncMock(return_value=[{"subscriptionId": 1}])
    source.fetch_key_mappings = AsyncMock(
        return_value=[{"consumerKey": "ck", "keyManager": "Resident Key Manager"}]
    )
    source.fetch_key_managers = AsyncMock(return_value=[{"name": "km"}])
    for name, value in overrides.items():
        setattr(source, name, value)
    return source


class TestSnapshots:
    def test_replace_and_serialize_round_trip_uses_json_names(self) -> None:
        store = MemoryEntityStore(tenant_domain="carbon.super")
        replace_snapshot(store, EntityKind.SUBSCRIPTIONS, [{"subscriptionId": 9, "appId": 4}])

        (serialized,) = serialize_snapshot(store, EntityKind.SUBSCRIPTIONS)

        assert serialized["subscriptionId"] == 9
        assert serialized["appId"] == 4
        assert serialized["tenanDomain"] == "carbon.super"
        assert "tenantDomain" not in serialized

    def test_applications_keep_control_plane_tenant_keys(self) -> None:
        store = MemoryEntityStore(tenant_domain="carbon.super")
        replace_snapshot(
            store,
            EntityKind.APPLICATIONS,
            [{"uuid": "a1", "tenanDomain": "t.com", "tenanId": 3}],
        )

        (serialized,) = serialize_snapshot(store, EntityKind.APPLICATIONS)

        assert serialized["tenanDomain"] == "t.com"
        assert serialized["tenanId"] == 3
        assert "tenantId" not in serialized

    def test_invalid_item_raises_and_keeps_store(self) -> None:
        store = MemoryEntityStore()
        replace_snapshot(store, EntityKind.APPLICATIONS, [{"uuid": "a1"}])
        with pytest.raises(ValidationError):
            replace_snapshot(store, EntityKind.APPLICATIONS, [{"name": "no uuid"}])
        assert store.get_application("a1") is not None


class TestSyncEntitySnapshotsUseCase:
    @pytest.mark.asyncio
    async def test_populates_every_map(self) -> None:
        store = MemoryEntityStore()
        counts = await SyncEntitySnapshotsUseCase(_source(), store).execute()

        assert counts == {
            "applications": 1,
            "subscriptions": 1,
            "applicationmappings": 1,
            "keymanagers": 1,
        }
        assert store.get_key_mapping("ck:Resident Key Manager") is not None

    @pytest.mark.asyncio
    async def test_failure_in_one_kind_does_not_stop_others(self) -> None:
        store = MemoryEntityStore()
        source = _source(fetch_subscriptions=AsyncMock(side_effect=SnapshotSourceError("down")))

        counts = await SyncEntitySnapshotsUseCase(source, store).execute()

        assert "subscriptions" not in counts
        assert counts["applications"] == 1
        assert store.list_subscriptions() == []
