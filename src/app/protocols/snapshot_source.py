"""Contrato da fonte de snapshots completos do control plane."""

from __future__ import annotations

from typing import Any, Protocol


class SnapshotSourceProtocol(Protocol):
    """Cada método retorna a lista completa crua (dicts do JSON).

    Falhas levantam `SnapshotSourceError`.
    """

    async def fetch_applications(self) -> list[dict[str, Any]]: ...

    async def fetch_subscriptions(self) -> list[dict[str, Any]]: ...

    async def fetch_key_mappings(self) -> list[dict[str, Any]]: ...

    async def fetch_key_managers(self) -> list[dict[str, Any]]: ...
