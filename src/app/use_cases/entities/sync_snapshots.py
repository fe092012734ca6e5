"""Use case de pull dos snapshots do control plane."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from utils.errors import SnapshotSourceError

from .snapshots import EntityKind, replace_snapshot

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.protocols import EntityStoreProtocol, SnapshotSourceProtocol

logger = logging.getLogger(__name__)


class SyncEntitySnapshotsUseCase:
    """Busca cada snapshot e substitui o mapa correspondente.

    Tipos são independentes: falha em um não impede os demais, e o mapa
    do tipo que falhou permanece como estava.
    """

    def __init__(self, source: SnapshotSourceProtocol, store: EntityStoreProtocol) -> None:
        self._source = source
        self._store = store

    def _fetchers(self) -> dict[EntityKind, Callable[[], Awaitable[list[dict[str, Any]]]]]:
        return {
            EntityKind.APPLICATIONS: self._source.fetch_applications,
            EntityKind.SUBSCRIPTIONS: self._source.fetch_subscriptions,
            EntityKind.KEY_MAPPINGS: self._source.fetch_key_mappings,
            EntityKind.KEY_MANAGERS: self._source.fetch_key_managers,
        }

    async def execute(self) -> dict[str, int]:
        """Retorna contagem por tipo sincronizado com sucesso."""
        counts: dict[str, int] = {}
        for kind, fetch in self._fetchers().items():
            try:
                items = await fetch()
                counts[kind.value] = replace_snapshot(self._store, kind, items)
            except (SnapshotSourceError, ValidationError) as exc:
                logger.warning(
                    "entity_snapshot_sync_failed",
                    extra={
                        "entity_kind": kind.value,
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                    },
                )
        logger.info("entity_snapshots_synced", extra={"counts": counts})
        return counts
