"""Cliente da internal data API do control plane (snapshots completos)."""

from __future__ import annotations

import logging
from typing import Any

from utils.errors import SnapshotSourceError

from .http_base import ApimHttpClient, HttpError

logger = logging.getLogger(__name__)

INTERNAL_DATA_PATH = "internal/data/v1"


class ApimInternalDataClient:
    """Implementa SnapshotSourceProtocol.

    Respostas no formato `{"list": [...]}`; uma lista JSON pura também
    é aceita.
    """

    def __init__(self, http: ApimHttpClient) -> None:
        self._http = http

    async def _fetch(self, resource: str) -> list[dict[str, Any]]:
        try:
            response = await self._http.request("GET", f"{INTERNAL_DATA_PATH}/{resource}")
            body = response.json()
        except HttpError as exc:
            raise SnapshotSourceError(f"falha ao buscar {resource}: {exc}") from exc
        except ValueError as exc:
            raise SnapshotSourceError(f"resposta inválida para {resource}: {exc}") from exc

        items = body.get("list") if isinstance(body, dict) else body
        if not isinstance(items, list):
            raise SnapshotSourceError(f"snapshot de {resource} sem lista")
        logger.debug("snapshot_fetched", extra={"resource": resource, "count": len(items)})
        return items

    async def fetch_applications(self) -> list[dict[str, Any]]:
        return await self._fetch("applications")

    async def fetch_subscriptions(self) -> list[dict[str, Any]]:
        return await self._fetch("subscriptions")

    async def fetch_key_mappings(self) -> list[dict[str, Any]]:
        return await self._fetch("application-key-mappings")

    async def fetch_key_managers(self) -> list[dict[str, Any]]:
        return await self._fetch("keymanagers")
