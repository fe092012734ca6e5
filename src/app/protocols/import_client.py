"""Contrato do cliente de import do API Manager.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class ImportResult:
    api_id: str
    revision_id: str


class ImportClientProtocol(Protocol):
    """Import de artefato e undeploy de revisão.

    Falhas levantam `ImportBackendError`; não há retry interno.
    """

    async def import_api(self, archive_name: str, content: bytes) -> ImportResult: ...

    async def delete_api_revision(
        self,
        api_id: str,
        revision_id: str,
        payload: list[dict[str, Any]],
    ) -> None: ...
