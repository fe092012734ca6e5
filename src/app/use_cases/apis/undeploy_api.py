"""Use case de remoção (undeploy) de revisão de API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.domain.events import ApiDescriptor
    from app.protocols import ImportClientProtocol
    from config.settings import ControlPlaneSettings

logger = logging.getLogger(__name__)


def build_undeploy_payload(
    revision_id: str,
    environment_label: str,
    vhost: str,
) -> list[dict[str, Any]]:
    """Corpo aceito pelo endpoint de undeploy-revision."""
    return [
        {
            "revisionUuid": revision_id,
            "name": environment_label,
            "vhost": vhost,
            "displayOnDevportal": True,
        }
    ]


class UndeployApiRevisionUseCase:
    """Remove a revisão do primeiro ambiente configurado."""

    def __init__(
        self,
        import_client: ImportClientProtocol,
        settings: ControlPlaneSettings,
    ) -> None:
        self._import_client = import_client
        self._settings = settings

    async def execute(self, api: ApiDescriptor) -> None:
        payload = build_undeploy_payload(
            api.revision_id,
            self._settings.primary_environment_label,
            api.vhost,
        )
        await self._import_client.delete_api_revision(api.api_uuid, api.revision_id, payload)
        logger.info(
            "api_revision_undeployed",
            extra={"api_uuid": api.api_uuid, "revision_id": api.revision_id},
        )
