"""Use case de criação/atualização de API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.services import package, synthesize

if TYPE_CHECKING:
    from app.domain.events import LifecycleEvent
    from app.protocols import ArchivePackerProtocol, ImportClientProtocol, ImportResult
    from config.settings import ControlPlaneSettings

logger = logging.getLogger(__name__)


class DeployApiUseCase:
    """Sintetiza o bundle, empacota e importa no API Manager.

    Erros de serialização (ArtifactSerializationError) e do backend
    (ImportBackendError) propagam para a rota.
    """

    def __init__(
        self,
        import_client: ImportClientProtocol,
        settings: ControlPlaneSettings,
        packer: ArchivePackerProtocol | None = None,
    ) -> None:
        self._import_client = import_client
        self._settings = settings
        self._packer = packer

    async def execute(self, event: LifecycleEvent) -> ImportResult:
        bundle = synthesize(event, self._settings)
        artifact = package(bundle, self._packer)
        result = await self._import_client.import_api(artifact.archive_name, artifact.content)
        logger.info(
            "api_deployed",
            extra={
                "api_name": event.api.api_name,
                "api_version": event.api.api_version,
                "api_id": result.api_id,
                "revision_id": result.revision_id,
            },
        )
        return result
