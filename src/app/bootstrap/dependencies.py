"""Factories de dependências: criação de implementações concretas.

Centraliza a criação do espelho, dos clientes do control plane e dos
use cases a partir das settings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.apim import (
    ApimHttpClient,
    ApimHttpConfig,
    ApimInternalDataClient,
    ApimPublisherClient,
)
from app.infra.packaging import ZipArchivePacker
from app.infra.stores import MemoryEntityStore
from app.use_cases.apis import DeployApiUseCase, UndeployApiRevisionUseCase
from app.use_cases.entities import SyncEntitySnapshotsUseCase

if TYPE_CHECKING:
    import httpx

    from app.protocols import (
        EntityStoreProtocol,
        ImportClientProtocol,
        SnapshotSourceProtocol,
    )
    from config.settings import ControlPlaneSettings

logger = logging.getLogger(__name__)


def create_entity_store(settings: ControlPlaneSettings) -> EntityStoreProtocol:
    store = MemoryEntityStore(tenant_domain=settings.tenant_domain)
    logger.info("entity_store_created", extra={"backend": "memory"})
    return store


def create_http_client(
    settings: ControlPlaneSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApimHttpClient:
    """Cliente HTTP do control plane (basic auth, TLS conforme settings)."""
    return ApimHttpClient(
        ApimHttpConfig(
            base_url=settings.service_url,
            username=settings.username,
            password=settings.password,
            timeout_seconds=settings.request_timeout_seconds,
            verify_ssl=not settings.skip_ssl_verification,
            transport=transport,
        )
    )


def create_import_client(settings: ControlPlaneSettings) -> ImportClientProtocol:
    return ApimPublisherClient(create_http_client(settings))


def create_snapshot_source(settings: ControlPlaneSettings) -> SnapshotSourceProtocol:
    return ApimInternalDataClient(create_http_client(settings))


def create_deploy_use_case(
    settings: ControlPlaneSettings,
    import_client: ImportClientProtocol | None = None,
) -> DeployApiUseCase:
    return DeployApiUseCase(
        import_client=import_client or create_import_client(settings),
        settings=settings,
        packer=ZipArchivePacker(),
    )


def create_undeploy_use_case(
    settings: ControlPlaneSettings,
    import_client: ImportClientProtocol | None = None,
) -> UndeployApiRevisionUseCase:
    return UndeployApiRevisionUseCase(
        import_client=import_client or create_import_client(settings),
        settings=settings,
    )


def create_sync_use_case(
    settings: ControlPlaneSettings,
    store: EntityStoreProtocol,
) -> SyncEntitySnapshotsUseCase:
    return SyncEntitySnapshotsUseCase(source=create_snapshot_source(settings), store=store)
