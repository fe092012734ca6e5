"""Entrypoint do agente de artefatos do control plane.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 18084

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 18084
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.dependencies import (
    create_deploy_use_case,
    create_entity_store,
    create_import_client,
    create_sync_use_case,
    create_undeploy_use_case,
)
from config.logging import get_logger
from config.settings import get_base_settings, get_control_plane_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Cria espelho de entidades, cliente de import e use cases
    - Pull inicial dos snapshots (quando o control plane está habilitado)
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()

    settings = get_control_plane_settings()
    import_client = create_import_client(settings)
    app.state.control_plane_settings = settings
    app.state.entity_store = create_entity_store(settings)
    app.state.deploy_use_case = create_deploy_use_case(settings, import_client)
    app.state.undeploy_use_case = create_undeploy_use_case(settings, import_client)

    if settings.enabled and settings.service_url:
        await create_sync_use_case(settings, app.state.entity_store).execute()
    else:
        logger.info("entity_snapshot_pull_skipped", extra={"enabled": settings.enabled})

    yield

    logger.info("app_shutting_down", extra={"service": service_name})


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="APIM Artifact Agent",
        description="Sincroniza eventos de API do gateway com o API Manager",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta."""
    import uvicorn

    settings = get_base_settings()
    logger.info("app_run", extra={"host": settings.host, "port": settings.port})
    uvicorn.run(
        "app.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
