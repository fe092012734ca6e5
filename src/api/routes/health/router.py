"""Endpoints de health check."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: espelho carregado e control plane configurado."""
    store = getattr(request.app.state, "entity_store", None)
    settings = getattr(request.app.state, "control_plane_settings", None)

    control_plane_ok = settings is None or not settings.enabled or bool(settings.service_url)
    ready = store is not None and control_plane_ok

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "entity_store": store.counts() if store is not None else None,
            "control_plane": {
                "enabled": bool(settings and settings.enabled),
                "configured": control_plane_ok,
            },
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if not ready:
        logger.warning("readiness_check_failed", extra={"checks": payload["checks"]})
    return JSONResponse(content=payload, status_code=200 if ready else 503)
