"""Endpoint de eventos de ciclo de vida de API.

POST /apis
- DELETE: undeploy da revisão no primeiro ambiente configurado
- CREATE/UPDATE: síntese → empacotamento → import

Respostas:
- 200 {"message": "Success"} (delete) ou {"id", "revisionID"} (import)
- 400 {"error": ...} body malformado; pipeline não é executado
- 500 {"error": ...} bundle não serializável; nada é importado
- 503 texto do erro quando o API Manager falha (adapter retenta)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.domain.events import LifecycleEvent
from app.observability import correlation_scope
from utils.errors import ArtifactSerializationError, ImportBackendError

from ._responses import bad_request, validation_message

logger = logging.getLogger(__name__)

router = APIRouter()


async def _undeploy(request: Request, event: LifecycleEvent) -> Response:
    use_case = request.app.state.undeploy_use_case
    try:
        await use_case.execute(event.api)
    except ImportBackendError as exc:
        logger.error(
            "api_undeploy_failed",
            extra={
                "api_uuid": event.api.api_uuid,
                "revision_id": event.api.revision_id,
                "status_code": exc.status_code,
                "error": str(exc),
            },
        )
        return JSONResponse(content=str(exc), status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return JSONResponse(content={"message": "Success"}, status_code=status.HTTP_200_OK)


async def _deploy(request: Request, event: LifecycleEvent) -> Response:
    use_case = request.app.state.deploy_use_case
    try:
        result = await use_case.execute(event)
    except ArtifactSerializationError as exc:
        logger.error(
            "artifact_serialization_failed",
            extra={"api_name": event.api.api_name, "error": str(exc)},
        )
        return JSONResponse(
            content={"error": str(exc)},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    except ImportBackendError as exc:
        logger.error(
            "api_import_failed",
            extra={
                "api_name": event.api.api_name,
                "api_version": event.api.api_version,
                "status_code": exc.status_code,
                "error": str(exc),
            },
        )
        return JSONResponse(content=str(exc), status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return JSONResponse(
        content={"id": result.api_id, "revisionID": result.revision_id},
        status_code=status.HTTP_200_OK,
    )


@router.post("/apis", response_model=None)
async def receive_api_event(request: Request) -> Response:
    """Recebe um evento de API do adapter."""
    with correlation_scope(request.headers.get("x-correlation-id")):
        raw_body = await request.body()
        try:
            event = LifecycleEvent.model_validate_json(raw_body)
        except ValidationError as exc:
            message = validation_message(exc)
            logger.warning("api_event_invalid", extra={"error": message})
            return bad_request(message)

        logger.info(
            "api_event_received",
            extra={
                "event": event.event,
                "api_name": event.api.api_name,
                "api_uuid": event.api.api_uuid,
                "payload_size": len(raw_body),
            },
        )
        if event.is_delete:
            return await _undeploy(request, event)
        return await _deploy(request, event)
