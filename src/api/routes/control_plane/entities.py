"""Endpoints do espelho de entidades.

GET  /applications | /subscriptions | /applicationmappings | /keymanagers
     → {"list": [...]}
PUT  mesmas rotas com {"list": [...]} → substitui o mapa inteiro do tipo
     e responde {"count": n}
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.observability import correlation_scope
from app.use_cases.entities import EntityKind, replace_snapshot, serialize_snapshot

from ._responses import bad_request, validation_message

logger = logging.getLogger(__name__)

router = APIRouter()


def _list_response(request: Request, kind: EntityKind) -> JSONResponse:
    store = request.app.state.entity_store
    return JSONResponse(content={"list": serialize_snapshot(store, kind)})


async def _replace_response(request: Request, kind: EntityKind) -> JSONResponse:
    with correlation_scope(request.headers.get("x-correlation-id")):
        try:
            body = json.loads(await request.body())
        except ValueError as exc:
            return bad_request(f"JSON inválido: {exc}")
        if not isinstance(body, dict) or not isinstance(body.get("list"), list):
            return bad_request("corpo deve ser {\"list\": [...]}")

        try:
            count = replace_snapshot(request.app.state.entity_store, kind, body["list"])
        except ValidationError as exc:
            message = validation_message(exc)
            logger.warning(
                "entity_snapshot_invalid",
                extra={"entity_kind": kind.value, "error": message},
            )
            return bad_request(message)

        logger.info("entity_snapshot_pushed", extra={"entity_kind": kind.value, "count": count})
        return JSONResponse(content={"count": count}, status_code=status.HTTP_200_OK)


@router.get("/applications")
async def list_applications(request: Request) -> JSONResponse:
    return _list_response(request, EntityKind.APPLICATIONS)


@router.get("/subscriptions")
async def list_subscriptions(request: Request) -> JSONResponse:
    return _list_response(request, EntityKind.SUBSCRIPTIONS)


@router.get("/applicationmappings")
async def list_application_mappings(request: Request) -> JSONResponse:
    return _list_response(request, EntityKind.KEY_MAPPINGS)


@router.get("/keymanagers")
async def list_key_managers(request: Request) -> JSONResponse:
    return _list_response(request, EntityKind.KEY_MANAGERS)


@router.put("/applications")
async def replace_applications(request: Request) -> JSONResponse:
    return await _replace_response(request, EntityKind.APPLICATIONS)


@router.put("/subscriptions")
async def replace_subscriptions(request: Request) -> JSONResponse:
    return await _replace_response(request, EntityKind.SUBSCRIPTIONS)


@router.put("/applicationmappings")
async def replace_application_mappings(request: Request) -> JSONResponse:
    return await _replace_response(request, EntityKind.KEY_MAPPINGS)


@router.put("/keymanagers")
async def replace_key_managers(request: Request) -> JSONResponse:
    return await _replace_response(request, EntityKind.KEY_MANAGERS)
