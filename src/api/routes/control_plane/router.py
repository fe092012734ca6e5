"""Router das rotas consumidas pelo adapter do gateway."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.control_plane.apis import router as apis_router
from api.routes.control_plane.entities import router as entities_router

router = APIRouter()

router.include_router(apis_router)
router.include_router(entities_router)
