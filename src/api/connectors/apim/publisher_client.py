"""Cliente da Publisher REST API: import de artefato e undeploy de revisão."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.protocols import ImportResult
from utils.errors import ImportBackendError

from .http_base import ApimHttpClient, HttpError

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

PUBLISHER_API_PATH = "api/am/publisher/v4/apis"
IMPORT_QUERY_PARAMS = {
    "preserveProvider": "false",
    "rotateRevision": "true",
    "overwrite": "true",
}
ZIP_CONTENT_TYPE = "application/zip"


class ApimPublisherClient:
    """Implementa ImportClientProtocol sobre a Publisher API.

    Toda falha vira ImportBackendError (reportado como 503).
    """

    def __init__(self, http: ApimHttpClient) -> None:
        self._http = http

    async def import_api(self, archive_name: str, content: bytes) -> ImportResult:
        """Importa o zip e retorna o id da API e a revisão mais recente."""
        try:
            response = await self._http.request(
                "POST",
                f"{PUBLISHER_API_PATH}/import",
                params=IMPORT_QUERY_PARAMS,
                files={"file": (archive_name, content, ZIP_CONTENT_TYPE)},
            )
            api_id = _extract_api_id(response)
            if not api_id:
                raise ImportBackendError("import sem id de API na resposta")
            revision_id = await self._latest_revision_id(api_id)
        except HttpError as exc:
            raise ImportBackendError(str(exc), status_code=exc.status_code) from exc
        except ValueError as exc:
            raise ImportBackendError(f"resposta inválida do control plane: {exc}") from exc

        logger.info(
            "apim_api_imported",
            extra={"archive_name": archive_name, "api_id": api_id, "revision_id": revision_id},
        )
        return ImportResult(api_id=api_id, revision_id=revision_id)

    async def _latest_revision_id(self, api_id: str) -> str:
        """Última revisão listada; a Publisher API responde `{"count", "list"}`."""
        response = await self._http.request("GET", f"{PUBLISHER_API_PATH}/{api_id}/revisions")
        body = response.json()
        if not isinstance(body, dict):
            raise ImportBackendError("lista de revisões sem envelope")
        revisions = body.get("list") or []
        if not isinstance(revisions, list):
            raise ImportBackendError("lista de revisões inválida")
        if not revisions:
            return ""
        latest = revisions[-1]
        if not isinstance(latest, dict):
            raise ImportBackendError("revisão inválida na resposta")
        return str(latest.get("id", ""))

    async def delete_api_revision(
        self,
        api_id: str,
        revision_id: str,
        payload: list[dict[str, Any]],
    ) -> None:
        try:
            await self._http.request(
                "POST",
                f"{PUBLISHER_API_PATH}/{api_id}/undeploy-revision",
                params={"revisionId": revision_id},
                json=payload,
            )
        except HttpError as exc:
            raise ImportBackendError(str(exc), status_code=exc.status_code) from exc
        logger.info(
            "apim_revision_undeployed",
            extra={"api_id": api_id, "revision_id": revision_id},
        )


def _extract_api_id(response: httpx.Response) -> str:
    """Id da API importada: campo `id` do JSON ou corpo em texto puro."""
    if "json" in response.headers.get("content-type", ""):
        body = response.json()
        return str(body.get("id") or "") if isinstance(body, dict) else ""
    return response.text.strip()
