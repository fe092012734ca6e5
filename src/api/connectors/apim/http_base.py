"""Cliente HTTP base para o API Manager.

Sem retry: o adapter upstream retenta ao receber 503.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class ApimHttpConfig:
    """Configuração do cliente HTTP."""

    base_url: str
    username: str = ""
    password: str = field(default="", repr=False)
    timeout_seconds: float = 30.0
    verify_ssl: bool = True
    default_headers: dict[str, str] = field(default_factory=dict)
    # Injetável em testes (httpx.MockTransport)
    transport: httpx.AsyncBaseTransport | None = None


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApimHttpClient:
    """Cliente HTTP com basic auth e URL base do control plane."""

    def __init__(self, config: ApimHttpConfig) -> None:
        self._config = config

    @property
    def config(self) -> ApimHttpConfig:
        return self._config

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _auth(self) -> httpx.BasicAuth | None:
        if not self._config.username:
            return None
        return httpx.BasicAuth(self._config.username, self._config.password)

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Executa a requisição e devolve a resposta 2xx.

        Raises:
            HttpError: falha de conexão/timeout ou status >= 400
        """
        url = self._url(path)
        headers = {**self._config.default_headers, **kwargs.pop("headers", {})}
        try:
            async with httpx.AsyncClient(
                verify=self._config.verify_ssl,
                auth=self._auth(),
                timeout=self._config.timeout_seconds,
                transport=self._config.transport,
            ) as client:
                response = await client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(
                "apim_http_connection_error",
                extra={"method": method, "path": path, "error_type": type(exc).__name__},
            )
            raise HttpError(f"falha de conexão com o control plane: {exc}") from exc

        if response.status_code >= 400:
            logger.warning(
                "apim_http_error_status",
                extra={"method": method, "path": path, "status_code": response.status_code},
            )
            raise HttpError(
                f"control plane respondeu {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response
