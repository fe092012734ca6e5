"""Settings de conexão com o control plane (API Manager).

Credenciais, labels de ambiente de deploy e tenant padrão usados
na síntese de artefatos e nas chamadas de import/undeploy.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

DEFAULT_ENVIRONMENT_LABELS: tuple[str, ...] = ("Default",)
DEFAULT_TENANT_DOMAIN = "carbon.super"


@dataclass(frozen=True)
class ControlPlaneSettings:
    """Configurações do control plane.

    Attributes:
        enabled: Habilita pull de snapshots no startup
        service_url: URL base do API Manager (ex: https://apim:9443/)
        username: Usuário para basic auth nas APIs REST
        password: Senha para basic auth
        environment_labels: Gateways de deploy (o primeiro é usado no undeploy)
        provider: Provider gravado no api.yaml
        tenant_domain: Tenant aplicado a entidades sem tenant
        skip_ssl_verification: Desabilita verificação TLS do cliente HTTP
        request_timeout_seconds: Timeout das chamadas HTTP
    """

    enabled: bool = False
    service_url: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    environment_labels: tuple[str, ...] = DEFAULT_ENVIRONMENT_LABELS
    provider: str = "admin"
    tenant_domain: str = DEFAULT_TENANT_DOMAIN
    skip_ssl_verification: bool = False
    request_timeout_seconds: float = 30.0

    @property
    def primary_environment_label(self) -> str:
        """Label usado no payload de undeploy de revisão."""
        return self.environment_labels[0] if self.environment_labels else "Default"

    def validate(self) -> list[str]:
        """Valida configurações do control plane.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if not self.environment_labels:
            errors.append("CONTROL_PLANE_ENVIRONMENT_LABELS não pode ser vazio")

        if self.request_timeout_seconds <= 0:
            errors.append("CONTROL_PLANE_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if not self.enabled:
            return errors

        if not self.service_url:
            errors.append("CONTROL_PLANE_SERVICE_URL obrigatório quando habilitado")
        elif not self.service_url.startswith(("http://", "https://")):
            errors.append("CONTROL_PLANE_SERVICE_URL deve começar com http(s)://")

        if not self.username or not self.password:
            errors.append("CONTROL_PLANE_USERNAME e CONTROL_PLANE_PASSWORD obrigatórios")

        return errors


def _parse_labels(raw: str) -> tuple[str, ...]:
    labels = tuple(label.strip() for label in raw.split(",") if label.strip())
    return labels or DEFAULT_ENVIRONMENT_LABELS


def _load_control_plane_from_env() -> ControlPlaneSettings:
    """Carrega ControlPlaneSettings de variáveis de ambiente."""
    return ControlPlaneSettings(
        enabled=os.getenv("CONTROL_PLANE_ENABLED", "").lower() in ("true", "1", "yes"),
        service_url=os.getenv("CONTROL_PLANE_SERVICE_URL", ""),
        username=os.getenv("CONTROL_PLANE_USERNAME", ""),
        password=os.getenv("CONTROL_PLANE_PASSWORD", ""),
        environment_labels=_parse_labels(os.getenv("CONTROL_PLANE_ENVIRONMENT_LABELS", "")),
        provider=os.getenv("CONTROL_PLANE_PROVIDER", "admin"),
        tenant_domain=os.getenv("CONTROL_PLANE_TENANT_DOMAIN", DEFAULT_TENANT_DOMAIN),
        skip_ssl_verification=os.getenv("CONTROL_PLANE_SKIP_SSL_VERIFICATION", "").lower()
        in ("true", "1", "yes"),
        request_timeout_seconds=float(os.getenv("CONTROL_PLANE_REQUEST_TIMEOUT_SECONDS", "30")),
    )


@lru_cache(maxsize=1)
def get_control_plane_settings() -> ControlPlaneSettings:
    """Retorna instância cacheada de ControlPlaneSettings."""
    return _load_control_plane_from_env()
