"""Endpoints resolvidos para um ciclo de síntese."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.constants.artifacts import API_KEY_IN_HEADER, UNSET_TIMEOUT, DeploymentStage


@dataclass(frozen=True, slots=True)
class EndpointSecurityConfig:
    """Segurança de um endpoint no formato do endpoints.yaml."""

    enabled: bool = False
    type: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    api_key_identifier: str = ""
    api_key_value: str = field(default="", repr=False)
    api_key_identifier_type: str = ""

    def as_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "type": self.type,
            "apiKeyIdentifier": self.api_key_identifier,
            "apiKeyValue": self.api_key_value,
            "apiKeyIdentifierType": self.api_key_identifier_type or API_KEY_IN_HEADER,
            "username": self.username,
            "customParameters": "{}",
            "connectionTimeoutDuration": UNSET_TIMEOUT,
            "connectionRequestTimeoutDuration": UNSET_TIMEOUT,
            "socketTimeoutDuration": UNSET_TIMEOUT,
            "grantType": "",
            "tokenUrl": "",
            "proxyConfigs": {
                "proxyEnabled": "",
                "proxyHost": "",
                "proxyPort": "",
                "proxyUsername": "",
                "proxyPassword": "",
                "proxyProtocol": "",
            },
        }


@dataclass(frozen=True, slots=True)
class EndpointDescriptor:
    """Endpoint identificado de um stage.

    Atributos:
        stage: PRODUCTION ou SANDBOX
        id: Identificador único no bundle, com sufixo `--<STAGE>`
        name: "Default Production Endpoint", "2 Production Endpoint", ...
        url: URL com protocolo (vazia quando o adapter não enviou host)
        endpoint_type: Protocolo do endpoint (http/https)
        security: Configuração de segurança do endpoint
    """

    stage: DeploymentStage
    id: str
    name: str
    url: str
    endpoint_type: str
    security: EndpointSecurityConfig = field(default_factory=EndpointSecurityConfig)

    def as_dict(self) -> dict[str, Any]:
        """Entrada do endpoints.yaml."""
        stage_key = "production" if self.stage is DeploymentStage.PRODUCTION else "sandbox"
        return {
            "id": self.id,
            "name": self.name,
            "deploymentStage": self.stage.value,
            "endpointConfig": {
                "endpoint_type": self.endpoint_type,
                f"{stage_key}_endpoints": {"url": self.url},
                "endpoint_security": {
                    stage_key: self.security.as_dict(),
                    "customParameters": "null",
                },
            },
        }


@dataclass(frozen=True, slots=True)
class ResolvedEndpoints:
    """Resultado do Endpoint Resolver.

    `descriptors` mantém a ordem de declaração (produção antes de sandbox).
    O primário de cada stage é o primeiro descriptor daquele stage.
    """

    descriptors: tuple[EndpointDescriptor, ...] = ()

    def for_stage(self, stage: DeploymentStage) -> tuple[EndpointDescriptor, ...]:
        return tuple(d for d in self.descriptors if d.stage is stage)

    def primary(self, stage: DeploymentStage) -> EndpointDescriptor | None:
        stage_descriptors = self.for_stage(stage)
        return stage_descriptors[0] if stage_descriptors else None

    @property
    def primary_production(self) -> EndpointDescriptor | None:
        return self.primary(DeploymentStage.PRODUCTION)

    @property
    def primary_sandbox(self) -> EndpointDescriptor | None:
        return self.primary(DeploymentStage.SANDBOX)

    @property
    def needs_endpoint_document(self) -> bool:
        """endpoints.yaml só é emitido com mais de um endpoint em algum stage."""
        return (
            len(self.for_stage(DeploymentStage.PRODUCTION)) > 1
            or len(self.for_stage(DeploymentStage.SANDBOX)) > 1
        )

    def endpoint_id_for_url(self, url: str) -> str:
        """Id do primeiro descriptor com a URL informada ("" se nenhum)."""
        for descriptor in self.descriptors:
            if descriptor.url == url:
                return descriptor.id
        return ""
