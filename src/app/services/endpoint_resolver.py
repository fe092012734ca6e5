"""Endpoint Resolver: expande a configuração de endpoints do evento.

Regras:
- Por stage, a lista multi-endpoint tem precedência; vazia, cai para o
  campo single (`prodEndpoint`/`sandEndpoint` + `endpointProtocol`).
- URL single vazia não gera descriptor para o stage.
- O primeiro descriptor de cada stage é o primário.
- Ids são uuid5 do api, stage, posição e URL: mesmo evento, mesmos ids.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from app.constants.artifacts import DeploymentStage
from app.domain.endpoints import EndpointDescriptor, EndpointSecurityConfig, ResolvedEndpoints

if TYPE_CHECKING:
    from app.domain.events import ApiDescriptor, EndpointSecurity, MultiEndpointEntry

logger = logging.getLogger(__name__)

_STAGE_LABELS = {
    DeploymentStage.PRODUCTION: "Production",
    DeploymentStage.SANDBOX: "Sandbox",
}


def build_endpoint_url(protocol: str, host: str) -> str:
    """`<protocol>://<host>`; host vazio resulta em string vazia."""
    if not host:
        return ""
    return f"{protocol}://{host}"


def endpoint_name(stage: DeploymentStage, position: int) -> str:
    """Nome legível: o primeiro é "Default ...", os demais numerados."""
    label = _STAGE_LABELS[stage]
    if position == 1:
        return f"Default {label} Endpoint"
    return f"{position} {label} Endpoint"


def endpoint_id(api: ApiDescriptor, stage: DeploymentStage, position: int, url: str) -> str:
    """Id estável do descriptor, com sufixo do stage."""
    seed = f"{api.api_uuid or api.api_name}:{api.api_version}:{stage.value}:{position}:{url}"
    return f"{uuid.uuid5(uuid.NAMESPACE_URL, seed)}--{stage.value}"


def _security_from_entry(entry: MultiEndpointEntry) -> EndpointSecurityConfig:
    return EndpointSecurityConfig(
        enabled=entry.security_enabled,
        type=entry.security_type,
        username=entry.basic_username,
        password=entry.basic_password,
        api_key_identifier=entry.api_key_name,
        api_key_value=entry.api_key_value,
        api_key_identifier_type=entry.api_key_in,
    )


def _security_from_api(security: EndpointSecurity) -> EndpointSecurityConfig:
    return EndpointSecurityConfig(
        enabled=security.enabled,
        type=security.security_type,
        username=security.basic_username,
        password=security.basic_password,
        api_key_identifier=security.api_key_name,
        api_key_value=security.api_key_value,
        api_key_identifier_type=security.api_key_in,
    )


def _resolve_stage(
    api: ApiDescriptor,
    stage: DeploymentStage,
    entries: list[MultiEndpointEntry],
    single_host: str,
    single_security: EndpointSecurity,
) -> list[EndpointDescriptor]:
    descriptors: list[EndpointDescriptor] = []

    if entries:
        protocol = api.multi_endpoints.protocol or api.endpoint_protocol
        for position, entry in enumerate(entries, start=1):
            url = build_endpoint_url(protocol, entry.url)
            descriptors.append(
                EndpointDescriptor(
                    stage=stage,
                    id=endpoint_id(api, stage, position, url),
                    name=endpoint_name(stage, position),
                    url=url,
                    endpoint_type=protocol,
                    security=_security_from_entry(entry),
                )
            )
        return descriptors

    if single_host:
        url = build_endpoint_url(api.endpoint_protocol, single_host)
        descriptors.append(
            EndpointDescriptor(
                stage=stage,
                id=endpoint_id(api, stage, 1, url),
                name=endpoint_name(stage, 1),
                url=url,
                endpoint_type=api.endpoint_protocol,
                security=_security_from_api(single_security),
            )
        )
    return descriptors


def resolve_endpoints(api: ApiDescriptor) -> ResolvedEndpoints:
    """Expande endpoints do evento em descriptors ordenados."""
    production = _resolve_stage(
        api,
        DeploymentStage.PRODUCTION,
        api.multi_endpoints.prod_endpoints,
        api.prod_endpoint,
        api.prod_endpoint_security,
    )
    sandbox = _resolve_stage(
        api,
        DeploymentStage.SANDBOX,
        api.multi_endpoints.sand_endpoints,
        api.sand_endpoint,
        api.sand_endpoint_security,
    )
    resolved = ResolvedEndpoints(descriptors=tuple(production + sandbox))
    logger.debug(
        "endpoints_resolved",
        extra={
            "api_name": api.api_name,
            "production_count": len(production),
            "sandbox_count": len(sandbox),
            "endpoint_document": resolved.needs_endpoint_document,
        },
    )
    return resolved
