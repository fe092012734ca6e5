"""Artifact Synthesizer: evento de ciclo de vida → bundle de artefatos.

Pipeline (puro, sem IO):
1. Endpoint Resolver
2. parse do OpenAPI (REST) e Operation Matcher + Policy Builder
3. montagem de api.yaml, endpoints.yaml (multi-endpoint) e
   deployment_environments.yaml
4. reescrita do OpenAPI com segurança por operação

Mesma entrada produz o mesmo bundle.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from app.constants.artifacts import (
    API_KEY_IN_HEADER,
    ENDPOINT_IMPLEMENTATION_TYPE,
    GRAPHQL_SCHEMA_FILE_NAME,
    SECURITY_NONE,
    SWAGGER_FILE_NAME,
)
from app.domain.artifacts import (
    AdditionalProperty,
    ApiDefinitionDocument,
    ArtifactBundle,
    CorsConfiguration,
    DeploymentEnvironmentsDocument,
    EndpointsDocument,
    InlineEndpointConfig,
    MaxTps,
    StageRateLimit,
    StageSecurity,
)
from app.services.endpoint_resolver import resolve_endpoints
from app.services.openapi_rewriter import apply_operation_security, dump_openapi, load_openapi
from app.services.operation_matcher import match_operations
from app.services.policy_builder import build_model_routing_policy

if TYPE_CHECKING:
    from app.domain.endpoints import EndpointDescriptor, ResolvedEndpoints
    from app.domain.events import (
        AIRateLimit,
        ApiDescriptor,
        CORSPolicy,
        EndpointSecurity,
        LifecycleEvent,
    )
    from app.domain.policies import OperationPolicy
    from config.settings import ControlPlaneSettings

logger = logging.getLogger(__name__)

API_TYPE_HTTP = "HTTP"
API_TYPE_GRAPHQL = "GRAPHQL"


def strip_version_suffix(base_path: str, version: str) -> str:
    """`/pets/1.0` + `1.0` → `/pets`; sem sufixo, retorna o path intacto."""
    suffix = f"/{version}"
    if version and base_path.endswith(suffix):
        return base_path[: -len(suffix)]
    return base_path


def _stage_security(
    descriptor: EndpointDescriptor | None,
    fallback: EndpointSecurity,
) -> StageSecurity:
    """Segurança do primário do stage; sem primário, a do nível da API."""
    if descriptor is not None:
        security = descriptor.security
        return StageSecurity(
            enabled=security.enabled,
            type=security.type or SECURITY_NONE,
            username=security.username,
            password=security.password,
            api_key_identifier=security.api_key_identifier,
            api_key_value=security.api_key_value,
            api_key_identifier_type=security.api_key_identifier_type or API_KEY_IN_HEADER,
        )
    return StageSecurity(
        enabled=fallback.enabled,
        type=fallback.security_type or SECURITY_NONE,
        username=fallback.basic_username,
        password=fallback.basic_password,
        api_key_identifier=fallback.api_key_name,
        api_key_value=fallback.api_key_value,
        api_key_identifier_type=API_KEY_IN_HEADER,
    )


def _inline_endpoint_config(
    api: ApiDescriptor,
    endpoints: ResolvedEndpoints,
) -> InlineEndpointConfig:
    production = endpoints.primary_production
    sandbox = endpoints.primary_sandbox
    primary = production or sandbox
    # O tipo acompanha o protocolo usado nas URLs dos descriptors.
    if primary is not None:
        endpoint_type = primary.endpoint_type
    else:
        endpoint_type = api.endpoint_protocol or api.multi_endpoints.protocol
    return InlineEndpointConfig(
        endpoint_type=endpoint_type,
        production_url=production.url if production else "",
        sandbox_url=sandbox.url if sandbox else "",
        production_security=_stage_security(production, api.prod_endpoint_security),
        sandbox_security=_stage_security(sandbox, api.sand_endpoint_security),
    )


def _cors(policy: CORSPolicy | None) -> CorsConfiguration | None:
    if policy is None:
        return None
    return CorsConfiguration(
        allow_origins=tuple(policy.access_control_allow_origins),
        allow_credentials=policy.access_control_allow_credentials,
        allow_headers=tuple(policy.access_control_allow_headers),
        allow_methods=tuple(policy.access_control_allow_methods),
        expose_headers=tuple(policy.access_control_expose_headers),
    )


def _stage_rate_limit(limit: AIRateLimit | None) -> StageRateLimit | None:
    if limit is None:
        return None
    return StageRateLimit(
        request_count=limit.request_count,
        time_unit=limit.time_unit,
        max_prompt_tokens=limit.prompt_token_count,
        max_completion_tokens=limit.completion_token_count,
        max_total_tokens=limit.total_token_count,
    )


def _max_tps(api: ApiDescriptor) -> MaxTps | None:
    production = _stage_rate_limit(api.prod_ai_rate_limit)
    sandbox = _stage_rate_limit(api.sand_ai_rate_limit)
    if production is None and sandbox is None:
        return None
    return MaxTps(production=production, sandbox=sandbox)


def _subtype_configuration(api: ApiDescriptor) -> dict[str, str] | None:
    ai = api.ai_configuration
    if not (
        api.api_sub_type
        and ai.llm_provider_id
        and ai.llm_provider_name
        and ai.llm_provider_api_version
    ):
        return None
    configuration = json.dumps({"llmProviderId": ai.llm_provider_id}, separators=(",", ":"))
    return {"subtype": api.api_sub_type, "_configuration": configuration}


def _additional_properties(api: ApiDescriptor) -> tuple[AdditionalProperty, ...]:
    return tuple(
        AdditionalProperty(name=name, value=value)
        for name, value in sorted(api.api_properties.items())
    )


def _api_policies(api: ApiDescriptor, endpoints: ResolvedEndpoints) -> tuple[OperationPolicy, ...]:
    if api.is_graphql or api.model_based_round_robin is None:
        return ()
    return (build_model_routing_policy(api.model_based_round_robin, endpoints, api_level=True),)


def synthesize(event: LifecycleEvent, settings: ControlPlaneSettings) -> ArtifactBundle:
    """Monta o bundle de artefatos de um evento de criação/atualização."""
    api = event.api
    endpoints = resolve_endpoints(api)

    tree = load_openapi(api.definition) if api.is_rest else None
    matched = match_operations(api, tree, endpoints)

    if tree is not None:
        apply_operation_security(tree, matched.matches, matched.scopes)
        definition = dump_openapi(tree)
        definition_file_name = SWAGGER_FILE_NAME
    elif api.is_graphql:
        definition = api.definition
        definition_file_name = GRAPHQL_SCHEMA_FILE_NAME
    else:
        definition = api.definition
        definition_file_name = SWAGGER_FILE_NAME

    multi_endpoint = endpoints.needs_endpoint_document
    primary_production = endpoints.primary_production
    primary_sandbox = endpoints.primary_sandbox

    api_definition = ApiDefinitionDocument(
        name=api.api_name,
        context=strip_version_suffix(api.base_path, api.api_version),
        version=api.api_version,
        organization_id=api.organization,
        provider=settings.provider,
        api_type=API_TYPE_GRAPHQL if api.is_graphql else API_TYPE_HTTP,
        endpoint_config=_inline_endpoint_config(api, endpoints),
        is_default_version=api.is_default_version,
        operations=matched.operations,
        scopes=matched.scopes,
        additional_properties=_additional_properties(api),
        security_scheme=tuple(api.security_scheme),
        authorization_header=api.auth_header,
        api_key_header=api.api_key_header,
        api_policies=_api_policies(api, endpoints),
        cors=_cors(api.cors_policy),
        max_tps=_max_tps(api),
        subtype_configuration=_subtype_configuration(api),
        primary_production_endpoint_id=(
            primary_production.id if multi_endpoint and primary_production else None
        ),
        primary_sandbox_endpoint_id=(
            primary_sandbox.id if multi_endpoint and primary_sandbox else None
        ),
        endpoint_implementation_type=ENDPOINT_IMPLEMENTATION_TYPE if multi_endpoint else None,
    )

    bundle = ArtifactBundle(
        api_name=api.api_name,
        api_version=api.api_version,
        provider=settings.provider,
        api_definition=api_definition,
        deployment_environments=DeploymentEnvironmentsDocument(
            environment_labels=tuple(settings.environment_labels),
            vhost=api.vhost,
        ),
        definition=definition,
        definition_file_name=definition_file_name,
        endpoints=EndpointsDocument(endpoints.descriptors) if multi_endpoint else None,
    )

    logger.info(
        "artifact_synthesized",
        extra={
            "api_name": api.api_name,
            "api_version": api.api_version,
            "operations_count": len(matched.operations),
            "scopes_count": len(matched.scopes),
            "endpoint_document": multi_endpoint,
        },
    )
    return bundle
