"""Documentos do bundle de artefatos.

Um builder tipado por documento (api.yaml, endpoints.yaml,
deployment_environments.yaml). Campos opcionais em None não são
emitidos; a presença condicional de chaves fica concentrada nos
métodos `to_document`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.constants.artifacts import (
    API_DOCUMENT_TYPE,
    API_DOCUMENT_VERSION,
    API_KEY_IN_HEADER,
    AUTH_TYPE_APPLICATION_AND_USER,
    CACHE_TIMEOUT_SECONDS,
    DEFAULT_TRANSPORTS,
    DEPLOYMENT_DOCUMENT_TYPE,
    DEPLOYMENT_DOCUMENT_VERSION,
    ENDPOINTS_DOCUMENT_TYPE,
    ENDPOINTS_DOCUMENT_VERSION,
    GATEWAY_TYPE,
    GATEWAY_VENDOR,
    LIFECYCLE_STATUS_CREATED,
    THROTTLING_UNLIMITED,
    UNSET_TIMEOUT,
)
from app.domain.endpoints import EndpointDescriptor
from app.domain.policies import OperationPolicies, OperationPolicy


@dataclass(frozen=True, slots=True)
class Scope:
    name: str
    display_name: str
    description: str
    bindings: tuple[str, ...] = ()

    @classmethod
    def named(cls, name: str) -> Scope:
        return cls(name=name, display_name=name, description=name)

    def as_dict(self) -> dict[str, Any]:
        return {
            "scope": {
                "name": self.name,
                "displayName": self.display_name,
                "description": self.description,
                "bindings": list(self.bindings),
            },
            "shared": False,
        }


@dataclass(frozen=True, slots=True)
class ArtifactOperation:
    """Operação emitida no api.yaml."""

    target: str
    verb: str
    scopes: tuple[str, ...] = ()
    policies: OperationPolicies = field(default_factory=OperationPolicies)
    auth_type: str = AUTH_TYPE_APPLICATION_AND_USER
    throttling_policy: str = THROTTLING_UNLIMITED

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": "",
            "target": self.target,
            "verb": self.verb,
            "authType": self.auth_type,
            "throttlingPolicy": self.throttling_policy,
            "scopes": list(self.scopes),
            "usedProductIds": [],
            "operationPolicies": self.policies.as_dict(),
        }


@dataclass(frozen=True, slots=True)
class StageSecurity:
    """Segurança de endpoint embutida no endpointConfig do api.yaml."""

    enabled: bool = False
    type: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    api_key_identifier: str = ""
    api_key_value: str = field(default="", repr=False)
    api_key_identifier_type: str = API_KEY_IN_HEADER

    def as_dict(self) -> dict[str, Any]:
        return {
            "apiKeyValue": self.api_key_value,
            "apiKeyIdentifier": self.api_key_identifier,
            "apiKeyIdentifierType": self.api_key_identifier_type,
            "type": self.type,
            "username": self.username,
            "password": self.password,
            "enabled": self.enabled,
            "additionalProperties": {},
            "customParameters": {},
            "connectionTimeoutDuration": UNSET_TIMEOUT,
            "socketTimeoutDuration": UNSET_TIMEOUT,
            "connectionRequestTimeoutDuration": UNSET_TIMEOUT,
        }


@dataclass(frozen=True, slots=True)
class InlineEndpointConfig:
    """endpointConfig do api.yaml; stage com URL vazia não é emitido."""

    endpoint_type: str
    production_url: str = ""
    sandbox_url: str = ""
    production_security: StageSecurity = field(default_factory=StageSecurity)
    sandbox_security: StageSecurity = field(default_factory=StageSecurity)

    def as_dict(self) -> dict[str, Any]:
        config: dict[str, Any] = {"endpoint_type": self.endpoint_type}
        if self.sandbox_url:
            config["sandbox_endpoints"] = {"url": self.sandbox_url}
        if self.production_url:
            config["production_endpoints"] = {"url": self.production_url}
        config["endpoint_security"] = {
            "sandbox": self.sandbox_security.as_dict(),
            "production": self.production_security.as_dict(),
        }
        return config


@dataclass(frozen=True, slots=True)
class CorsConfiguration:
    allow_origins: tuple[str, ...] = ()
    allow_credentials: bool = False
    allow_headers: tuple[str, ...] = ()
    allow_methods: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "corsConfigurationEnabled": True,
            "accessControlAllowOrigins": list(self.allow_origins),
            "accessControlAllowCredentials": self.allow_credentials,
            "accessControlAllowHeaders": list(self.allow_headers),
            "accessControlAllowMethods": list(self.allow_methods),
            "accessControlExposeHeaders": list(self.expose_headers),
        }


@dataclass(frozen=True, slots=True)
class StageRateLimit:
    request_count: int
    time_unit: str
    max_prompt_tokens: int | None = None
    max_completion_tokens: int | None = None
    max_total_tokens: int | None = None


@dataclass(frozen=True, slots=True)
class MaxTps:
    """Bloco maxTps, emitido só quando algum stage tem limite de IA."""

    production: StageRateLimit | None = None
    sandbox: StageRateLimit | None = None

    def as_dict(self) -> dict[str, Any]:
        max_tps: dict[str, Any] = {}
        token_config: dict[str, Any] = {}
        for prefix, limit in (("production", self.production), ("sandbox", self.sandbox)):
            if limit is None:
                continue
            max_tps[prefix] = limit.request_count
            max_tps[f"{prefix}TimeUnit"] = limit.time_unit.upper()
            if limit.max_prompt_tokens is not None:
                token_config[f"{prefix}MaxPromptTokenCount"] = limit.max_prompt_tokens
            if limit.max_completion_tokens is not None:
                token_config[f"{prefix}MaxCompletionTokenCount"] = limit.max_completion_tokens
            if limit.max_total_tokens is not None:
                token_config[f"{prefix}MaxTotalTokenCount"] = limit.max_total_tokens
        if token_config:
            token_config["isTokenBasedThrottlingEnabled"] = True
            max_tps["tokenBasedThrottlingConfiguration"] = token_config
        return max_tps


@dataclass(frozen=True, slots=True)
class AdditionalProperty:
    name: str
    value: str
    display: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "display": self.display}


@dataclass(frozen=True, slots=True)
class ApiDefinitionDocument:
    """api.yaml."""

    name: str
    context: str
    version: str
    organization_id: str
    provider: str
    api_type: str
    endpoint_config: InlineEndpointConfig
    is_default_version: bool = False
    operations: tuple[ArtifactOperation, ...] = ()
    scopes: tuple[Scope, ...] = ()
    additional_properties: tuple[AdditionalProperty, ...] = ()
    security_scheme: tuple[str, ...] = ()
    authorization_header: str = ""
    api_key_header: str = ""
    api_policies: tuple[OperationPolicy, ...] = ()
    cors: CorsConfiguration | None = None
    max_tps: MaxTps | None = None
    subtype_configuration: dict[str, str] | None = None
    primary_production_endpoint_id: str | None = None
    primary_sandbox_endpoint_id: str | None = None
    endpoint_implementation_type: str | None = None

    def to_document(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "context": self.context,
            "version": self.version,
            "organizationId": self.organization_id,
            "provider": self.provider,
            "lifeCycleStatus": LIFECYCLE_STATUS_CREATED,
            "responseCachingEnabled": False,
            "cacheTimeout": CACHE_TIMEOUT_SECONDS,
            "hasThumbnail": False,
            "isDefaultVersion": self.is_default_version,
            "isRevision": False,
            "enableSchemaValidation": False,
            "enableSubscriberVerification": False,
            "type": self.api_type,
            "transport": list(DEFAULT_TRANSPORTS),
            "endpointConfig": self.endpoint_config.as_dict(),
            "policies": [THROTTLING_UNLIMITED],
            "gatewayType": GATEWAY_TYPE,
            "gatewayVendor": GATEWAY_VENDOR,
            "operations": [operation.as_dict() for operation in self.operations],
            "additionalProperties": [prop.as_dict() for prop in self.additional_properties],
            "securityScheme": list(self.security_scheme),
            "authorizationHeader": self.authorization_header,
            "apiKeyHeader": self.api_key_header,
            "scopes": [scope.as_dict() for scope in self.scopes],
            "apiPolicies": {
                "request": [policy.as_dict() for policy in self.api_policies],
                "response": [],
                "fault": [],
            },
        }
        if self.subtype_configuration is not None:
            data["subtypeConfiguration"] = dict(self.subtype_configuration)
        if self.cors is not None:
            data["corsConfiguration"] = self.cors.as_dict()
        if self.max_tps is not None:
            data["maxTps"] = self.max_tps.as_dict()
        if self.endpoint_implementation_type is not None:
            data["primaryProductionEndpointId"] = self.primary_production_endpoint_id or ""
            data["primarySandboxEndpointId"] = self.primary_sandbox_endpoint_id or ""
            data["endpointImplementationType"] = self.endpoint_implementation_type
        return {"type": API_DOCUMENT_TYPE, "version": API_DOCUMENT_VERSION, "data": data}


@dataclass(frozen=True, slots=True)
class EndpointsDocument:
    """endpoints.yaml com todos os descriptors."""

    descriptors: tuple[EndpointDescriptor, ...]

    def to_document(self) -> dict[str, Any]:
        return {
            "type": ENDPOINTS_DOCUMENT_TYPE,
            "version": ENDPOINTS_DOCUMENT_VERSION,
            "data": [descriptor.as_dict() for descriptor in self.descriptors],
        }


@dataclass(frozen=True, slots=True)
class DeploymentEnvironmentsDocument:
    """deployment_environments.yaml: uma entrada por label de ambiente."""

    environment_labels: tuple[str, ...]
    vhost: str

    def to_document(self) -> dict[str, Any]:
        return {
            "type": DEPLOYMENT_DOCUMENT_TYPE,
            "version": DEPLOYMENT_DOCUMENT_VERSION,
            "data": [
                {
                    "displayOnDevportal": True,
                    "deploymentEnvironment": label,
                    "deploymentVhost": self.vhost,
                }
                for label in self.environment_labels
            ],
        }


@dataclass(frozen=True, slots=True)
class ArtifactBundle:
    """Conjunto de documentos de uma API pronto para empacotar.

    Atributos:
        api_name / api_version / provider: compõem caminhos e nome do zip
        api_definition: api.yaml
        endpoints: endpoints.yaml (None quando há no máximo um endpoint por stage)
        deployment_environments: deployment_environments.yaml
        definition: OpenAPI (YAML) ou schema GraphQL
        definition_file_name: swagger.yaml ou schema.graphql
    """

    api_name: str
    api_version: str
    provider: str
    api_definition: ApiDefinitionDocument
    deployment_environments: DeploymentEnvironmentsDocument
    definition: str
    definition_file_name: str
    endpoints: EndpointsDocument | None = None
