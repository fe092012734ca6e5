"""Eventos de ciclo de vida de API recebidos do adapter.

Modelos de entrada validados com pydantic. Os nomes de campo no JSON
seguem o contrato camelCase do adapter; os atributos Python usam
snake_case via alias.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

DELETE_EVENT = "DELETE"


class _EventModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class EndpointSecurity(_EventModel):
    """Segurança de endpoint informada no nível da API."""

    enabled: bool = False
    security_type: str = Field(default="", alias="securityType")
    api_key_name: str = Field(default="", alias="apiKeyName")
    api_key_value: str = Field(default="", alias="apiKeyValue")
    api_key_in: str = Field(default="", alias="apiKeyIn")
    basic_username: str = Field(default="", alias="basicUsername")
    basic_password: str = Field(default="", alias="basicPassword", repr=False)


class MultiEndpointEntry(_EventModel):
    """Um endpoint da lista multi-endpoint de um stage."""

    url: str = ""
    security_enabled: bool = Field(default=False, alias="securityEnabled")
    security_type: str = Field(default="", alias="securityType")
    basic_username: str = Field(default="", alias="basicUsername")
    basic_password: str = Field(default="", alias="basicPassword", repr=False)
    api_key_name: str = Field(default="", alias="apiKeyName")
    api_key_value: str = Field(default="", alias="apiKeyValue")
    api_key_in: str = Field(default="", alias="apiKeyIn")


class MultiEndpoints(_EventModel):
    """Listas ordenadas de endpoints por stage."""

    protocol: str = ""
    prod_endpoints: list[MultiEndpointEntry] = Field(default_factory=list, alias="prodEndpoints")
    sand_endpoints: list[MultiEndpointEntry] = Field(default_factory=list, alias="sandEndpoints")


class CORSPolicy(_EventModel):
    access_control_allow_origins: list[str] = Field(
        default_factory=list, alias="accessControlAllowOrigins"
    )
    access_control_allow_credentials: bool = Field(
        default=False, alias="accessControlAllowCredentials"
    )
    access_control_allow_headers: list[str] = Field(
        default_factory=list, alias="accessControlAllowHeaders"
    )
    access_control_allow_methods: list[str] = Field(
        default_factory=list, alias="accessControlAllowMethods"
    )
    access_control_expose_headers: list[str] = Field(
        default_factory=list, alias="accessControlExposeHeaders"
    )


class AIRateLimit(_EventModel):
    """Limite de requisições/tokens de uma API de IA para um stage."""

    request_count: int = Field(default=0, alias="requestCount")
    time_unit: str = Field(default="", alias="timeUnit")
    prompt_token_count: int | None = Field(default=None, alias="promptTokenCount")
    completion_token_count: int | None = Field(default=None, alias="completionTokenCount")
    total_token_count: int | None = Field(default=None, alias="totalTokenCount")


class AIConfiguration(_EventModel):
    llm_provider_id: str = Field(default="", alias="llmProviderId")
    llm_provider_name: str = Field(default="", alias="llmProviderName")
    llm_provider_api_version: str = Field(default="", alias="llmProviderApiVersion")


class AIModelWeight(_EventModel):
    model: str = ""
    endpoint: str = ""
    weight: int = 0


class ModelBasedRoundRobin(_EventModel):
    """Roteamento ponderado entre modelos (nível de API ou operação)."""

    on_quota_exceed_suspend_duration: int = Field(
        default=0, alias="onQuotaExceedSuspendDuration"
    )
    production_models: list[AIModelWeight] = Field(
        default_factory=list, alias="productionModels"
    )
    sandbox_models: list[AIModelWeight] = Field(default_factory=list, alias="sandboxModels")


class HeaderEntry(_EventModel):
    name: str
    value: str = ""


class HeaderModifier(_EventModel):
    add_headers: list[HeaderEntry] = Field(default_factory=list, alias="addHeaders")
    remove_headers: list[str] = Field(default_factory=list, alias="removeHeaders")


class HeaderFilter(_EventModel):
    """Mutação de headers de request e response."""

    type: Literal["headers"] = "headers"
    request_headers: HeaderModifier = Field(default_factory=HeaderModifier, alias="requestHeaders")
    response_headers: HeaderModifier = Field(
        default_factory=HeaderModifier, alias="responseHeaders"
    )


class MirrorFilter(_EventModel):
    type: Literal["mirror"] = "mirror"
    urls: list[str] = Field(default_factory=list)


class RedirectFilter(_EventModel):
    type: Literal["redirect"] = "redirect"
    url: str


OperationFilter = Annotated[
    HeaderFilter | MirrorFilter | RedirectFilter,
    Field(discriminator="type"),
]


class DeclaredOperation(_EventModel):
    """Operação declarada pelo adapter; `path` é uma expressão regular."""

    path: str
    verb: str
    scopes: list[str] = Field(default_factory=list)
    filters: list[OperationFilter] = Field(default_factory=list)
    model_based_round_robin: ModelBasedRoundRobin | None = Field(
        default=None, alias="modelBasedRoundRobin"
    )


class ApiDescriptor(_EventModel):
    """Descrição da API carregada pelo evento."""

    api_uuid: str = Field(default="", alias="apiUUID")
    api_name: str = Field(default="", alias="apiName")
    api_version: str = Field(default="", alias="apiVersion")
    is_default_version: bool = Field(default=False, alias="isDefaultVersion")
    definition: str = ""
    api_type: str = Field(default="REST", alias="apiType")
    api_sub_type: str = Field(default="", alias="apiSubType")
    base_path: str = Field(default="", alias="basePath")
    organization: str = ""
    api_properties: dict[str, str] = Field(default_factory=dict, alias="apiProperties")
    environment: str = ""
    revision_id: str = Field(default="", alias="revisionID")
    prod_endpoint: str = Field(default="", alias="prodEndpoint")
    sand_endpoint: str = Field(default="", alias="sandEndpoint")
    endpoint_protocol: str = Field(default="", alias="endpointProtocol")
    prod_endpoint_security: EndpointSecurity = Field(
        default_factory=EndpointSecurity, alias="prodEndpointSecurity"
    )
    sand_endpoint_security: EndpointSecurity = Field(
        default_factory=EndpointSecurity, alias="sandEndpointSecurity"
    )
    cors_policy: CORSPolicy | None = Field(default=None, alias="cORSPolicy")
    vhost: str = ""
    security_scheme: list[str] = Field(default_factory=list, alias="securityScheme")
    auth_header: str = Field(default="", alias="authHeader")
    api_key_header: str = Field(default="", alias="apiKeyHeader")
    operations: list[DeclaredOperation] = Field(default_factory=list)
    ai_configuration: AIConfiguration = Field(
        default_factory=AIConfiguration, alias="aiConfiguration"
    )
    multi_endpoints: MultiEndpoints = Field(default_factory=MultiEndpoints, alias="multiEndpoints")
    model_based_round_robin: ModelBasedRoundRobin | None = Field(
        default=None, alias="modelBasedRoundRobin"
    )
    prod_ai_rate_limit: AIRateLimit | None = Field(default=None, alias="prodAIRL")
    sand_ai_rate_limit: AIRateLimit | None = Field(default=None, alias="sandAIRL")

    @property
    def is_rest(self) -> bool:
        return self.api_type.upper() == "REST"

    @property
    def is_graphql(self) -> bool:
        return self.api_type.upper() == "GRAPHQL"


class LifecycleEvent(_EventModel):
    """Evento `CREATE`/`UPDATE` ou `DELETE` vindo do adapter.

    Apenas um formato fica ativo por requisição:
    - DELETE exige `apiUUID` e `revisionID`
    - CREATE/UPDATE exige `apiName` e `apiVersion`
    """

    event: str
    api: ApiDescriptor = Field(alias="payload")

    @property
    def is_delete(self) -> bool:
        return self.event.upper() == DELETE_EVENT

    @model_validator(mode="after")
    def _check_event_shape(self) -> LifecycleEvent:
        if self.is_delete:
            if not self.api.api_uuid or not self.api.revision_id:
                raise ValueError("evento DELETE exige apiUUID e revisionID")
        elif not self.api.api_name or not self.api.api_version:
            raise ValueError("evento de criação/atualização exige apiName e apiVersion")
        return self
