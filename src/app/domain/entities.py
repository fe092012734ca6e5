"""Entidades do control plane espelhadas em memória.

Snapshots completos chegam do control plane (pull) ou do adapter (push)
e substituem o espelho inteiro. `tenanDomain` vazio é preenchido com o
tenant do control plane durante o marshaling (ver memory_entity_store).
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class _Entity(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    # O control plane publica `tenanId`/`tenanDomain`; aceitamos ambas as grafias
    # e emitimos a do control plane
    tenant_id: int = Field(
        default=0,
        validation_alias=AliasChoices("tenantId", "tenanId", "tenant_id"),
        serialization_alias="tenanId",
    )
    tenant_domain: str = Field(
        default="",
        validation_alias=AliasChoices("tenantDomain", "tenanDomain", "tenant_domain"),
        serialization_alias="tenanDomain",
    )
    time_stamp: int = Field(default=0, alias="timeStamp")


class Application(_Entity):
    uuid: str
    id: int = Field(default=0, validation_alias=AliasChoices("id", "applicationId"))
    name: str = Field(default="", validation_alias=AliasChoices("name", "applicationName"))
    sub_name: str = Field(
        default="",
        validation_alias=AliasChoices("subName", "subscriber", "sub_name"),
        serialization_alias="subName",
    )
    policy: str = Field(default="", validation_alias=AliasChoices("policy", "applicationPolicy"))
    token_type: str = Field(default="", alias="tokenType")
    attributes: dict[str, str] = Field(default_factory=dict)


class Subscription(_Entity):
    subscription_id: int = Field(alias="subscriptionId")
    subscription_uuid: str = Field(default="", alias="subscriptionUUID")
    policy_id: str = Field(default="", alias="policyId")
    api_id: int = Field(default=0, alias="apiId")
    api_uuid: str = Field(default="", alias="apiUUID")
    app_id: int = Field(
        default=0,
        validation_alias=AliasChoices("appId", "applicationId", "app_id"),
        serialization_alias="appId",
    )
    application_uuid: str = Field(default="", alias="applicationUUID")
    subscription_state: str = Field(default="", alias="subscriptionState")


class ApplicationKeyMapping(_Entity):
    application_id: int = Field(default=0, alias="applicationId")
    application_uuid: str = Field(default="", alias="applicationUUID")
    consumer_key: str = Field(alias="consumerKey")
    key_type: str = Field(default="", alias="keyType")
    key_manager: str = Field(default="", alias="keyManager")

    @property
    def reference(self) -> str:
        """Chave natural do mapeamento: `consumerKey:keyManager`."""
        return f"{self.consumer_key}:{self.key_manager}"


class KeyManager(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str
    enabled: bool = False
    issuer: str = ""
    certificate: str = ""
