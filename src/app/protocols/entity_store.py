"""Contrato do espelho de entidades do control plane.

Substituição sempre integral (snapshot), nunca merge ou update parcial.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.domain.entities import (
        Application,
        ApplicationKeyMapping,
        KeyManager,
        Subscription,
    )


class EntityStoreProtocol(ABC):
    """Espelho em memória de aplicações, assinaturas, key mappings e key managers."""

    @abstractmethod
    def replace_applications(self, applications: Iterable[Application]) -> int:
        """Substitui todas as aplicações; retorna quantas ficaram no espelho."""

    @abstractmethod
    def replace_subscriptions(self, subscriptions: Iterable[Subscription]) -> int:
        """Substitui todas as assinaturas."""

    @abstractmethod
    def replace_key_mappings(self, key_mappings: Iterable[ApplicationKeyMapping]) -> int:
        """Substitui todos os key mappings."""

    @abstractmethod
    def replace_key_managers(self, key_managers: Iterable[KeyManager]) -> int:
        """Substitui todos os key managers."""

    @abstractmethod
    def get_application(self, uuid: str) -> Application | None:
        """Aplicação por UUID ou None."""

    @abstractmethod
    def get_subscription(self, subscription_id: int) -> Subscription | None:
        """Assinatura por id ou None."""

    @abstractmethod
    def get_key_mapping(self, reference: str) -> ApplicationKeyMapping | None:
        """Key mapping por `consumerKey:keyManager` ou None."""

    @abstractmethod
    def get_key_manager(self, name: str) -> KeyManager | None:
        """Key manager por nome ou None."""

    @abstractmethod
    def list_applications(self) -> list[Application]: ...

    @abstractmethod
    def list_subscriptions(self) -> list[Subscription]: ...

    @abstractmethod
    def list_key_mappings(self) -> list[ApplicationKeyMapping]: ...

    @abstractmethod
    def list_key_managers(self) -> list[KeyManager]: ...

    @abstractmethod
    def counts(self) -> dict[str, int]:
        """Quantidade de entidades por tipo."""
