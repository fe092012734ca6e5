"""Espelho em memória das entidades do control plane.

Cada replace monta um mapa novo fora do lock e troca a referência
dentro dele. Leitores recebem views somente-leitura do mapa corrente
e nunca observam um mapa parcialmente montado.

Sem persistência: o espelho é reconstruído a partir de snapshots.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeVar

from app.domain.entities import Application, ApplicationKeyMapping, KeyManager, Subscription
from app.protocols.entity_store import EntityStoreProtocol
from config.settings import DEFAULT_TENANT_DOMAIN

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Iterable, Mapping

logger = logging.getLogger(__name__)

_EntityT = TypeVar("_EntityT", Application, Subscription, ApplicationKeyMapping)
_ItemT = TypeVar("_ItemT")


def marshal_entity(entity: _EntityT, tenant_domain: str) -> _EntityT:
    """Preenche tenant_domain vazio com o tenant do control plane."""
    if entity.tenant_domain:
        return entity
    return entity.model_copy(update={"tenant_domain": tenant_domain})


class MemoryEntityStore(EntityStoreProtocol):
    """Store do espelho de entidades, injetado via app.state."""

    def __init__(self, tenant_domain: str = DEFAULT_TENANT_DOMAIN) -> None:
        self._tenant_domain = tenant_domain
        self._lock = threading.Lock()
        self._applications: Mapping[str, Application] = MappingProxyType({})
        self._subscriptions: Mapping[int, Subscription] = MappingProxyType({})
        self._key_mappings: Mapping[str, ApplicationKeyMapping] = MappingProxyType({})
        self._key_managers: Mapping[str, KeyManager] = MappingProxyType({})

    @staticmethod
    def _index(
        items: Iterable[_ItemT],
        key: Callable[[_ItemT], Hashable],
    ) -> Mapping[Hashable, _ItemT]:
        # Em chave duplicada, a última ocorrência do snapshot vence
        return MappingProxyType({key(item): item for item in items})

    def replace_applications(self, applications: Iterable[Application]) -> int:
        snapshot = self._index(
            (marshal_entity(app, self._tenant_domain) for app in applications),
            lambda app: app.uuid,
        )
        with self._lock:
            self._applications = snapshot
        logger.info("applications_replaced", extra={"count": len(snapshot)})
        return len(snapshot)

    def replace_subscriptions(self, subscriptions: Iterable[Subscription]) -> int:
        snapshot = self._index(
            (marshal_entity(sub, self._tenant_domain) for sub in subscriptions),
            lambda sub: sub.subscription_id,
        )
        with self._lock:
            self._subscriptions = snapshot
        logger.info("subscriptions_replaced", extra={"count": len(snapshot)})
        return len(snapshot)

    def replace_key_mappings(self, key_mappings: Iterable[ApplicationKeyMapping]) -> int:
        snapshot = self._index(
            (marshal_entity(mapping, self._tenant_domain) for mapping in key_mappings),
            lambda mapping: mapping.reference,
        )
        with self._lock:
            self._key_mappings = snapshot
        logger.info("key_mappings_replaced", extra={"count": len(snapshot)})
        return len(snapshot)

    def replace_key_managers(self, key_managers: Iterable[KeyManager]) -> int:
        snapshot = self._index(key_managers, lambda manager: manager.name)
        with self._lock:
            self._key_managers = snapshot
        logger.info("key_managers_replaced", extra={"count": len(snapshot)})
        return len(snapshot)

    def get_application(self, uuid: str) -> Application | None:
        with self._lock:
            applications = self._applications
        return applications.get(uuid)

    def get_subscription(self, subscription_id: int) -> Subscription | None:
        with self._lock:
            subscriptions = self._subscriptions
        return subscriptions.get(subscription_id)

    def get_key_mapping(self, reference: str) -> ApplicationKeyMapping | None:
        with self._lock:
            key_mappings = self._key_mappings
        return key_mappings.get(reference)

    def get_key_manager(self, name: str) -> KeyManager | None:
        with self._lock:
            key_managers = self._key_managers
        return key_managers.get(name)

    def list_applications(self) -> list[Application]:
        with self._lock:
            applications = self._applications
        return list(applications.values())

    def list_subscriptions(self) -> list[Subscription]:
        with self._lock:
            subscriptions = self._subscriptions
        return list(subscriptions.values())

    def list_key_mappings(self) -> list[ApplicationKeyMapping]:
        with self._lock:
            key_mappings = self._key_mappings
        return list(key_mappings.values())

    def list_key_managers(self) -> list[KeyManager]:
        with self._lock:
            key_managers = self._key_managers
        return list(key_managers.values())

    def counts(self) -> dict[str, int]:
        """Tamanho de cada mapa (readiness/diagnóstico)."""
        with self._lock:
            return {
                "applications": len(self._applications),
                "subscriptions": len(self._subscriptions),
                "application_key_mappings": len(self._key_mappings),
                "key_managers": len(self._key_managers),
            }
