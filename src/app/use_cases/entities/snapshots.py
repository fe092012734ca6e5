"""Conversão entre snapshots JSON e o espelho de entidades.

Compartilhado pelo push (PUT do adapter) e pelo pull (startup).
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter

from app.domain.entities import Application, ApplicationKeyMapping, KeyManager, Subscription

if TYPE_CHECKING:
    from app.protocols import EntityStoreProtocol


class EntityKind(StrEnum):
    """Tipo de entidade; o valor é o segmento de rota."""

    APPLICATIONS = "applications"
    SUBSCRIPTIONS = "subscriptions"
    KEY_MAPPINGS = "applicationmappings"
    KEY_MANAGERS = "keymanagers"


_ADAPTERS: dict[EntityKind, TypeAdapter[Any]] = {
    EntityKind.APPLICATIONS: TypeAdapter(list[Application]),
    EntityKind.SUBSCRIPTIONS: TypeAdapter(list[Subscription]),
    EntityKind.KEY_MAPPINGS: TypeAdapter(list[ApplicationKeyMapping]),
    EntityKind.KEY_MANAGERS: TypeAdapter(list[KeyManager]),
}


def parse_snapshot(kind: EntityKind, items: Any) -> list[Any]:
    """Valida a lista crua.

    Raises:
        pydantic.ValidationError: item fora do formato esperado
    """
    return _ADAPTERS[kind].validate_python(items)


def replace_snapshot(store: EntityStoreProtocol, kind: EntityKind, items: Any) -> int:
    """Valida e substitui o mapa inteiro do tipo; retorna a contagem final."""
    entities = parse_snapshot(kind, items)
    match kind:
        case EntityKind.APPLICATIONS:
            return store.replace_applications(entities)
        case EntityKind.SUBSCRIPTIONS:
            return store.replace_subscriptions(entities)
        case EntityKind.KEY_MAPPINGS:
            return store.replace_key_mappings(entities)
        case EntityKind.KEY_MANAGERS:
            return store.replace_key_managers(entities)


def serialize_snapshot(store: EntityStoreProtocol, kind: EntityKind) -> list[dict[str, Any]]:
    """Lista corrente do tipo, com nomes de campo do JSON."""
    match kind:
        case EntityKind.APPLICATIONS:
            entities: list[Any] = store.list_applications()
        case EntityKind.SUBSCRIPTIONS:
            entities = store.list_subscriptions()
        case EntityKind.KEY_MAPPINGS:
            entities = store.list_key_mappings()
        case EntityKind.KEY_MANAGERS:
            entities = store.list_key_managers()
    return [entity.model_dump(by_alias=True) for entity in entities]
