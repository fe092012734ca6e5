"""Stores: implementações concretas de estado em memória.

Módulos disponíveis:
    - memory_entity_store: espelho de entidades do control plane
"""

from __future__ import annotations

from app.infra.stores.memory_entity_store import MemoryEntityStore, marshal_entity

__all__ = [
    "MemoryEntityStore",
    "marshal_entity",
]
