"""Protocolos e contratos do core da aplicação."""

from .entity_store import EntityStoreProtocol
from .import_client import ImportClientProtocol, ImportResult
from .packer import ArchivePackerProtocol
from .snapshot_source import SnapshotSourceProtocol

__all__ = [
    "ArchivePackerProtocol",
    "EntityStoreProtocol",
    "ImportClientProtocol",
    "ImportResult",
    "SnapshotSourceProtocol",
]
