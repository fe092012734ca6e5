"""Use cases do espelho de entidades do control plane."""

from .snapshots import EntityKind, parse_snapshot, replace_snapshot, serialize_snapshot
from .sync_snapshots import SyncEntitySnapshotsUseCase

__all__ = [
    "EntityKind",
    "SyncEntitySnapshotsUseCase",
    "parse_snapshot",
    "replace_snapshot",
    "serialize_snapshot",
]
