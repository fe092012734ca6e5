"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ArtifactError,
    ArtifactSerializationError,
    ImportBackendError,
    InfrastructureError,
    SnapshotSourceError,
)

__all__ = [
    "ArtifactError",
    "ArtifactSerializationError",
    "ImportBackendError",
    "InfrastructureError",
    "SnapshotSourceError",
]
