"""Exceções compartilhadas do agente de artefatos."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class ImportBackendError(InfrastructureError):
    """Falha ao importar ou remover revisão no API Manager.

    Sempre reportada ao adapter como erro retentável (503).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SnapshotSourceError(InfrastructureError):
    """Falha ao obter snapshot de entidades do control plane."""


class ArtifactError(ValueError):
    """Base para falhas na montagem do bundle de artefatos."""


class ArtifactSerializationError(ArtifactError):
    """Documento do bundle não pôde ser serializado ou empacotado."""
