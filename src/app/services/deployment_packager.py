"""Deployment Packager: serializa o bundle e empacota em zip.

Layout do arquivo:
    <name>-<version>/api.yaml
    <name>-<version>/endpoints.yaml              (só multi-endpoint)
    <name>-<version>/deployment_environments.yaml
    <name>-<version>/Definitions/swagger.yaml | schema.graphql

Falha de serialização aborta o pipeline: nada é importado com
conteúdo parcial.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import yaml

from app.infra.packaging import ZipArchivePacker
from utils.errors import ArtifactSerializationError

if TYPE_CHECKING:
    from app.domain.artifacts import ArtifactBundle
    from app.protocols import ArchivePackerProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PackagedArtifact:
    archive_name: str
    content: bytes


def archive_root(bundle: ArtifactBundle) -> str:
    return f"{bundle.api_name}-{bundle.api_version}"


def archive_name(bundle: ArtifactBundle) -> str:
    return f"{bundle.provider}-{bundle.api_name}-{bundle.api_version}.zip"


def _dump(document: dict[str, Any], file_name: str) -> str:
    try:
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    except yaml.YAMLError as exc:
        raise ArtifactSerializationError(f"falha ao serializar {file_name}: {exc}") from exc


def render_files(bundle: ArtifactBundle) -> dict[str, str]:
    """Mapa `{caminho no zip: conteúdo}` do bundle."""
    root = archive_root(bundle)
    files = {f"{root}/api.yaml": _dump(bundle.api_definition.to_document(), "api.yaml")}
    if bundle.endpoints is not None:
        files[f"{root}/endpoints.yaml"] = _dump(bundle.endpoints.to_document(), "endpoints.yaml")
    files[f"{root}/deployment_environments.yaml"] = _dump(
        bundle.deployment_environments.to_document(),
        "deployment_environments.yaml",
    )
    files[f"{root}/Definitions/{bundle.definition_file_name}"] = bundle.definition
    return files


def package(
    bundle: ArtifactBundle,
    packer: ArchivePackerProtocol | None = None,
) -> PackagedArtifact:
    """Serializa e empacota o bundle.

    Raises:
        ArtifactSerializationError: documento ou arquivo não pôde ser gerado
    """
    files = render_files(bundle)
    try:
        content = (packer or ZipArchivePacker()).pack(files)
    except (OSError, ValueError) as exc:
        raise ArtifactSerializationError(f"falha ao empacotar artefato: {exc}") from exc

    name = archive_name(bundle)
    logger.debug(
        "artifact_packaged",
        extra={"archive_name": name, "files": sorted(files), "size_bytes": len(content)},
    )
    return PackagedArtifact(archive_name=name, content=content)
