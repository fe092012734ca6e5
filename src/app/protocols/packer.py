"""Contrato de empacotamento de arquivos de texto nomeados."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping


class ArchivePackerProtocol(Protocol):
    def pack(self, files: Mapping[str, str]) -> bytes:
        """Empacota `{caminho: conteúdo}` em um stream de bytes."""
        ...
