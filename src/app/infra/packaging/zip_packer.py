"""Packer zip para arquivos de texto nomeados."""

from __future__ import annotations

import io
import zipfile
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class ZipArchivePacker:
    """Implementa ArchivePackerProtocol com zipfile (deflate, UTF-8)."""

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self._compression = compression

    def pack(self, files: Mapping[str, str]) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, mode="w", compression=self._compression) as archive:
            for path, content in files.items():
                archive.writestr(path, content.encode("utf-8"))
        return buffer.getvalue()
