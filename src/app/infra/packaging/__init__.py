"""Empacotamento de bundles em arquivo zip."""

from __future__ import annotations

from app.infra.packaging.zip_packer import ZipArchivePacker

__all__ = ["ZipArchivePacker"]
