"""Testes do DeployApiUseCase."""

from __future__ import annotations

import io
import zipfile
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.protocols import ImportResult
from app.use_cases.apis import DeployApiUseCase
from utils.errors import ArtifactSerializationError, ImportBackendError


@pytest.mark.asyncio
async def test_deploy_imports_packaged_archive(event_factory, control_plane_settings) -> None:
    import_client = MagicMock()
    import_client.import_api = AsyncMock(return_value=ImportResult("api-1", "rev-1"))
    use_case = DeployApiUseCase(import_client, control_plane_settings)

    result = await use_case.execute(event_factory())

    assert result == ImportResult("api-1", "rev-1")
    archive_name, content = import_client.import_api.await_args.args
    assert archive_name == "admin-pets-1.0.zip"
    with zipfile.ZipFile(io.BytesIO(content)) as archive:
        assert "pets-1.0/api.yaml" in archive.namelist()


@pytest.mark.asyncio
async def test_deploy_propagates_backend_error(event_factory, control_plane_settings) -> None:
    import_client = MagicMock()
    import_client.import_api = AsyncMock(side_effect=ImportBackendError("boom", 500))
    use_case = DeployApiUseCase(import_client, control_plane_settings)

    with pytest.raises(ImportBackendError):
        await use_case.execute(event_factory())


@pytest.mark.asyncio
async def test_serialization_failure_skips_import(event_factory, control_plane_settings) -> None:
    import_client = MagicMock()
    import_client.import_api = AsyncMock()
    packer = MagicMock()
    packer.pack.side_effect = ValueError("bad entry")
    use_case = DeployApiUseCase(import_client, control_plane_settings, packer=packer)

    with pytest.raises(ArtifactSerializationError):
        await use_case.execute(event_factory())
    import_client.import_api.assert_not_awaited()
