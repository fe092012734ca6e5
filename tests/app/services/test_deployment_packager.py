"""Testes do Deployment Packager."""

from __future__ import annotations

import io
import zipfile
from unittest.mock import MagicMock

import pytest
import yaml

from app.services.artifact_synthesizer import synthesize
from app.services.deployment_packager import archive_name, package, render_files
from utils.errors import ArtifactSerializationError


class TestPackage:
    def test_single_endpoint_archive_layout(self, event_factory, control_plane_settings) -> None:
        artifact = package(synthesize(event_factory(), control_plane_settings))

        assert artifact.archive_name == "admin-pets-1.0.zip"
        with zipfile.ZipFile(io.BytesIO(artifact.content)) as archive:
            assert sorted(archive.namelist()) == [
                "pets-1.0/Definitions/swagger.yaml",
                "pets-1.0/api.yaml",
                "pets-1.0/deployment_environments.yaml",
            ]
            api_yaml = yaml.safe_load(archive.read("pets-1.0/api.yaml"))
        assert api_yaml["data"]["name"] == "pets"

    def test_multi_endpoint_archive_includes_endpoints(
        self, event_factory, control_plane_settings
    ) -> None:
        event = event_factory(
            multiEndpoints={"protocol": "https", "prodEndpoints": [{"url": "a"}, {"url": "b"}]}
        )
        files = render_files(synthesize(event, control_plane_settings))
        assert "pets-1.0/endpoints.yaml" in files
        assert yaml.safe_load(files["pets-1.0/endpoints.yaml"])["type"] == "endpoints"

    def test_graphql_schema_file(self, event_factory, control_plane_settings) -> None:
        event = event_factory(apiType="GraphQL", definition="type Query { a: Int }")
        files = render_files(synthesize(event, control_plane_settings))
        assert files["pets-1.0/Definitions/schema.graphql"] == "type Query { a: Int }"

    def test_archive_name_uses_provider(self, event_factory, control_plane_settings) -> None:
        bundle = synthesize(event_factory(apiName="orders", apiVersion="2.1"),
                            control_plane_settings)
        assert archive_name(bundle) == "admin-orders-2.1.zip"

    def test_packing_failure_raises_serialization_error(
        self, event_factory, control_plane_settings
    ) -> None:
        packer = MagicMock()
        packer.pack.side_effect = OSError("disk full")
        with pytest.raises(ArtifactSerializationError, match="disk full"):
            package(synthesize(event_factory(), control_plane_settings), packer)
