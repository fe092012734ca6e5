"""Configuração do pytest para o agente de artefatos."""

import sys
from pathlib import Path
from typing import Any

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from app.domain.events import ApiDescriptor, LifecycleEvent  # noqa: E402
from config.settings import ControlPlaneSettings  # noqa: E402

PETSTORE_OPENAPI = """openapi: 3.0.1
info:
  title: Pets
  version: "1.0"
paths:
  /pets:
    get:
      responses:
        "200":
          description: OK
    post:
      responses:
        "201":
          description: Created
  /pets/{petId}:
    get:
      responses:
        "200":
          description: OK
    delete:
      responses:
        "204":
          description: Deleted
"""


def _make_api(**overrides: Any) -> ApiDescriptor:
    payload: dict[str, Any] = {
        "apiUUID": "api-uuid-1",
        "apiName": "pets",
        "apiVersion": "1.0",
        "apiType": "REST",
        "basePath": "/pets/1.0",
        "organization": "default",
        "definition": PETSTORE_OPENAPI,
        "endpointProtocol": "https",
        "prodEndpoint": "pets.backend:443",
        "vhost": "gw.example.com",
    }
    payload.update(overrides)
    return ApiDescriptor.model_validate(payload)


@pytest.fixture
def api_factory():
    """Fábrica de ApiDescriptor (campos camelCase sobrescrevem o petstore)."""
    return _make_api


@pytest.fixture
def event_factory():
    """Fábrica de LifecycleEvent de criação."""

    def _make_event(event: str = "CREATE", **overrides: Any) -> LifecycleEvent:
        return LifecycleEvent(event=event, api=_make_api(**overrides))

    return _make_event


@pytest.fixture
def control_plane_settings() -> ControlPlaneSettings:
    return ControlPlaneSettings(
        service_url="https://apim.example.com:9443",
        username="admin",
        password="admin",
        environment_labels=("Default", "Gateway2"),
    )
