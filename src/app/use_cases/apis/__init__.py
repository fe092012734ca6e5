"""Use cases de ciclo de vida de API."""

from .deploy_api import DeployApiUseCase
from .undeploy_api import UndeployApiRevisionUseCase, build_undeploy_payload

__all__ = [
    "DeployApiUseCase",
    "UndeployApiRevisionUseCase",
    "build_undeploy_payload",
]
