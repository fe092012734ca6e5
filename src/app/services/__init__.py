"""Serviços de síntese de artefatos.

Funções puras (sem IO de rede) que transformam eventos de ciclo de vida
em bundles empacotados. Clientes HTTP ficam em api/connectors/.
"""

from app.services.artifact_synthesizer import strip_version_suffix, synthesize
from app.services.deployment_packager import PackagedArtifact, package
from app.services.endpoint_resolver import resolve_endpoints
from app.services.operation_matcher import (
    MatchedOperations,
    OperationMatch,
    find_matching_operation,
    match_operations,
    normalize_openapi_path,
)
from app.services.policy_builder import build_model_routing_policy, build_operation_policies

__all__ = [
    "MatchedOperations",
    "OperationMatch",
    "PackagedArtifact",
    "build_model_routing_policy",
    "build_operation_policies",
    "find_matching_operation",
    "match_operations",
    "normalize_openapi_path",
    "package",
    "resolve_endpoints",
    "strip_version_suffix",
    "synthesize",
]
