"""Leitura e reescrita do OpenAPI embarcado no artefato."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import yaml

from app.constants.artifacts import (
    AUTH_TYPE_APPLICATION_AND_USER,
    DEFAULT_OPENAPI_YAML,
    OPENAPI_AUTHORIZATION_URL,
    OPENAPI_SECURITY_SCHEME,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.domain.artifacts import Scope
    from app.services.operation_matcher import OperationMatch

logger = logging.getLogger(__name__)


def load_openapi(definition: str) -> dict[str, Any] | None:
    """Converte a definição em árvore.

    Definição vazia usa o OpenAPI padrão. JSON é aceito e tratado como
    YAML a partir daqui. Retorna None quando o texto não é um documento
    válido.
    """
    text = definition.strip() or DEFAULT_OPENAPI_YAML
    try:
        tree = json.loads(text) if text.startswith("{") else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        logger.error("openapi_parse_failed", extra={"error": str(exc)})
        return None
    if not isinstance(tree, dict):
        logger.error("openapi_parse_failed", extra={"error": "documento não é um mapa"})
        return None
    return tree


def apply_operation_security(
    tree: dict[str, Any],
    matches: Iterable[OperationMatch],
    scopes: Iterable[Scope],
) -> dict[str, Any]:
    """Anota operações casadas e registra o security scheme OAuth2.

    Altera `tree` no lugar e também o retorna.
    """
    paths = tree.get("paths") or {}
    for match in matches:
        content = paths.get(match.path, {}).get(match.verb)
        if not isinstance(content, dict):
            continue
        if match.declared.scopes:
            content["security"] = [{OPENAPI_SECURITY_SCHEME: list(match.declared.scopes)}]
        content["x-auth-type"] = AUTH_TYPE_APPLICATION_AND_USER

    scope_map = {scope.name: "" for scope in scopes}
    components = tree.get("components")
    if not isinstance(components, dict):
        components = {}
        tree["components"] = components
    security_schemes = components.get("securitySchemes")
    if not isinstance(security_schemes, dict):
        security_schemes = {}
        components["securitySchemes"] = security_schemes
    security_schemes[OPENAPI_SECURITY_SCHEME] = {
        "type": "oauth2",
        "flows": {
            "implicit": {
                "authorizationUrl": OPENAPI_AUTHORIZATION_URL,
                "scopes": dict(scope_map),
                "x-scopes-bindings": dict(scope_map),
            }
        },
    }
    return tree


def dump_openapi(tree: dict[str, Any]) -> str:
    return yaml.safe_dump(tree, sort_keys=False, allow_unicode=True)
