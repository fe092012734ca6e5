"""Operation Matcher: alinha operações declaradas com o OpenAPI.

Para cada (path, verbo) do OpenAPI, em ordem de documento:
1. normaliza o path trocando cada segmento `{...}` por um token fixo
2. procura a primeira operação declarada (ordem de declaração) com o
   mesmo verbo (case-insensitive) cujo path, como regex, casa com o
   path normalizado

Operações do OpenAPI sem match ficam sem anotação; operações
declaradas sem match são descartadas.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from app.constants.artifacts import PATH_PARAM_PLACEHOLDER
from app.domain.artifacts import ArtifactOperation, Scope
from app.services.policy_builder import build_operation_policies

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from app.domain.endpoints import ResolvedEndpoints
    from app.domain.events import ApiDescriptor, DeclaredOperation

logger = logging.getLogger(__name__)

_PATH_PARAM_PATTERN = re.compile(r"{[^}]+}")


@dataclass(frozen=True, slots=True)
class OperationMatch:
    """Par (path, verbo) do OpenAPI e a operação declarada que casou."""

    path: str
    verb: str
    declared: DeclaredOperation


@dataclass(frozen=True, slots=True)
class MatchedOperations:
    operations: tuple[ArtifactOperation, ...] = ()
    scopes: tuple[Scope, ...] = ()
    matches: tuple[OperationMatch, ...] = ()


def normalize_openapi_path(path: str) -> str:
    """`/pets/{petId}` → `/pets/hardcode`."""
    return _PATH_PARAM_PATTERN.sub(PATH_PARAM_PLACEHOLDER, path)


@lru_cache(maxsize=512)
def _compile(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(pattern)
    except re.error as exc:
        logger.warning(
            "declared_operation_path_invalid",
            extra={"pattern": pattern, "error": str(exc)},
        )
        return None


def find_matching_operation(
    path: str,
    verb: str,
    declared: Iterable[DeclaredOperation],
) -> DeclaredOperation | None:
    """Primeira operação declarada que casa com (path, verbo)."""
    normalized = normalize_openapi_path(path)
    for operation in declared:
        if operation.verb.lower() != verb.lower():
            continue
        compiled = _compile(operation.path)
        if compiled is not None and compiled.search(normalized):
            return operation
    return None


def iter_schema_operations(tree: dict[str, Any]) -> Iterator[tuple[str, str, dict[str, Any]]]:
    """(path, verbo, conteúdo) de `paths` em ordem de documento."""
    paths = tree.get("paths")
    if not isinstance(paths, dict):
        return
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        for verb, content in path_item.items():
            if isinstance(content, dict):
                yield str(path), str(verb), content


def _collect_scopes(scopes: dict[str, Scope], names: Iterable[str]) -> None:
    for name in names:
        scopes.setdefault(name, Scope.named(name))


def _graphql_operations(api: ApiDescriptor) -> MatchedOperations:
    operations = tuple(
        ArtifactOperation(target=operation.path, verb=operation.verb.upper())
        for operation in api.operations
    )
    return MatchedOperations(operations=operations)


def match_operations(
    api: ApiDescriptor,
    tree: dict[str, Any] | None,
    endpoints: ResolvedEndpoints,
) -> MatchedOperations:
    """Monta operações, escopos e políticas do api.yaml.

    GraphQL usa as operações declaradas diretamente. REST exige a
    árvore do OpenAPI; sem ela (falha de parse) o resultado é vazio.
    """
    if api.is_graphql:
        return _graphql_operations(api)
    if not api.is_rest or tree is None:
        return MatchedOperations()

    operations: list[ArtifactOperation] = []
    matches: list[OperationMatch] = []
    scopes: dict[str, Scope] = {}
    matched_declared: set[int] = set()

    for path, verb, _content in iter_schema_operations(tree):
        declared = find_matching_operation(path, verb, api.operations)
        if declared is None:
            continue
        matched_declared.add(id(declared))
        matches.append(OperationMatch(path=path, verb=verb, declared=declared))
        _collect_scopes(scopes, declared.scopes)
        operations.append(
            ArtifactOperation(
                target=path,
                verb=verb.upper(),
                scopes=tuple(declared.scopes),
                policies=build_operation_policies(
                    declared.filters,
                    declared.model_based_round_robin,
                    endpoints,
                ),
            )
        )

    unmatched = [op for op in api.operations if id(op) not in matched_declared]
    if unmatched:
        logger.debug(
            "declared_operations_unmatched",
            extra={
                "api_name": api.api_name,
                "unmatched": [f"{op.verb.upper()} {op.path}" for op in unmatched],
            },
        )

    return MatchedOperations(
        operations=tuple(operations),
        scopes=tuple(scopes.values()),
        matches=tuple(matches),
    )
