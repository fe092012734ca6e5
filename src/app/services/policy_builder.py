"""Policy Builder: filtros declarativos para políticas de operação.

Mapeamento puro:
- headers (add)    → addHeader por header (nome + valor)
- headers (remove) → removeHeader por nome (sem valor)
- mirror           → mirrorRequest por URL
- redirect         → redirectRequest com a URL
- roteamento de modelos → modelWeightedRoundRobin com pesos ligados
  aos ids dos endpoints resolvidos
"""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from app.constants.artifacts import POLICY_TYPE_COMMON, POLICY_VERSION_V1, PolicyName
from app.domain.events import HeaderFilter, MirrorFilter, RedirectFilter
from app.domain.policies import (
    HeaderParameters,
    MirrorParameters,
    ModelWeightConfig,
    OperationPolicies,
    OperationPolicy,
    RedirectParameters,
    WeightedRoutingParameters,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.domain.endpoints import ResolvedEndpoints
    from app.domain.events import AIModelWeight, ModelBasedRoundRobin, OperationFilter
    from app.domain.policies import PolicyParameters


def _policy(
    name: PolicyName,
    parameters: PolicyParameters,
    policy_type: str = "",
) -> OperationPolicy:
    return OperationPolicy(
        name=name.value,
        version=POLICY_VERSION_V1,
        parameters=parameters,
        policy_type=policy_type,
    )


def bind_model_weights(
    weights: Iterable[AIModelWeight],
    endpoints: ResolvedEndpoints,
) -> tuple[ModelWeightConfig, ...]:
    """Liga cada peso ao id do descriptor com a mesma URL ("" sem match)."""
    return tuple(
        ModelWeightConfig(
            model=weight.model,
            endpoint_id=endpoints.endpoint_id_for_url(weight.endpoint),
            weight=weight.weight,
        )
        for weight in weights
    )


def build_model_routing_policy(
    routing: ModelBasedRoundRobin,
    endpoints: ResolvedEndpoints,
    *,
    api_level: bool = False,
) -> OperationPolicy:
    """Política modelWeightedRoundRobin (tipo `common` no nível de API)."""
    parameters = WeightedRoutingParameters(
        production=bind_model_weights(routing.production_models, endpoints),
        sandbox=bind_model_weights(routing.sandbox_models, endpoints),
        suspend_duration=str(routing.on_quota_exceed_suspend_duration),
    )
    return _policy(
        PolicyName.MODEL_WEIGHTED_ROUND_ROBIN,
        parameters,
        POLICY_TYPE_COMMON if api_level else "",
    )


def _header_policies(
    header_filter: HeaderFilter,
) -> tuple[list[OperationPolicy], list[OperationPolicy]]:
    request: list[OperationPolicy] = []
    response: list[OperationPolicy] = []
    for target, modifier in (
        (request, header_filter.request_headers),
        (response, header_filter.response_headers),
    ):
        target.extend(
            _policy(PolicyName.ADD_HEADER, HeaderParameters(entry.name, entry.value))
            for entry in modifier.add_headers
        )
        target.extend(
            _policy(PolicyName.REMOVE_HEADER, HeaderParameters(name))
            for name in modifier.remove_headers
        )
    return request, response


def build_operation_policies(
    filters: Iterable[OperationFilter],
    routing: ModelBasedRoundRobin | None,
    endpoints: ResolvedEndpoints,
) -> OperationPolicies:
    """Políticas de uma operação, na ordem de declaração dos filtros.

    O roteamento de modelos da operação, quando presente, vem primeiro.
    """
    request: list[OperationPolicy] = []
    response: list[OperationPolicy] = []

    if routing is not None:
        request.append(build_model_routing_policy(routing, endpoints))

    for operation_filter in filters:
        match operation_filter:
            case HeaderFilter():
                request_headers, response_headers = _header_policies(operation_filter)
                request.extend(request_headers)
                response.extend(response_headers)
            case MirrorFilter(urls=urls):
                request.extend(
                    _policy(PolicyName.MIRROR_REQUEST, MirrorParameters(url)) for url in urls
                )
            case RedirectFilter(url=url):
                request.append(_policy(PolicyName.REDIRECT_REQUEST, RedirectParameters(url)))
            case _:
                assert_never(operation_filter)

    return OperationPolicies(request=tuple(request), response=tuple(response))
