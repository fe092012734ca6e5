"""Políticas de operação e seus parâmetros.

Os parâmetros formam uma união fechada (header, mirror, redirect,
roteamento ponderado). `render_parameters` é o único ponto de
serialização e cobre todas as variantes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, assert_never


@dataclass(frozen=True, slots=True)
class HeaderParameters:
    header_name: str
    header_value: str | None = None


@dataclass(frozen=True, slots=True)
class MirrorParameters:
    url: str


@dataclass(frozen=True, slots=True)
class RedirectParameters:
    url: str


@dataclass(frozen=True, slots=True)
class ModelWeightConfig:
    model: str
    endpoint_id: str
    weight: int

    def as_dict(self) -> dict[str, Any]:
        return {"model": self.model, "endpointId": self.endpoint_id, "weight": self.weight}


@dataclass(frozen=True, slots=True)
class WeightedRoutingParameters:
    production: tuple[ModelWeightConfig, ...] = ()
    sandbox: tuple[ModelWeightConfig, ...] = ()
    suspend_duration: str = "0"

    def to_json(self) -> str:
        """JSON compacto da configuração, com aspas simples.

        O gateway espera a configuração como string, não como mapa aninhado.
        """
        payload = {
            "production": [model.as_dict() for model in self.production],
            "sandbox": [model.as_dict() for model in self.sandbox],
            "suspendDuration": self.suspend_duration,
        }
        return json.dumps(payload, separators=(",", ":")).replace('"', "'")


PolicyParameters = HeaderParameters | MirrorParameters | RedirectParameters | WeightedRoutingParameters


def render_parameters(parameters: PolicyParameters) -> dict[str, str]:
    """Serializa parâmetros como mapa plano de strings."""
    match parameters:
        case HeaderParameters(header_name=name, header_value=None):
            return {"headerName": name}
        case HeaderParameters(header_name=name, header_value=value):
            return {"headerName": name, "headerValue": value}
        case MirrorParameters(url=url) | RedirectParameters(url=url):
            return {"url": url}
        case WeightedRoutingParameters():
            return {"weightedRoundRobinConfigs": parameters.to_json()}
        case _:
            assert_never(parameters)


@dataclass(frozen=True, slots=True)
class OperationPolicy:
    name: str
    version: str
    parameters: PolicyParameters
    policy_type: str = ""

    def as_dict(self) -> dict[str, Any]:
        policy: dict[str, Any] = {
            "policyName": self.name,
            "policyVersion": self.version,
        }
        if self.policy_type:
            policy["policyType"] = self.policy_type
        policy["parameters"] = render_parameters(self.parameters)
        return policy


@dataclass(frozen=True, slots=True)
class OperationPolicies:
    """Políticas por direção; request e response acumulam separadamente."""

    request: tuple[OperationPolicy, ...] = field(default_factory=tuple)
    response: tuple[OperationPolicy, ...] = field(default_factory=tuple)

    def as_dict(self) -> dict[str, Any]:
        return {
            "request": [policy.as_dict() for policy in self.request],
            "response": [policy.as_dict() for policy in self.response],
            "fault": [],
        }
