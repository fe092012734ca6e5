"""Testes do Policy Builder."""

from __future__ import annotations

from pydantic import TypeAdapter

from app.domain.events import ModelBasedRoundRobin, OperationFilter
from app.services.endpoint_resolver import resolve_endpoints
from app.services.policy_builder import build_model_routing_policy, build_operation_policies

_FILTERS = TypeAdapter(list[OperationFilter])


def _filters(raw: list[dict]) -> list:
    return _FILTERS.validate_python(raw)


class TestBuildOperationPolicies:
    def test_header_filter_maps_add_and_remove(self, api_factory) -> None:
        filters = _filters(
            [
                {
                    "type": "headers",
                    "requestHeaders": {
                        "addHeaders": [{"name": "X-Env", "value": "prod"}],
                        "removeHeaders": ["X-Debug"],
                    },
                    "responseHeaders": {"removeHeaders": ["Server"]},
                }
            ]
        )
        policies = build_operation_policies(filters, None, resolve_endpoints(api_factory()))
        rendered = policies.as_dict()

        assert rendered["request"] == [
            {
                "policyName": "addHeader",
                "policyVersion": "v1",
                "parameters": {"headerName": "X-Env", "headerValue": "prod"},
            },
            {
                "policyName": "removeHeader",
                "policyVersion": "v1",
                "parameters": {"headerName": "X-Debug"},
            },
        ]
        assert rendered["response"] == [
            {
                "policyName": "removeHeader",
                "policyVersion": "v1",
                "parameters": {"headerName": "Server"},
            }
        ]
        assert rendered["fault"] == []

    def test_mirror_and_redirect_keep_declaration_order(self, api_factory) -> None:
        filters = _filters(
            [
                {"type": "redirect", "url": "https://new"},
                {"type": "mirror", "urls": ["https://m1", "https://m2"]},
            ]
        )
        policies = build_operation_policies(filters, None, resolve_endpoints(api_factory()))

        assert [p.name for p in policies.request] == [
            "redirectRequest",
            "mirrorRequest",
            "mirrorRequest",
        ]
        assert policies.request[2].as_dict()["parameters"] == {"url": "https://m2"}

    def test_every_filter_kind_dispatches_in_order(self, api_factory) -> None:
        filters = _filters(
            [
                {"type": "mirror", "urls": ["https://m1"]},
                {
                    "type": "headers",
                    "requestHeaders": {"addHeaders": [{"name": "X-A", "value": "1"}]},
                    "responseHeaders": {"addHeaders": [{"name": "X-B", "value": "2"}]},
                },
                {"type": "redirect", "url": "https://new"},
            ]
        )
        policies = build_operation_policies(filters, None, resolve_endpoints(api_factory()))

        assert [p.name for p in policies.request] == [
            "mirrorRequest",
            "addHeader",
            "redirectRequest",
        ]
        assert [p.name for p in policies.response] == ["addHeader"]

    def test_no_filters_yields_empty_policies(self, api_factory) -> None:
        policies = build_operation_policies([], None, resolve_endpoints(api_factory()))
        assert policies.as_dict() == {"request": [], "response": [], "fault": []}


class TestModelRoutingPolicy:
    def test_weights_bound_to_endpoint_ids(self, api_factory) -> None:
        api = api_factory(
            multiEndpoints={
                "protocol": "https",
                "prodEndpoints": [{"url": "llm-a"}, {"url": "llm-b"}],
            }
        )
        endpoints = resolve_endpoints(api)
        routing = ModelBasedRoundRobin.model_validate(
            {
                "onQuotaExceedSuspendDuration": 30,
                "productionModels": [
                    {"model": "gpt-4o", "endpoint": "https://llm-a", "weight": 70},
                    {"model": "gpt-4o-mini", "endpoint": "https://llm-b", "weight": 30},
                ],
            }
        )

        policy = build_model_routing_policy(routing, endpoints, api_level=True).as_dict()

        assert policy["policyName"] == "modelWeightedRoundRobin"
        assert policy["policyType"] == "common"
        config = policy["parameters"]["weightedRoundRobinConfigs"]
        assert '"' not in config
        assert f"'endpointId':'{endpoints.descriptors[0].id}'" in config
        assert "'suspendDuration':'30'" in config

    def test_operation_level_routing_comes_first_without_type(self, api_factory) -> None:
        routing = ModelBasedRoundRobin.model_validate({"productionModels": []})
        policies = build_operation_policies(
            _filters([{"type": "redirect", "url": "https://x"}]),
            routing,
            resolve_endpoints(api_factory()),
        )
        first = policies.request[0].as_dict()
        assert first["policyName"] == "modelWeightedRoundRobin"
        assert "policyType" not in first
