"""Testes do Artifact Synthesizer."""

from __future__ import annotations

import yaml

from app.services.artifact_synthesizer import strip_version_suffix, synthesize


class TestStripVersionSuffix:
    def test_strips_trailing_version(self) -> None:
        assert strip_version_suffix("/pets/1.0", "1.0") == "/pets"

    def test_keeps_path_without_suffix(self) -> None:
        assert strip_version_suffix("/pets", "1.0") == "/pets"
        assert strip_version_suffix("/pets/v11.0", "1.0") == "/pets/v11.0"


class TestSynthesize:
    def test_rest_api_definition_defaults(self, event_factory, control_plane_settings) -> None:
        bundle = synthesize(event_factory(), control_plane_settings)
        document = bundle.api_definition.to_document()
        data = document["data"]

        assert document["type"] == "api"
        assert document["version"] == "v4.6.0"
        assert data["context"] == "/pets"
        assert data["type"] == "HTTP"
        assert data["provider"] == "admin"
        assert data["lifeCycleStatus"] == "CREATED"
        assert data["cacheTimeout"] == 300
        assert data["policies"] == ["Unlimited"]
        assert data["gatewayType"] == "wso2/apk"
        assert data["transport"] == ["http", "https"]
        assert "corsConfiguration" not in data
        assert "maxTps" not in data
        assert "subtypeConfiguration" not in data
        assert "endpointImplementationType" not in data
        assert bundle.endpoints is None
        assert bundle.definition_file_name == "swagger.yaml"

    def test_inline_endpoint_config_omits_empty_sandbox(
        self, event_factory, control_plane_settings
    ) -> None:
        data = synthesize(event_factory(), control_plane_settings).api_definition.to_document()[
            "data"
        ]
        config = data["endpointConfig"]

        assert config["endpoint_type"] == "https"
        assert config["production_endpoints"] == {"url": "https://pets.backend:443"}
        assert "sandbox_endpoints" not in config
        assert config["endpoint_security"]["production"]["type"] == "NONE"
        assert config["endpoint_security"]["sandbox"]["apiKeyIdentifierType"] == "HEADER"

    def test_single_multi_endpoint_entry_keeps_its_security(
        self, event_factory, control_plane_settings
    ) -> None:
        event = event_factory(
            prodEndpoint="",
            multiEndpoints={
                "protocol": "https",
                "prodEndpoints": [
                    {
                        "url": "llm.backend",
                        "securityEnabled": True,
                        "securityType": "BASIC",
                        "basicUsername": "u",
                        "basicPassword": "p",
                    }
                ],
            },
        )
        bundle = synthesize(event, control_plane_settings)
        config = bundle.api_definition.to_document()["data"]["endpointConfig"]

        assert bundle.endpoints is None
        assert config["production_endpoints"] == {"url": "https://llm.backend"}
        security = config["endpoint_security"]["production"]
        assert security["type"] == "BASIC"
        assert security["enabled"] is True
        assert security["username"] == "u"
        assert security["password"] == "p"
        assert config["endpoint_security"]["sandbox"]["type"] == "NONE"

    def test_inline_endpoint_type_follows_descriptor_protocol(
        self, event_factory, control_plane_settings
    ) -> None:
        event = event_factory(
            prodEndpoint="",
            endpointProtocol="http",
            multiEndpoints={"protocol": "https", "prodEndpoints": [{"url": "llm.backend"}]},
        )
        config = synthesize(event, control_plane_settings).api_definition.to_document()["data"][
            "endpointConfig"
        ]

        assert config["production_endpoints"] == {"url": "https://llm.backend"}
        assert config["endpoint_type"] == "https"

    def test_multi_endpoint_emits_endpoint_document(
        self, event_factory, control_plane_settings
    ) -> None:
        event = event_factory(
            multiEndpoints={
                "protocol": "https",
                "prodEndpoints": [{"url": "a"}, {"url": "b"}],
                "sandEndpoints": [{"url": "c"}],
            }
        )
        bundle = synthesize(event, control_plane_settings)
        data = bundle.api_definition.to_document()["data"]

        assert bundle.endpoints is not None
        endpoints_doc = bundle.endpoints.to_document()
        assert endpoints_doc["type"] == "endpoints"
        assert len(endpoints_doc["data"]) == 3
        assert data["endpointImplementationType"] == "ENDPOINT"
        assert data["primaryProductionEndpointId"] == endpoints_doc["data"][0]["id"]
        assert data["primarySandboxEndpointId"] == endpoints_doc["data"][2]["id"]
        assert data["endpointConfig"]["production_endpoints"] == {"url": "https://a"}

    def test_cors_rate_limit_and_subtype(self, event_factory, control_plane_settings) -> None:
        event = event_factory(
            apiSubType="AIAPI",
            aiConfiguration={
                "llmProviderId": "p-1",
                "llmProviderName": "OpenAI",
                "llmProviderApiVersion": "v1",
            },
            cORSPolicy={"accessControlAllowOrigins": ["*"], "accessControlAllowMethods": ["GET"]},
            prodAIRL={"requestCount": 10, "timeUnit": "min", "totalTokenCount": 1000},
            sandAIRL={"requestCount": 5, "timeUnit": "hour"},
        )
        data = synthesize(event, control_plane_settings).api_definition.to_document()["data"]

        assert data["subtypeConfiguration"] == {
            "subtype": "AIAPI",
            "_configuration": '{"llmProviderId":"p-1"}',
        }
        assert data["corsConfiguration"]["corsConfigurationEnabled"] is True
        assert data["corsConfiguration"]["accessControlAllowOrigins"] == ["*"]
        assert data["maxTps"] == {
            "production": 10,
            "productionTimeUnit": "MIN",
            "sandbox": 5,
            "sandboxTimeUnit": "HOUR",
            "tokenBasedThrottlingConfiguration": {
                "productionMaxTotalTokenCount": 1000,
                "isTokenBasedThrottlingEnabled": True,
            },
        }

    def test_subtype_requires_complete_ai_configuration(
        self, event_factory, control_plane_settings
    ) -> None:
        event = event_factory(apiSubType="AIAPI", aiConfiguration={"llmProviderId": "p-1"})
        data = synthesize(event, control_plane_settings).api_definition.to_document()["data"]
        assert "subtypeConfiguration" not in data

    def test_operations_scopes_and_rewritten_schema(
        self, event_factory, control_plane_settings
    ) -> None:
        event = event_factory(
            operations=[{"path": "/pets/[^/]+", "verb": "GET", "scopes": ["read:pets"]}],
            securityScheme=["oauth2"],
            authHeader="Authorization",
        )
        bundle = synthesize(event, control_plane_settings)
        data = bundle.api_definition.to_document()["data"]
        schema = yaml.safe_load(bundle.definition)

        assert [(op["target"], op["verb"]) for op in data["operations"]] == [
            ("/pets/{petId}", "GET")
        ]
        assert data["scopes"][0] == {
            "scope": {
                "name": "read:pets",
                "displayName": "read:pets",
                "description": "read:pets",
                "bindings": [],
            },
            "shared": False,
        }
        assert data["securityScheme"] == ["oauth2"]
        assert data["authorizationHeader"] == "Authorization"
        assert schema["paths"]["/pets/{petId}"]["get"]["security"] == [
            {"default": ["read:pets"]}
        ]
        assert "security" not in schema["paths"]["/pets"]["get"]

    def test_unparseable_schema_degrades_to_no_operations(
        self, event_factory, control_plane_settings
    ) -> None:
        event = event_factory(
            definition="paths: [unclosed",
            operations=[{"path": "/pets", "verb": "GET", "scopes": ["s"]}],
        )
        bundle = synthesize(event, control_plane_settings)
        data = bundle.api_definition.to_document()["data"]

        assert data["operations"] == []
        assert data["scopes"] == []
        assert bundle.definition == "paths: [unclosed"

    def test_graphql_keeps_schema_and_skips_api_routing(
        self, event_factory, control_plane_settings
    ) -> None:
        event = event_factory(
            apiType="GraphQL",
            definition="type Query { pets: [String] }",
            operations=[{"path": "pets", "verb": "QUERY"}],
            modelBasedRoundRobin={"productionModels": [{"model": "m", "endpoint": "x"}]},
        )
        bundle = synthesize(event, control_plane_settings)
        data = bundle.api_definition.to_document()["data"]

        assert data["type"] == "GRAPHQL"
        assert data["apiPolicies"]["request"] == []
        assert bundle.definition == "type Query { pets: [String] }"
        assert bundle.definition_file_name == "schema.graphql"

    def test_api_level_routing_policy_for_rest(
        self, event_factory, control_plane_settings
    ) -> None:
        event = event_factory(
            modelBasedRoundRobin={
                "productionModels": [
                    {"model": "m", "endpoint": "https://pets.backend:443", "weight": 100}
                ]
            }
        )
        data = synthesize(event, control_plane_settings).api_definition.to_document()["data"]
        (policy,) = data["apiPolicies"]["request"]
        assert policy["policyName"] == "modelWeightedRoundRobin"
        assert policy["policyType"] == "common"

    def test_additional_properties_sorted(self, event_factory, control_plane_settings) -> None:
        event = event_factory(apiProperties={"zeta": "1", "alpha": "2"})
        data = synthesize(event, control_plane_settings).api_definition.to_document()["data"]
        assert data["additionalProperties"] == [
            {"name": "alpha", "value": "2", "display": False},
            {"name": "zeta", "value": "1", "display": False},
        ]

    def test_deployment_environments_per_label(
        self, event_factory, control_plane_settings
    ) -> None:
        bundle = synthesize(event_factory(), control_plane_settings)
        document = bundle.deployment_environments.to_document()

        assert document["type"] == "deployment_environments"
        assert document["version"] == "v4.3.0"
        assert document["data"] == [
            {
                "displayOnDevportal": True,
                "deploymentEnvironment": "Default",
                "deploymentVhost": "gw.example.com",
            },
            {
                "displayOnDevportal": True,
                "deploymentEnvironment": "Gateway2",
                "deploymentVhost": "gw.example.com",
            },
        ]

    def test_synthesis_is_idempotent(self, event_factory, control_plane_settings) -> None:
        event = event_factory(
            multiEndpoints={"protocol": "https", "prodEndpoints": [{"url": "a"}, {"url": "b"}]},
            operations=[{"path": "/pets", "verb": "GET", "scopes": ["a", "b"]}],
        )
        first = synthesize(event, control_plane_settings)
        second = synthesize(event, control_plane_settings)

        assert first.api_definition.to_document() == second.api_definition.to_document()
        assert first.endpoints.to_document() == second.endpoints.to_document()
        assert first.definition == second.definition
