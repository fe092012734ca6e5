"""Constantes do formato de artefato importado pelo API Manager.

As versões de documento precisam bater exatamente com o schema
esperado pelo backend de import.
"""

from __future__ import annotations

from enum import StrEnum

API_DOCUMENT_TYPE = "api"
API_DOCUMENT_VERSION = "v4.6.0"
ENDPOINTS_DOCUMENT_TYPE = "endpoints"
ENDPOINTS_DOCUMENT_VERSION = "v4.6.0"
DEPLOYMENT_DOCUMENT_TYPE = "deployment_environments"
DEPLOYMENT_DOCUMENT_VERSION = "v4.3.0"

LIFECYCLE_STATUS_CREATED = "CREATED"
CACHE_TIMEOUT_SECONDS = 300
THROTTLING_UNLIMITED = "Unlimited"
GATEWAY_TYPE = "wso2/apk"
GATEWAY_VENDOR = "wso2"
DEFAULT_TRANSPORTS = ("http", "https")
ENDPOINT_IMPLEMENTATION_TYPE = "ENDPOINT"

AUTH_TYPE_APPLICATION_AND_USER = "Application & Application User"
SECURITY_NONE = "NONE"
API_KEY_IN_HEADER = "HEADER"
# Timeout -1 = padrão do gateway
UNSET_TIMEOUT = -1.0

# Token no lugar de cada segmento `{param}` antes do match por regex
PATH_PARAM_PLACEHOLDER = "hardcode"

# Security scheme OAuth2 sintético injetado no OpenAPI
OPENAPI_SECURITY_SCHEME = "default"
OPENAPI_AUTHORIZATION_URL = "https://test.com"

SWAGGER_FILE_NAME = "swagger.yaml"
GRAPHQL_SCHEMA_FILE_NAME = "schema.graphql"


class DeploymentStage(StrEnum):
    PRODUCTION = "PRODUCTION"
    SANDBOX = "SANDBOX"


class PolicyName(StrEnum):
    """Políticas de operação suportadas pelo gateway."""

    ADD_HEADER = "addHeader"
    REMOVE_HEADER = "removeHeader"
    MIRROR_REQUEST = "mirrorRequest"
    REDIRECT_REQUEST = "redirectRequest"
    MODEL_WEIGHTED_ROUND_ROBIN = "modelWeightedRoundRobin"


POLICY_VERSION_V1 = "v1"
POLICY_TYPE_COMMON = "common"


DEFAULT_OPENAPI_YAML = """openapi: 3.0.1
info:
  title: Default
  version: 1.0.0
servers:
- url: /
paths:
  /*:
    get:
      responses:
        "200":
          description: OK
    put:
      responses:
        "200":
          description: OK
    post:
      responses:
        "200":
          description: OK
    delete:
      responses:
        "200":
          description: OK
    patch:
      responses:
        "200":
          description: OK
components: {}
"""
