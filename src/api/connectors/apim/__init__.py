"""Connector do API Manager (publisher e internal data)."""

from api.connectors.apim.http_base import ApimHttpClient, ApimHttpConfig, HttpError
from api.connectors.apim.internal_data_client import ApimInternalDataClient
from api.connectors.apim.publisher_client import ApimPublisherClient

__all__ = [
    "ApimHttpClient",
    "ApimHttpConfig",
    "ApimInternalDataClient",
    "ApimPublisherClient",
    "HttpError",
]
