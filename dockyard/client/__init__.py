"""Docker Engine API client: catalog, dispatcher, response mapper and facade."""

from dockyard.client.catalog import Endpoint, Operation, ResolvedEndpoint, resolve
from dockyard.client.client import DockerClient
from dockyard.client.dispatcher import RequestDispatcher, encode_query, serialize_payload
from dockyard.client.mapper import ApiResult, Err, Ok, ResponseMapper
from dockyard.client.transport import HttpxTransport, RawResponse, Transport

__all__ = [
    "ApiResult",
    "DockerClient",
    "Endpoint",
    "Err",
    "HttpxTransport",
    "Ok",
    "Operation",
    "RawResponse",
    "RequestDispatcher",
    "ResolvedEndpoint",
    "ResponseMapper",
    "Transport",
    "encode_query",
    "resolve",
    "serialize_payload",
]
