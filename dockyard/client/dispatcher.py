"""Request dispatcher: serialize a payload, resolve the endpoint, send once."""

import json
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel

from dockyard.builders.base import WireModel
from dockyard.client.catalog import Operation, resolve
from dockyard.client.transport import RawResponse, Transport
from dockyard.exceptions import TransportError
from dockyard.logging_config import get_logger, request_context

logger = get_logger(__name__)

Payload = BaseModel | Mapping[str, Any]


def encode_query(params: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """Encode query values the way the daemon expects.

    Booleans become ``true``/``false``, dicts and lists become JSON, enums
    use their value and ``None`` values are dropped.
    """
    encoded: dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, (list, dict, tuple)):
            encoded[key] = json.dumps(value)
        else:
            encoded[key] = str(value)
    return encoded


def serialize_payload(payload: Optional[Payload]) -> tuple[Optional[bytes], dict[str, Any]]:
    """Split a payload into an encoded JSON body and its query-string fields."""
    if payload is None:
        return None, {}

    if isinstance(payload, WireModel):
        body, query = payload.to_body(), payload.to_query()
    elif isinstance(payload, BaseModel):
        body, query = payload.model_dump(mode="json", by_alias=True, exclude_none=True), {}
    else:
        body, query = dict(payload), {}

    if not body and isinstance(payload, WireModel) and payload.QUERY_FIELDS:
        # Query-only payloads (e.g. image pulls) carry no body at all.
        return None, query
    return json.dumps(body).encode("utf-8"), query


class RequestDispatcher:
    """Turns an operation and payload into exactly one transport call.

    The dispatcher never inspects status codes and never retries; transport
    failures propagate unchanged.
    """

    def __init__(self, transport: Transport):
        self.transport = transport

    async def send(
        self,
        operation: Operation,
        payload: Optional[Payload] = None,
        path_params: Optional[Mapping[str, str]] = None,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RawResponse:
        """
        Send one request for ``operation``.

        Args:
            operation: Catalog entry to call
            payload: Config model or plain mapping for the JSON body
            path_params: Values for the path template placeholders
            query: Extra query parameters (merged over the payload's query fields)
            headers: Extra request headers (e.g. ``X-Registry-Auth``)

        Returns:
            The raw response, unchanged

        Raises:
            TransportError: If no response was received
        """
        endpoint = resolve(operation, path_params)
        body, payload_query = serialize_payload(payload)
        params = encode_query({**payload_query, **(query or {})})

        request_headers = dict(headers or {})
        if body is not None:
            request_headers["Content-Type"] = "application/json"

        with request_context(operation.name, self.transport.endpoint):
            logger.debug(
                "docker_request",
                operation=operation.name,
                method=endpoint.method,
                path=endpoint.path,
                headers=request_headers,
                has_body=body is not None,
            )

            try:
                response = await self.transport.execute(
                    endpoint.method,
                    endpoint.path,
                    headers=request_headers,
                    body=body,
                    params=params,
                )
            except TransportError as e:
                logger.warning(
                    "docker_transport_failed",
                    operation=operation.name,
                    endpoint=self.transport.endpoint,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise

            logger.debug(
                "docker_response",
                operation=operation.name,
                status_code=response.status_code,
                body_bytes=len(response.body),
            )
        return response
