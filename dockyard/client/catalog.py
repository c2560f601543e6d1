"""Endpoint catalog: one entry per supported Docker Engine API path and verb.

The catalog is a module-level enum and therefore immutable and safe to share
between concurrent callers.
"""

import string
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional
from urllib.parse import quote


@dataclass(frozen=True)
class Endpoint:
    """HTTP method, path template and the status codes counted as success."""

    method: str
    path_template: str
    success_codes: frozenset[int]

    @property
    def placeholders(self) -> frozenset[str]:
        """Names of the ``{...}`` placeholders in the path template."""
        return frozenset(
            field_name
            for _, field_name, _, _ in string.Formatter().parse(self.path_template)
            if field_name
        )


def _endpoint(method: str, path: str, *success: int) -> Endpoint:
    return Endpoint(method, path, frozenset(success))


class Operation(Enum):
    """Logical API operations supported by the client."""

    SYSTEM_PING = _endpoint("GET", "/_ping", 200)
    SYSTEM_VERSION = _endpoint("GET", "/version", 200)

    CONTAINER_LIST = _endpoint("GET", "/containers/json", 200)
    CONTAINER_CREATE = _endpoint("POST", "/containers/create", 201)
    CONTAINER_INSPECT = _endpoint("GET", "/containers/{id}/json", 200)
    CONTAINER_CHANGES = _endpoint("GET", "/containers/{id}/changes", 200)
    CONTAINER_LOGS = _endpoint("GET", "/containers/{id}/logs", 200)
    CONTAINER_TOP = _endpoint("GET", "/containers/{id}/top", 200)
    CONTAINER_EXPORT = _endpoint("GET", "/containers/{id}/export", 200)
    CONTAINER_START = _endpoint("POST", "/containers/{id}/start", 204, 304)
    CONTAINER_STOP = _endpoint("POST", "/containers/{id}/stop", 204, 304)
    CONTAINER_RESTART = _endpoint("POST", "/containers/{id}/restart", 204)
    CONTAINER_KILL = _endpoint("POST", "/containers/{id}/kill", 204)
    CONTAINER_PAUSE = _endpoint("POST", "/containers/{id}/pause", 204)
    CONTAINER_UNPAUSE = _endpoint("POST", "/containers/{id}/unpause", 204)
    CONTAINER_RENAME = _endpoint("POST", "/containers/{id}/rename", 204)
    CONTAINER_WAIT = _endpoint("POST", "/containers/{id}/wait", 200)
    CONTAINER_REMOVE = _endpoint("DELETE", "/containers/{id}", 204)

    IMAGE_LIST = _endpoint("GET", "/images/json", 200)
    IMAGE_PULL = _endpoint("POST", "/images/create", 200)
    IMAGE_INSPECT = _endpoint("GET", "/images/{name}/json", 200)
    IMAGE_REMOVE = _endpoint("DELETE", "/images/{name}", 200)

    NETWORK_LIST = _endpoint("GET", "/networks", 200)
    NETWORK_CREATE = _endpoint("POST", "/networks/create", 201)
    NETWORK_INSPECT = _endpoint("GET", "/networks/{id}", 200)
    NETWORK_REMOVE = _endpoint("DELETE", "/networks/{id}", 204)
    NETWORK_CONNECT = _endpoint("POST", "/networks/{id}/connect", 200)
    NETWORK_DISCONNECT = _endpoint("POST", "/networks/{id}/disconnect", 200)

    VOLUME_LIST = _endpoint("GET", "/volumes", 200)
    VOLUME_CREATE = _endpoint("POST", "/volumes/create", 201)
    VOLUME_INSPECT = _endpoint("GET", "/volumes/{name}", 200)
    VOLUME_REMOVE = _endpoint("DELETE", "/volumes/{name}", 204)
    VOLUME_PRUNE = _endpoint("POST", "/volumes/prune", 200)

    @property
    def method(self) -> str:
        return self.value.method

    @property
    def path_template(self) -> str:
        return self.value.path_template

    @property
    def success_codes(self) -> frozenset[int]:
        return self.value.success_codes

    def is_success(self, status_code: int) -> bool:
        return status_code in self.value.success_codes


@dataclass(frozen=True)
class ResolvedEndpoint:
    """Concrete request target for one call."""

    method: str
    path: str
    success_codes: frozenset[int]


def resolve(
    operation: Operation, params: Optional[Mapping[str, str]] = None
) -> ResolvedEndpoint:
    """Fill the operation's path template with URL-quoted parameters.

    Raises:
        AssertionError: If a placeholder has no value. Call sites are typed,
            so this indicates a programming error rather than bad input.
    """
    params = params or {}
    missing = operation.value.placeholders - params.keys()
    if missing:
        raise AssertionError(
            f"{operation.name} requires path parameters: {sorted(missing)}"
        )

    quoted = {key: quote(str(value), safe="") for key, value in params.items()}
    return ResolvedEndpoint(
        method=operation.method,
        path=operation.path_template.format(**quoted),
        success_codes=operation.success_codes,
    )
