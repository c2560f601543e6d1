"""Response mapper: classify a raw response into ``Ok`` or ``Err``.

The classification is total. Every status code yields exactly one result:

* a status in the operation's success set is decoded into ``Ok(value)``,
  or ``Err(MalformedResponseError)`` if the body does not decode;
* any other status with a structured daemon error body
  (``{"message": "..."}``) is classified by :func:`error_for_status`;
* anything else becomes ``Err(UnexpectedResponseError)``.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from dockyard.client.catalog import Operation
from dockyard.client.transport import RawResponse
from dockyard.exceptions import (
    ApiError,
    MalformedResponseError,
    UnexpectedResponseError,
    error_for_status,
)

T = TypeVar("T")

Decoder = Callable[[bytes], T]

DECODE_ERRORS = (ValidationError, ValueError, UnicodeDecodeError, RecursionError)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the decoded value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a classified :class:`ApiError`."""

    error: ApiError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error


ApiResult = Union[Ok[T], Err]


def model_decoder(type_: Any) -> Decoder:
    """Decode a JSON body into ``type_`` with pydantic.

    A ``null`` body decodes to an empty list when ``type_`` is a list type,
    since the daemon reports empty collections as ``null``.
    """
    adapter = TypeAdapter(type_)
    is_list = getattr(type_, "__origin__", None) is list

    def decode(body: bytes) -> Any:
        if is_list and body.strip() in (b"", b"null"):
            return []
        return adapter.validate_json(body)

    return decode


def json_lines_decoder(type_: Any) -> Decoder:
    """Decode a newline-delimited JSON stream into a list of ``type_``."""
    adapter = TypeAdapter(type_)

    def decode(body: bytes) -> list[Any]:
        return [
            adapter.validate_json(line)
            for line in body.splitlines()
            if line.strip()
        ]

    return decode


def empty_decoder(body: bytes) -> None:
    """Ignore the body (204/304 responses carry none)."""
    return None


def text_decoder(body: bytes) -> str:
    return body.decode("utf-8")


def raw_decoder(body: bytes) -> bytes:
    """Return the body untouched (e.g. a container export tarball)."""
    return body


def log_stream_decoder(body: bytes) -> str:
    """Decode container logs, stripping multiplexed stream frame headers.

    Without a TTY the daemon prefixes every chunk with an 8-byte header:
    stream type (0, 1 or 2), three zero bytes, and a big-endian payload size.
    """
    if len(body) >= 8 and body[0] in (0, 1, 2) and body[1:4] == b"\x00\x00\x00":
        chunks = []
        offset = 0
        while offset + 8 <= len(body):
            size = int.from_bytes(body[offset + 4:offset + 8], "big")
            chunks.append(body[offset + 8:offset + 8 + size])
            offset += 8 + size
        body = b"".join(chunks)
    return body.decode("utf-8", errors="replace")


def parse_error_message(body: bytes) -> str | None:
    """Extract the daemon's ``message`` field, or ``None`` if unstructured."""
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError, RecursionError):
        return None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return None


class ResponseMapper:
    """Maps raw responses onto :data:`ApiResult` values. Stateless."""

    def map(
        self,
        response: RawResponse,
        operation: Operation,
        decoder: Decoder,
    ) -> ApiResult:
        """
        Classify a response for ``operation``.

        Args:
            response: Raw response from the dispatcher
            operation: Operation whose success codes apply
            decoder: Body decoder for the success type

        Returns:
            ``Ok(value)`` or ``Err(api_error)``; never raises for any status
        """
        status = response.status_code

        if operation.is_success(status):
            try:
                return Ok(decoder(response.body))
            except DECODE_ERRORS as e:
                return Err(
                    MalformedResponseError(
                        f"Could not decode {operation.name} response: {e}",
                        status_code=status,
                        body=response.body,
                    )
                )

        message = parse_error_message(response.body)
        if message is None:
            return Err(UnexpectedResponseError(status, response.body))
        return Err(error_for_status(status, message, response.body))
