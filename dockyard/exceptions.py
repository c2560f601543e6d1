"""Custom exceptions for Dockyard."""

from typing import Any


class DockyardError(Exception):
    """Base exception for all Dockyard errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(DockyardError):
    """Configuration-related errors."""

    pass


class BuildError(DockyardError):
    """Base class for configuration builder errors."""

    pass


class MissingRequiredFieldError(BuildError):
    """A required field was never supplied to the builder."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Missing required field: {field_name}", field_name=field_name)
        self.field_name = field_name


class InvalidFieldError(BuildError):
    """A field value was rejected during build."""

    def __init__(self, details: str) -> None:
        super().__init__(f"Invalid field value: {details}", details=details)


class TransportError(DockyardError):
    """Base class for failures raised before a response was received."""

    pass


class ConnectionFailedError(TransportError):
    """Could not connect to the Docker daemon."""

    def __init__(self, endpoint: str, details: str) -> None:
        super().__init__(
            f"Connection to {endpoint} failed: {details}",
            endpoint=endpoint,
            details=details,
        )


class TransportTimeoutError(TransportError):
    """Request to the Docker daemon timed out."""

    def __init__(self, endpoint: str, details: str) -> None:
        super().__init__(
            f"Request to {endpoint} timed out: {details}",
            endpoint=endpoint,
            details=details,
        )


class TransportIOError(TransportError):
    """Low-level I/O failure while talking to the Docker daemon."""

    def __init__(self, endpoint: str, details: str) -> None:
        super().__init__(
            f"I/O error talking to {endpoint}: {details}",
            endpoint=endpoint,
            details=details,
        )


class ApiError(DockyardError):
    """Base class for responses that did not match the operation's success codes."""

    def __init__(self, message: str, status_code: int, body: bytes = b"") -> None:
        super().__init__(message, status_code=status_code)
        self.status_code = status_code
        self.body = body


class NotFoundError(ApiError):
    """The addressed object does not exist (HTTP 404)."""

    pass


class ConflictError(ApiError):
    """The request conflicts with the current daemon state (HTTP 409)."""

    pass


class InvalidRequestError(ApiError):
    """The daemon rejected the request parameters (HTTP 400)."""

    pass


class ServerFaultError(ApiError):
    """The daemon failed internally (HTTP 5xx)."""

    pass


class MalformedResponseError(ApiError):
    """A success response body could not be decoded."""

    pass


class UnexpectedResponseError(ApiError):
    """A response that fits no other category."""

    def __init__(self, status_code: int, body: bytes = b"") -> None:
        preview = body[:200].decode("utf-8", errors="replace")
        super().__init__(
            f"Unexpected response status {status_code}: {preview}",
            status_code=status_code,
            body=body,
        )


def error_for_status(status_code: int, message: str, body: bytes = b"") -> ApiError:
    """Classify a daemon error message by HTTP status code."""
    status_map: dict[int, type[ApiError]] = {
        400: InvalidRequestError,
        404: NotFoundError,
        409: ConflictError,
        422: InvalidRequestError,
    }

    error_class = status_map.get(status_code)
    if error_class is not None:
        return error_class(message, status_code=status_code, body=body)

    if 500 <= status_code <= 599:
        return ServerFaultError(message, status_code=status_code, body=body)

    return UnexpectedResponseError(status_code, body)
