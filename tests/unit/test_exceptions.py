"""Unit tests for the exception hierarchy."""

import pytest

from dockyard.exceptions import (
    ApiError,
    BuildError,
    ConflictError,
    ConnectionFailedError,
    DockyardError,
    InvalidRequestError,
    MissingRequiredFieldError,
    NotFoundError,
    ServerFaultError,
    TransportError,
    UnexpectedResponseError,
    error_for_status,
)


class TestHierarchy:
    """Test error categories stay disjoint."""

    def test_categories(self):
        """Test build, transport and API errors share only the base class."""
        build = MissingRequiredFieldError("image")
        transport = ConnectionFailedError("unix:///var/run/docker.sock", "refused")
        api = ConflictError("in use", status_code=409)

        for error in (build, transport, api):
            assert isinstance(error, DockyardError)
        assert isinstance(build, BuildError) and not isinstance(build, ApiError)
        assert isinstance(transport, TransportError) and not isinstance(transport, ApiError)
        assert isinstance(api, ApiError) and not isinstance(api, TransportError)

    def test_to_dict(self):
        """Test structured error output."""
        error = MissingRequiredFieldError("image")

        assert error.to_dict() == {
            "error_type": "MissingRequiredFieldError",
            "message": "Missing required field: image",
            "context": {"field_name": "image"},
        }

    def test_unexpected_response_preview(self):
        """Test the message previews the raw body."""
        error = UnexpectedResponseError(502, b"Bad Gateway")

        assert error.status_code == 502
        assert error.body == b"Bad Gateway"
        assert "Bad Gateway" in str(error)


class TestErrorForStatus:
    """Test status classification."""

    @pytest.mark.parametrize(
        "status,error_class",
        [
            (400, InvalidRequestError),
            (404, NotFoundError),
            (409, ConflictError),
            (422, InvalidRequestError),
            (500, ServerFaultError),
            (599, ServerFaultError),
            (401, UnexpectedResponseError),
            (302, UnexpectedResponseError),
        ],
    )
    def test_classification(self, status, error_class):
        """Test each status maps to one error class."""
        error = error_for_status(status, "message", b'{"message": "message"}')

        assert type(error) is error_class
        assert error.status_code == status
