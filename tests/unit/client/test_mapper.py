"""Unit tests for the response mapper and body decoders."""

import json

import pytest

from dockyard.client.catalog import Operation
from dockyard.client.mapper import (
    Err,
    Ok,
    ResponseMapper,
    empty_decoder,
    json_lines_decoder,
    log_stream_decoder,
    model_decoder,
    parse_error_message,
    raw_decoder,
    text_decoder,
)
from dockyard.client.transport import RawResponse
from dockyard.exceptions import (
    ApiError,
    ConflictError,
    InvalidRequestError,
    MalformedResponseError,
    NotFoundError,
    ServerFaultError,
    UnexpectedResponseError,
)
from dockyard.models import ContainerSummary, CreatedContainer, PullProgress


def error_body(message: str) -> bytes:
    return json.dumps({"message": message}).encode()


class TestResponseMapperSuccess:
    """Test responses whose status is in the operation's success set."""

    def test_decodes_created_container(self):
        """Test a 201 create response decodes to CreatedContainer."""
        response = RawResponse(201, b'{"Id": "abc123", "Warnings": null}')

        result = ResponseMapper().map(
            response, Operation.CONTAINER_CREATE, model_decoder(CreatedContainer)
        )

        assert isinstance(result, Ok)
        assert result.is_ok
        assert result.value.id == "abc123"
        assert result.value.warnings == ()

    def test_every_success_code_yields_ok(self):
        """Test each success code of every operation maps to Ok."""
        mapper = ResponseMapper()
        for op in Operation:
            for status in op.success_codes:
                result = mapper.map(RawResponse(status, b""), op, empty_decoder)
                assert isinstance(result, Ok), (op.name, status)

    def test_decode_failure_is_malformed(self):
        """Test an undecodable success body becomes MalformedResponseError."""
        response = RawResponse(201, b"not json")

        result = ResponseMapper().map(
            response, Operation.CONTAINER_CREATE, model_decoder(CreatedContainer)
        )

        assert isinstance(result, Err)
        assert isinstance(result.error, MalformedResponseError)
        assert result.error.status_code == 201

    def test_missing_required_field_is_malformed(self):
        """Test a body lacking Id fails validation as malformed."""
        response = RawResponse(201, b'{"Warnings": []}')

        result = ResponseMapper().map(
            response, Operation.CONTAINER_CREATE, model_decoder(CreatedContainer)
        )

        assert isinstance(result.error, MalformedResponseError)


class TestResponseMapperErrors:
    """Test classification of non-success responses."""

    @pytest.mark.parametrize(
        "status,error_class",
        [
            (400, InvalidRequestError),
            (404, NotFoundError),
            (409, ConflictError),
            (422, InvalidRequestError),
            (500, ServerFaultError),
            (503, ServerFaultError),
            (418, UnexpectedResponseError),
        ],
    )
    def test_status_classification(self, status, error_class):
        """Test structured daemon errors are classified by status code."""
        response = RawResponse(status, error_body("boom"))

        result = ResponseMapper().map(response, Operation.CONTAINER_CREATE, empty_decoder)

        assert isinstance(result, Err)
        assert type(result.error) is error_class
        assert result.error.status_code == status

    def test_conflict_keeps_daemon_message(self):
        """Test the daemon's message becomes the error message."""
        message = 'Conflict. The container name "/test" is already in use'
        response = RawResponse(409, error_body(message))

        result = ResponseMapper().map(response, Operation.CONTAINER_CREATE, empty_decoder)

        assert str(result.error) == message
        assert result.error.body == response.body

    def test_unstructured_body_is_unexpected(self):
        """Test a non-JSON error body falls back to UnexpectedResponseError."""
        response = RawResponse(500, b"<html>bad gateway</html>")

        result = ResponseMapper().map(response, Operation.SYSTEM_PING, text_decoder)

        assert isinstance(result.error, UnexpectedResponseError)
        assert result.error.status_code == 500
        assert result.error.body == b"<html>bad gateway</html>"

    def test_mapping_is_total(self):
        """Test every status code maps to exactly one Ok or ApiError."""
        mapper = ResponseMapper()
        for status in range(100, 600):
            for body in (b"", error_body("x"), b"garbage"):
                result = mapper.map(
                    RawResponse(status, body), Operation.CONTAINER_START, empty_decoder
                )
                if Operation.CONTAINER_START.is_success(status):
                    assert isinstance(result, Ok)
                else:
                    assert isinstance(result, Err)
                    assert isinstance(result.error, ApiError)

    def test_unwrap_raises_error(self):
        """Test Err.unwrap() raises the classified error."""
        result = ResponseMapper().map(
            RawResponse(404, error_body("No such container: x")),
            Operation.CONTAINER_INSPECT,
            empty_decoder,
        )

        with pytest.raises(NotFoundError, match="No such container"):
            result.unwrap()


class TestParseErrorMessage:
    """Test daemon error body parsing."""

    def test_message_extracted(self):
        """Test the message field is returned."""
        assert parse_error_message(error_body("oops")) == "oops"

    @pytest.mark.parametrize("body", [b"", b"null", b"[]", b'{"msg": "x"}', b'{"message": 1}'])
    def test_unstructured_bodies(self, body):
        """Test bodies without a string message return None."""
        assert parse_error_message(body) is None

    def test_deeply_nested_body(self):
        """Test nesting past the interpreter recursion limit is treated as unstructured."""
        assert parse_error_message(b"[" * 100000) is None


class TestDeeplyNestedBodies:
    """Test pathological nesting never escapes map()."""

    def test_error_status_is_unexpected(self):
        """Test a deeply nested error body becomes UnexpectedResponseError."""
        body = b"[" * 100000

        result = ResponseMapper().map(RawResponse(500, body), Operation.SYSTEM_PING, empty_decoder)

        assert isinstance(result, Err)
        assert isinstance(result.error, UnexpectedResponseError)
        assert result.error.status_code == 500

    @pytest.mark.parametrize(
        "decoder",
        [json.loads, model_decoder(CreatedContainer)],
        ids=["stdlib_json", "pydantic"],
    )
    def test_success_status_is_malformed(self, decoder):
        """Test a deeply nested success body becomes MalformedResponseError."""
        body = b"[" * 100000

        result = ResponseMapper().map(RawResponse(201, body), Operation.CONTAINER_CREATE, decoder)

        assert isinstance(result, Err)
        assert isinstance(result.error, MalformedResponseError)


class TestDecoders:
    """Test body decoders."""

    def test_list_decoder_treats_null_as_empty(self):
        """Test a null list body decodes to an empty list."""
        decode = model_decoder(list[ContainerSummary])

        assert decode(b"null") == []
        assert decode(b"") == []

    def test_list_decoder(self):
        """Test container summaries decode from a JSON array."""
        decode = model_decoder(list[ContainerSummary])
        body = json.dumps(
            [{"Id": "0123456789abcdef", "Names": ["/web"], "State": "running", "Labels": None}]
        ).encode()

        [summary] = decode(body)

        assert summary.short_id == "0123456789ab"
        assert summary.name == "web"
        assert summary.labels == {}

    def test_json_lines_decoder(self):
        """Test progress streams decode one event per line."""
        body = b'{"status":"Pulling from library/alpine"}\n\n{"status":"Done","id":"abc"}\n'

        events = json_lines_decoder(PullProgress)(body)

        assert [e.status for e in events] == ["Pulling from library/alpine", "Done"]
        assert events[1].id == "abc"

    def test_log_stream_decoder_strips_frames(self):
        """Test multiplexed log frames are reassembled into text."""
        stdout = b"hello\n"
        stderr = b"oops\n"
        body = (
            b"\x01\x00\x00\x00" + len(stdout).to_bytes(4, "big") + stdout
            + b"\x02\x00\x00\x00" + len(stderr).to_bytes(4, "big") + stderr
        )

        assert log_stream_decoder(body) == "hello\noops\n"

    def test_log_stream_decoder_plain_text(self):
        """Test TTY logs without frame headers pass through."""
        assert log_stream_decoder(b"plain output\n") == "plain output\n"

    def test_text_decoder(self):
        """Test ping bodies decode as text."""
        assert text_decoder(b"OK") == "OK"

    def test_raw_decoder(self):
        """Test binary bodies (container exports) pass through unchanged."""
        body = b"ustar\x00\x00\xff"

        assert raw_decoder(body) is body
