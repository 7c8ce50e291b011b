"""Tests for error module."""

from typed_llm.errors import (
    ErrorClass,
    ErrorContext,
    InvalidGenerationError,
    NoRelevantResponseError,
    RemoteError,
    TransportError,
    TypedLlmError,
    UnsupportedShapeError,
    ValidationError,
    classify_http_error,
    extract_error_message,
    is_retryable,
)


class TestErrorContext:
    """Tests for ErrorContext."""

    def test_empty_context(self) -> None:
        """Test empty context string representation."""
        assert str(ErrorContext()) == ""

    def test_context_with_source(self) -> None:
        """Test context with source."""
        ctx = ErrorContext(source="decoder")
        assert "[decoder]" in str(ctx)

    def test_context_with_field_path(self) -> None:
        """Test context with field path."""
        ctx = ErrorContext(field_path="result.items[0]")
        assert "at 'result.items[0]'" in str(ctx)

    def test_context_with_hint(self) -> None:
        """Test context with hint."""
        ctx = ErrorContext(hint="Check your API key")
        assert "(hint: Check your API key)" in str(ctx)


class TestTypedLlmError:
    """Tests for base error class."""

    def test_basic_error(self) -> None:
        error = TypedLlmError("Something went wrong")
        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"

    def test_with_hint(self) -> None:
        error = TypedLlmError("Failed").with_hint("Check the config")
        assert error.context.hint == "Check the config"
        assert "(hint: Check the config)" in str(error)

    def test_hierarchy(self) -> None:
        for cls in (
            UnsupportedShapeError,
            NoRelevantResponseError,
            InvalidGenerationError,
            ValidationError,
            TransportError,
        ):
            assert issubclass(cls, TypedLlmError)


class TestInvalidGenerationError:
    """Tests for InvalidGenerationError."""

    def test_message_includes_expected_and_received(self) -> None:
        error = InvalidGenerationError(
            "Expected integer", expected="integer", received="'four'", path="result"
        )
        assert error.path == "result"
        assert "at 'result'" in str(error)
        assert "expected integer" in str(error)
        assert "received 'four'" in str(error)


class TestTransportError:
    """Tests for TransportError."""

    def test_cause_preserved(self) -> None:
        cause = ConnectionError("refused")
        error = TransportError("Connection failed", url="https://x", cause=cause)
        assert error.__cause__ is cause
        assert error.url == "https://x"


class TestRemoteError:
    """Tests for RemoteError."""

    def test_from_response(self) -> None:
        error = RemoteError.from_response(
            429,
            {"error": {"message": "Slow down", "type": "rate_limit"}},
            {"Retry-After": "2", "x-request-id": "req-9"},
        )
        assert error.message == "Slow down"
        assert error.error_class is ErrorClass.RATE_LIMITED
        assert error.retryable is True
        assert error.retry_after == 2.0
        assert error.request_id == "req-9"

    def test_from_response_without_body(self) -> None:
        error = RemoteError.from_response(401)
        assert error.message == "HTTP 401"
        assert error.error_class is ErrorClass.AUTHENTICATION
        assert error.retryable is False

    def test_invalid_retry_after_ignored(self) -> None:
        error = RemoteError.from_response(503, None, {"retry-after": "soon"})
        assert error.retry_after is None


class TestClassification:
    """Tests for HTTP error classification."""

    def test_status_mapping(self) -> None:
        assert classify_http_error(400) is ErrorClass.INVALID_REQUEST
        assert classify_http_error(404) is ErrorClass.NOT_FOUND
        assert classify_http_error(500) is ErrorClass.SERVER_ERROR
        assert classify_http_error(503) is ErrorClass.OVERLOADED
        assert classify_http_error(418) is ErrorClass.INVALID_REQUEST
        assert classify_http_error(599) is ErrorClass.SERVER_ERROR
        assert classify_http_error(302) is ErrorClass.OTHER

    def test_context_length_body(self) -> None:
        body = {"error": {"code": "context_length_exceeded"}}
        assert classify_http_error(400, body) is ErrorClass.REQUEST_TOO_LARGE

    def test_content_filter_body(self) -> None:
        body = {"error": {"code": "content_filter"}}
        assert classify_http_error(400, body) is ErrorClass.CONTENT_FILTERED

    def test_retryable(self) -> None:
        assert is_retryable(ErrorClass.TIMEOUT)
        assert not is_retryable(ErrorClass.AUTHENTICATION)

    def test_extract_error_message(self) -> None:
        assert extract_error_message({"error": "bad"}) == "bad"
        assert extract_error_message({"message": "oops"}) == "oops"
        assert extract_error_message({}) is None
        assert extract_error_message(None) is None
