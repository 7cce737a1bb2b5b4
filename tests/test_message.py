"""Tests for the header, body and protocol operations shared by all messages."""

import pytest

from httpmsg import InvalidArgumentError, Request, Response, Stream


@pytest.fixture(params=[Request, Response], ids=["request", "response"])
def message(request):
    return request.param()


class TestMessageHeaders:
    """Test header operations on requests and responses."""

    def test_with_header_round_trip(self, message):
        """Test values set with with_header are returned under any casing."""
        updated = message.with_header("X-Custom", ["a", "b"])
        for name in ("X-Custom", "x-custom", "X-CUSTOM"):
            assert updated.get_header(name) == ("a", "b")
            assert updated.has_header(name)

    def test_missing_header(self, message):
        """Test missing headers return empty values instead of failing."""
        assert message.get_header("X-Missing") == ()
        assert message.get_header_line("X-Missing") == ""
        assert not message.has_header("X-Missing")

    def test_with_header_is_idempotent(self, message):
        """Test applying the same with_header twice equals applying it once."""
        once = message.with_header("X-A", ["1"])
        twice = once.with_header("X-A", ["1"])
        assert once.headers == twice.headers

    def test_with_header_replaces_casing_variant(self, message):
        """Test with_header clears a differently cased header."""
        updated = message.with_header("x-foo", ["1"]).with_header("X-Foo", ["2"])
        assert list(updated.headers) == ["X-Foo"]
        assert updated.get_header("x-foo") == ("2",)

    def test_with_header_line(self, message):
        """Test with_header_line sets a single value."""
        assert message.with_header_line("X-A", "v").get_header("x-a") == ("v",)

    def test_with_added_header(self, message):
        """Test added values are appended to existing ones."""
        updated = (
            message.with_header("Accept", ["text/html"])
            .with_added_header("accept", ["application/json"])
            .with_added_header_line("ACCEPT", "*/*")
        )
        assert updated.get_header("Accept") == ("text/html", "application/json", "*/*")
        assert updated.get_header_line("accept") == "text/html, application/json, */*"
        assert list(updated.headers) == ["Accept"]

    def test_without_header(self, message):
        """Test without_header removes any casing."""
        updated = message.with_header("X-Foo", ["1"]).without_header("x-foo")
        assert not updated.has_header("X-Foo")

    def test_invalid_header_input(self, message):
        """Test invalid names and values raise immediately."""
        with pytest.raises(InvalidArgumentError):
            message.with_header("Bad Name", ["v"])
        with pytest.raises(InvalidArgumentError):
            message.with_header("X-A", ["v\r\nInjected: 1"])
        with pytest.raises(InvalidArgumentError):
            message.with_header("X-A", "not-a-list")
        with pytest.raises(InvalidArgumentError):
            message.with_added_header("X-A", [])

    def test_original_untouched(self, message):
        """Test header mutators never change the receiver."""
        message.with_header("X-A", ["1"])
        assert not message.has_header("X-A")


class TestMessageProtocolAndBody:
    """Test protocol version and body handling."""

    def test_default_protocol_version(self, message):
        """Test messages default to HTTP/1.1."""
        assert message.protocol_version == "1.1"

    def test_with_protocol_version(self, message):
        """Test protocol versions are validated."""
        assert message.with_protocol_version("2").protocol_version == "2"
        assert message.with_protocol_version("1.0").protocol_version == "1.0"
        with pytest.raises(InvalidArgumentError):
            message.with_protocol_version("HTTP/1.1")

    def test_default_body_is_empty(self, message):
        """Test the default body is an empty stream."""
        assert bytes(message.body) == b""

    def test_with_body(self, message):
        """Test with_body swaps the stream and rejects non-streams."""
        body = Stream.from_bytes(b"payload")
        updated = message.with_body(body)
        assert updated.body is body
        assert message.body is not body
        with pytest.raises(InvalidArgumentError):
            message.with_body(b"raw bytes")

    def test_default_bodies_are_independent(self):
        """Test two messages never share a default body."""
        assert Request().body is not Request().body
