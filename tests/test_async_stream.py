"""Tests for the AnyIO stream adapters."""

import anyio
import pytest

from httpmsg import AsyncStreamReader, InvalidArgumentError, Stream, read_body


pytestmark = pytest.mark.anyio


class TestAsyncStreamReader:
    """Test AsyncStreamReader."""

    async def test_receive_chunks(self):
        """Test receive returns chunks and then EndOfStream."""
        reader = AsyncStreamReader(Stream.from_bytes(b"abcdefgh"), max_bytes=3)
        assert await reader.receive() == b"abc"
        assert await reader.receive(5) == b"defgh"
        with pytest.raises(anyio.EndOfStream):
            await reader.receive()

    async def test_async_iteration(self):
        """Test the reader works with async for."""
        reader = AsyncStreamReader(Stream.from_bytes(b"x" * 10), max_bytes=4, offload=False)
        chunks = [chunk async for chunk in reader]
        assert chunks == [b"xxxx", b"xxxx", b"xx"]

    async def test_aclose_closes_stream(self):
        """Test closing the reader closes the wrapped stream."""
        stream = Stream.from_bytes(b"abc")
        async with AsyncStreamReader(stream) as reader:
            assert reader.stream is stream
        assert not stream.is_readable()

    async def test_invalid_arguments(self):
        """Test non-streams and non-positive chunk sizes are rejected."""
        with pytest.raises(InvalidArgumentError):
            AsyncStreamReader(b"abc")
        with pytest.raises(InvalidArgumentError):
            AsyncStreamReader(Stream.from_bytes(), max_bytes=0)


class TestReadBody:
    """Test read_body."""

    async def test_reads_from_start(self):
        """Test read_body rewinds a seekable stream first."""
        stream = Stream.from_bytes(b"payload")
        stream.read(3)
        assert await read_body(stream) == b"payload"

    async def test_without_rewind(self):
        """Test read_body can continue from the current position."""
        stream = Stream.from_bytes(b"payload")
        stream.read(3)
        assert await read_body(stream, rewind=False) == b"load"

    async def test_file_body(self, tmp_path):
        """Test a file-backed body is read through worker threads."""
        path = tmp_path / "body.bin"
        path.write_bytes(b"z" * 200_000)
        with Stream.open(path) as stream:
            assert await read_body(stream) == b"z" * 200_000
