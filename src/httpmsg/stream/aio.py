"""
AnyIO adapters for body streams.

Body streams are blocking. ``AsyncStreamReader`` moves each read into a
worker thread so a file-backed body can be consumed from async code
without stalling the event loop.
"""

from __future__ import annotations

import anyio
import anyio.to_thread
from anyio.abc import ByteReceiveStream
from typing_extensions import override

from ..errors import InvalidArgumentError
from ..interfaces import StreamInterface


class AsyncStreamReader(ByteReceiveStream):
    """
    Expose a StreamInterface as an anyio ``ByteReceiveStream``.

    ``receive()`` raises ``anyio.EndOfStream`` once the body is drained, so
    the reader can be used with ``async for``. Closing the reader closes the
    wrapped stream.
    """

    def __init__(self, stream: StreamInterface, *, max_bytes: int = 64 * 1024, offload: bool = True):
        if not isinstance(stream, StreamInterface):
            raise InvalidArgumentError(f"Expected a StreamInterface, got {type(stream).__name__}")
        if max_bytes <= 0:
            raise InvalidArgumentError(f"max_bytes must be positive: {max_bytes}")
        self._stream = stream
        self._max_bytes = max_bytes
        self._offload = offload

    @property
    def stream(self) -> StreamInterface:
        return self._stream

    @override
    async def receive(self, max_bytes: int | None = None) -> bytes:
        size = max_bytes or self._max_bytes
        if self._offload:
            chunk = await anyio.to_thread.run_sync(self._stream.read, size)
        else:
            chunk = self._stream.read(size)
        if not chunk:
            raise anyio.EndOfStream
        return chunk

    @override
    async def aclose(self) -> None:
        self._stream.close()


async def read_body(stream: StreamInterface, *, rewind: bool = True) -> bytes:
    """Drain ``stream`` from async code, from the start when it is seekable."""
    if rewind and stream.is_seekable():
        stream.rewind()
    reader = AsyncStreamReader(stream)
    buf = bytearray()
    async for chunk in reader:
        buf.extend(chunk)
    return bytes(buf)
