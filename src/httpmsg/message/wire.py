"""
HTTP/1.x text form of messages.

Only serialization lives here: a request or response is turned into its
start line, header block and body. Reading messages off the wire is left to
whatever transport supplies them.
"""

from __future__ import annotations

import anyio.to_thread
from anyio.abc import ByteSendStream

from ..errors import InvalidArgumentError
from ..interfaces import MessageInterface
from .request import RequestMixin
from .response import Response


_CRLF = b"\r\n"


def start_line(message: MessageInterface) -> bytes:
    """Return the request line or status line of ``message``, without CRLF."""
    if isinstance(message, RequestMixin):
        line = f"{message.method.value} {message.request_target} HTTP/{message.protocol_version}"
    elif isinstance(message, Response):
        # the space before the phrase is required even when the phrase is empty
        line = f"HTTP/{message.protocol_version} {message.status_code} {message.reason_phrase}"
    else:
        raise InvalidArgumentError(f"Cannot serialize {type(message).__name__}")
    return line.encode("iso-8859-1")


def head(message: MessageInterface) -> bytes:
    """Start line and header block, terminated by the empty line."""
    lines = [start_line(message)]
    for name, values in message.headers.items():
        for value in values:
            lines.append(f"{name}: {value}".encode("iso-8859-1"))
    return _CRLF.join(lines) + _CRLF + _CRLF


def to_bytes(message: MessageInterface) -> bytes:
    """
    Serialize ``message`` including its whole body.

    Headers are written as stored, one line per value; nothing such as
    Content-Length is added.
    """
    body = message.body
    if body.is_seekable():
        body.rewind()
    return head(message) + body.get_contents()


async def send_message(message: MessageInterface, sink: ByteSendStream, *, chunk_size: int = 64 * 1024) -> None:
    """Write ``message`` to an anyio byte stream, streaming the body in chunks."""
    body = message.body
    await sink.send(head(message))
    if body.is_seekable():
        body.rewind()
    while True:
        chunk = await anyio.to_thread.run_sync(body.read, chunk_size)
        if not chunk:
            break
        await sink.send(chunk)
