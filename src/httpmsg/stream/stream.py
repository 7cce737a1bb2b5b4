"""
Stream - a StreamInterface over a binary file object.

Wraps anything with the ``io`` binary API (``io.BytesIO``, an open file,
a socket file). Once detached or closed the stream is unusable: reads,
writes, seeks and ``tell`` raise StreamError, the flag queries return False.
"""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Iterator
from typing import IO, Any

from typing_extensions import Self, override

from ..enums import StreamMetadataKey
from ..errors import InvalidArgumentError, StreamError
from ..interfaces import StreamInterface


logger = logging.getLogger(__name__)


class Stream(StreamInterface):
    """
    Body stream backed by a binary file object.

    Not thread-safe; a stream has a single owner.
    """

    # bytes per chunk when iterating
    chunk_size: int = 64 * 1024

    def __init__(self, resource: IO[bytes], *, size: int | None = None, uri: str | None = None):
        if not hasattr(resource, "read") and not hasattr(resource, "write"):
            raise InvalidArgumentError(f"Stream resource must be a file object, got {type(resource).__name__}")
        if size is not None and size < 0:
            raise InvalidArgumentError(f"Stream size must not be negative: {size}")
        self._resource: IO[bytes] | None = resource
        self._size = size
        self._uri = uri if uri is not None else getattr(resource, "name", None)
        self._at_eof = False

    @classmethod
    def from_bytes(cls, data: bytes = b"") -> "Stream":
        """Create a seekable in-memory stream positioned at the start of ``data``."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidArgumentError(f"Stream data must be bytes, got {type(data).__name__}")
        return cls(io.BytesIO(bytes(data)), uri="memory")

    @classmethod
    def open(cls, path: str | os.PathLike[str], mode: str = "rb") -> "Stream":
        """Open ``path`` in binary ``mode`` and wrap it."""
        if "b" not in mode:
            mode += "b"
        try:
            return cls(open(path, mode), uri=os.fspath(path))
        except OSError as e:
            raise StreamError(f"Unable to open {os.fspath(path)!r}: {e}") from e

    def _require(self) -> IO[bytes]:
        if self._resource is None:
            raise StreamError("Stream is detached")
        if self._resource.closed:
            raise StreamError("Stream is closed")
        return self._resource

    def _flag(self, name: str) -> bool:
        resource = self._resource
        if resource is None or resource.closed:
            return False
        check = getattr(resource, name, None)
        return bool(check()) if check is not None else False

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __iter__(self) -> Iterator[bytes]:
        """Yield the remaining contents in ``chunk_size`` pieces."""
        while True:
            chunk = self.read(self.chunk_size)
            if not chunk:
                return
            yield chunk

    def __repr__(self) -> str:
        state = "detached" if self._resource is None else ("closed" if self._resource.closed else "open")
        return f"<Stream uri={self._uri!r} {state}>"

    @override
    def __bytes__(self) -> bytes:
        try:
            if self.is_seekable():
                self.seek(0)
            return self.get_contents()
        except StreamError as e:
            logger.warning("Unable to read stream %r: %s", self, e)
            return b""

    @override
    def close(self) -> None:
        resource = self.detach()
        if resource is not None:
            logger.debug("Closing stream %r", self._uri)
            resource.close()

    @override
    def detach(self) -> IO[bytes] | None:
        resource, self._resource = self._resource, None
        self._size = None
        return resource

    @override
    def get_size(self) -> int | None:
        if self._size is not None:
            return self._size
        resource = self._resource
        if resource is None or resource.closed:
            return None
        if isinstance(resource, io.BytesIO):
            with resource.getbuffer() as view:
                return view.nbytes
        try:
            return os.fstat(resource.fileno()).st_size
        except (OSError, AttributeError, io.UnsupportedOperation):
            return None

    @override
    def tell(self) -> int:
        try:
            return self._require().tell()
        except (OSError, ValueError) as e:
            raise StreamError(f"Unable to determine stream position: {e}") from e

    @override
    def eof(self) -> bool:
        if self._resource is None or self._resource.closed:
            return True
        if self._at_eof:
            return True
        size = self.get_size()
        if size is not None and self.is_seekable():
            return self.tell() >= size
        return False

    @override
    def is_seekable(self) -> bool:
        return self._flag("seekable")

    @override
    def seek(self, offset: int, whence: int = os.SEEK_SET) -> None:
        resource = self._require()
        if not self.is_seekable():
            raise StreamError("Stream is not seekable")
        try:
            resource.seek(offset, whence)
        except (OSError, ValueError) as e:
            raise StreamError(f"Unable to seek to offset {offset} (whence {whence}): {e}") from e
        self._at_eof = False

    @override
    def rewind(self) -> None:
        self.seek(0)

    @override
    def is_writable(self) -> bool:
        return self._flag("writable")

    @override
    def write(self, data: bytes) -> int:
        resource = self._require()
        if not self.is_writable():
            raise StreamError("Cannot write to a non-writable stream")
        try:
            written = resource.write(data)
        except (OSError, ValueError, TypeError) as e:
            raise StreamError(f"Unable to write to stream: {e}") from e
        # size changed; recompute on next query
        self._size = None
        return written if written is not None else 0

    @override
    def is_readable(self) -> bool:
        return self._flag("readable")

    @override
    def read(self, length: int) -> bytes:
        if length < 0:
            raise InvalidArgumentError(f"Length must not be negative: {length}")
        resource = self._require()
        if not self.is_readable():
            raise StreamError("Cannot read from a non-readable stream")
        if length == 0:
            return b""
        try:
            data = resource.read(length)
        except (OSError, ValueError) as e:
            raise StreamError(f"Unable to read from stream: {e}") from e
        if not data:
            self._at_eof = True
            return b""
        return data

    @override
    def get_contents(self) -> bytes:
        resource = self._require()
        if not self.is_readable():
            raise StreamError("Cannot read from a non-readable stream")
        try:
            data = resource.read()
        except (OSError, ValueError) as e:
            raise StreamError(f"Unable to read stream contents: {e}") from e
        self._at_eof = True
        return data or b""

    @override
    def get_metadata(self, key: StreamMetadataKey | str | None = None) -> Any:
        resource = self._resource
        metadata: dict[StreamMetadataKey, Any] = {}
        if resource is not None:
            metadata = {
                StreamMetadataKey.MODE: getattr(resource, "mode", "rb+" if isinstance(resource, io.BytesIO) else None),
                StreamMetadataKey.SEEKABLE: self.is_seekable(),
                StreamMetadataKey.URI: self._uri,
                StreamMetadataKey.CLOSED: resource.closed,
                StreamMetadataKey.WRAPPER_TYPE: type(resource).__name__,
            }
        if key is None:
            return metadata
        try:
            key = StreamMetadataKey(key)
        except ValueError:
            return None
        return metadata.get(key)
