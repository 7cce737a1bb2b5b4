"""Body streams and their async adapters."""

from .stream import Stream
from .aio import AsyncStreamReader, read_body

__all__ = [
    "Stream",
    "AsyncStreamReader",
    "read_body",
]
