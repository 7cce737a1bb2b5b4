"""Immutable HTTP message value objects modeled after PSR-7."""

from .enums import HttpMethod, StreamMetadataKey, UploadError
from .errors import (
    HttpMessageError,
    InvalidArgumentError,
    ResourceConsumedError,
    ResourceStateError,
    StreamError,
    UploadTransferError,
)
from .headers import Headers
from .interfaces import (
    MessageInterface,
    RequestInterface,
    ResponseInterface,
    ServerRequestInterface,
    StreamInterface,
    UploadedFileInterface,
    UriInterface,
)
from .uri import Uri
from .stream import AsyncStreamReader, Stream, read_body
from .upload import UploadedFile
from .message import Request, Response, ServerRequest, send_message, to_bytes

__all__ = [
    # Enumerations
    "HttpMethod",
    "StreamMetadataKey",
    "UploadError",
    # Errors
    "HttpMessageError",
    "InvalidArgumentError",
    "ResourceConsumedError",
    "ResourceStateError",
    "StreamError",
    "UploadTransferError",
    # Contracts
    "MessageInterface",
    "RequestInterface",
    "ResponseInterface",
    "ServerRequestInterface",
    "StreamInterface",
    "UploadedFileInterface",
    "UriInterface",
    # Values
    "Headers",
    "Uri",
    "Request",
    "ServerRequest",
    "Response",
    # Streams and uploads
    "Stream",
    "AsyncStreamReader",
    "read_body",
    "UploadedFile",
    # Serialization
    "to_bytes",
    "send_message",
]
