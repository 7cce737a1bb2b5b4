"""
Structural contracts for HTTP messages.

Each capability set is a Protocol. The concrete value objects in
:mod:`httpmsg.message` and :mod:`httpmsg.uri` satisfy them structurally;
streams and uploaded files subclass theirs explicitly.

Every ``with_*`` method returns a new instance and leaves the receiver
untouched. Invalid input raises :class:`~httpmsg.errors.InvalidArgumentError`
from the call that supplied it.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from typing_extensions import Self

from .enums import HttpMethod, StreamMetadataKey, UploadError


@runtime_checkable
class StreamInterface(Protocol):
    """
    A readable and/or writable byte sequence used as a message body.

    Streams are stateful and single-owner. Callers must serialize access to
    one stream themselves.
    """

    def __bytes__(self) -> bytes:
        """Seek to the start and read everything. Never raises; returns b"" on failure."""
        ...

    def close(self) -> None:
        """Close the stream and any underlying resource."""
        ...

    def detach(self) -> Any:
        """Separate and return the underlying resource, leaving the stream unusable."""
        ...

    def get_size(self) -> int | None:
        """Return the size in bytes if known."""
        ...

    def tell(self) -> int:
        ...

    def eof(self) -> bool:
        ...

    def is_seekable(self) -> bool:
        ...

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> None:
        ...

    def rewind(self) -> None:
        ...

    def is_writable(self) -> bool:
        ...

    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes written."""
        ...

    def is_readable(self) -> bool:
        ...

    def read(self, length: int) -> bytes:
        """Read up to ``length`` bytes. Returns b"" when nothing is available."""
        ...

    def get_contents(self) -> bytes:
        """Return the remaining contents."""
        ...

    def get_metadata(self, key: StreamMetadataKey | str | None = None) -> Any:
        """
        Return one metadata value, or all of them as a mapping when ``key``
        is None. Unknown keys return None.
        """
        ...


@runtime_checkable
class UploadedFileInterface(Protocol):
    """
    A single file received in a request.

    Pending until ``move_to`` succeeds; afterwards ``get_stream`` and
    ``move_to`` raise :class:`~httpmsg.errors.ResourceConsumedError`.
    """

    @property
    def size(self) -> int | None: ...

    @property
    def error(self) -> UploadError | None: ...

    @property
    def client_filename(self) -> str | None: ...

    @property
    def client_media_type(self) -> str | None: ...

    def get_stream(self) -> StreamInterface: ...

    def move_to(self, target_path: str | os.PathLike[str]) -> None: ...


class UriInterface(Protocol):
    """A URI value per RFC 3986."""

    @property
    def scheme(self) -> str: ...

    @property
    def authority(self) -> str: ...

    @property
    def user_info(self) -> str: ...

    @property
    def host(self) -> str: ...

    @property
    def port(self) -> int | None: ...

    @property
    def path(self) -> str: ...

    @property
    def raw_query(self) -> str: ...

    @property
    def query(self) -> Mapping[str, str]: ...

    @property
    def fragment(self) -> str: ...

    @property
    def origin_form(self) -> str: ...

    def with_scheme(self, scheme: str) -> Self: ...

    def with_user_info(self, user: str, password: str | None = None) -> Self: ...

    def with_host(self, host: str) -> Self: ...

    def with_port(self, port: int | None) -> Self: ...

    def with_path(self, path: str) -> Self: ...

    def with_query(self, query: Mapping[str, Any]) -> Self: ...

    def with_raw_query(self, query: str) -> Self: ...

    def with_fragment(self, fragment: str) -> Self: ...

    def __str__(self) -> str: ...


class MessageInterface(Protocol):
    """Protocol version, headers and body shared by requests and responses."""

    @property
    def protocol_version(self) -> str: ...

    @property
    def headers(self) -> Mapping[str, tuple[str, ...]]: ...

    @property
    def body(self) -> StreamInterface: ...

    def has_header(self, name: str) -> bool: ...

    def get_header(self, name: str) -> tuple[str, ...]: ...

    def get_header_line(self, name: str) -> str: ...

    def with_protocol_version(self, version: str) -> Self: ...

    def with_header(self, name: str, values: Any) -> Self: ...

    def with_header_line(self, name: str, value: str) -> Self: ...

    def with_added_header(self, name: str, values: Any) -> Self: ...

    def with_added_header_line(self, name: str, value: str) -> Self: ...

    def without_header(self, name: str) -> Self: ...

    def with_body(self, body: StreamInterface) -> Self: ...


class RequestInterface(MessageInterface, Protocol):
    """An outgoing (client-side) request."""

    @property
    def method(self) -> HttpMethod: ...

    @property
    def uri(self) -> UriInterface | None: ...

    @property
    def request_target(self) -> str: ...

    def with_method(self, method: HttpMethod | str) -> Self: ...

    def with_request_target(self, target: str | None) -> Self: ...

    def with_uri(self, uri: UriInterface, *, preserve_host: bool = False) -> Self: ...


class ServerRequestInterface(RequestInterface, Protocol):
    """An incoming request together with its server-side environment."""

    @property
    def server_params(self) -> Mapping[str, Any]: ...

    @property
    def cookie_params(self) -> Mapping[str, str]: ...

    @property
    def query_params(self) -> Mapping[str, Any]: ...

    @property
    def uploaded_files(self) -> Mapping[str, UploadedFileInterface]: ...

    @property
    def parsed_body(self) -> Mapping[str, Any]: ...

    @property
    def attributes(self) -> Mapping[str, Any]: ...

    def with_server_params(self, params: Mapping[str, Any]) -> Self: ...

    def with_cookie_params(self, cookies: Mapping[str, str]) -> Self: ...

    def with_query_params(self, query: Mapping[str, Any]) -> Self: ...

    def with_uploaded_files(self, files: Mapping[str, UploadedFileInterface]) -> Self: ...

    def with_parsed_body(self, data: Mapping[str, Any]) -> Self: ...

    def get_attribute(self, name: str, default: Any = None) -> Any: ...

    def with_attribute(self, name: str, value: Any) -> Self: ...

    def without_attribute(self, name: str) -> Self: ...


class ResponseInterface(MessageInterface, Protocol):
    """A response with a 3-digit status code and optional reason phrase."""

    @property
    def status_code(self) -> int: ...

    @property
    def reason_phrase(self) -> str: ...

    def with_status(self, code: int, reason_phrase: str | None = None) -> Self: ...
