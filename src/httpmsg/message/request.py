"""Outgoing request value object."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from typing_extensions import Self

from ..enums import HttpMethod
from ..errors import InvalidArgumentError
from ..headers import Headers
from ..interfaces import StreamInterface, UriInterface
from ..stream import Stream
from ..uri import Uri
from .base import MessageMixin, empty_body

if TYPE_CHECKING:
    from ..headers import HeaderInput


_WHITESPACE_RE = re.compile(r"\s")


def filter_method(method: Any) -> HttpMethod:
    if isinstance(method, HttpMethod):
        return method
    try:
        return HttpMethod(method)
    except ValueError as e:
        raise InvalidArgumentError(f"Unsupported HTTP method: {method!r}") from e


def filter_uri(uri: Any) -> UriInterface | None:
    if uri is None or isinstance(uri, Uri):
        return uri
    if isinstance(uri, str):
        return Uri.parse(uri)
    if all(hasattr(uri, attr) for attr in ("host", "port", "origin_form")):
        return uri
    raise InvalidArgumentError(f"Request URI must be a Uri, got {type(uri).__name__}")


def filter_target(target: Any) -> str | None:
    if target is None:
        return None
    if not isinstance(target, str) or not target or not target.isascii() or _WHITESPACE_RE.search(target):
        raise InvalidArgumentError(f"Invalid request target: {target!r}")
    return target


def host_header(uri: UriInterface) -> str:
    """The Host header value for ``uri``: its host plus any non-default port."""
    if uri.port is not None:
        return f"{uri.host}:{uri.port}"
    return uri.host


class RequestMixin(MessageMixin):
    """Method, URI and request-target operations shared by client and server requests."""

    __slots__ = ()

    if TYPE_CHECKING:
        method: HttpMethod
        uri: UriInterface | None
        target: str | None

    def _post_init_request(self) -> None:
        self._post_init_message()
        object.__setattr__(self, "method", filter_method(self.method))
        object.__setattr__(self, "uri", filter_uri(self.uri))
        object.__setattr__(self, "target", filter_target(self.target))

    @property
    def request_target(self) -> str:
        """
        The request-target sent on the request line.

        An explicit target set with ``with_request_target`` wins; otherwise
        the origin-form of the URI, or "/" without a URI.
        """
        if self.target is not None:
            return self.target
        if self.uri is None:
            return "/"
        return self.uri.origin_form

    def with_method(self, method: HttpMethod | str) -> Self:
        return replace(self, method=method)  # type: ignore[type-var]

    def with_request_target(self, target: str | None) -> Self:
        """
        Override the request-target (absolute-, authority- or asterisk-form).

        Passing None clears the override.
        """
        return replace(self, target=target)  # type: ignore[type-var]

    def with_uri(self, uri: UriInterface, *, preserve_host: bool = False) -> Self:
        """
        Return a copy targeting ``uri``.

        By default the Host header is set from ``uri`` whenever it has a host.
        With ``preserve_host`` the Host header is only filled in when it is
        missing or empty and ``uri`` has a host.
        """
        uri = filter_uri(uri)
        if uri is None:
            raise InvalidArgumentError("Request URI must not be None")
        headers = self.headers
        if uri.host:
            current = headers.line("Host")
            if not preserve_host or not current:
                headers = headers.replaced("Host", (host_header(uri),), first=True)
        return replace(self, uri=uri, headers=headers)  # type: ignore[type-var]


@dataclass(frozen=True, slots=True)
class Request(RequestMixin):
    """
    An immutable client-side request.

    Attributes:
        method: The request method.
        uri: The target URI, or None.
        headers: Request headers; any header input is normalized to Headers.
        body: The body stream, empty by default.
        protocol_version: "1.1" by default.
        target: Explicit request-target overriding the URI's origin-form.
    """
    method: HttpMethod = HttpMethod.GET
    uri: UriInterface | None = None
    headers: Headers = field(default_factory=Headers)
    body: StreamInterface = field(default_factory=empty_body)
    protocol_version: str = "1.1"
    target: str | None = None

    def __post_init__(self) -> None:
        self._post_init_request()

    @classmethod
    def build(
        cls,
        method: HttpMethod | str,
        uri: UriInterface | str,
        *,
        headers: "HeaderInput | None" = None,
        body: StreamInterface | bytes | None = None,
        protocol_version: str = "1.1",
    ) -> "Request":
        """Create a request and derive its Host header from ``uri`` unless one is given."""
        if isinstance(body, (bytes, bytearray)):
            body = Stream.from_bytes(body)
        request = cls(
            method=method,
            headers=Headers(headers),
            body=body if body is not None else empty_body(),
            protocol_version=protocol_version,
        )
        return request.with_uri(uri, preserve_host=True)
