"""
Server-side request value object.

Besides the request line, headers and body a ServerRequest carries
snapshots of the environment it was received in. None of them is derived
from another: query params may differ from the URI query and the parsed
body may not match the Content-Type. Keeping them consistent is the
caller's job.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from typing_extensions import Self

from ..enums import HttpMethod
from ..errors import InvalidArgumentError
from ..headers import Headers
from ..interfaces import StreamInterface, UploadedFileInterface, UriInterface
from .base import empty_body
from .request import RequestMixin

if TYPE_CHECKING:
    from ..headers import HeaderInput


def _empty_mapping() -> Mapping[str, Any]:
    """Return an empty read-only mapping (typed factory for dataclass fields)."""
    return MappingProxyType({})


def _snapshot(kind: str, value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise InvalidArgumentError(f"{kind} must be a mapping, got {type(value).__name__}")
    for key in value:
        if not isinstance(key, str):
            raise InvalidArgumentError(f"{kind} keys must be strings, got {key!r}")
    return MappingProxyType(dict(value))


def _filter_uploaded_files(files: Any) -> Mapping[str, UploadedFileInterface]:
    snapshot = _snapshot("Uploaded files", files)
    for name, upload in snapshot.items():
        if not isinstance(upload, UploadedFileInterface):
            raise InvalidArgumentError(
                f"Uploaded file {name!r} must be an UploadedFileInterface, got {type(upload).__name__}"
            )
    return snapshot


@dataclass(frozen=True, slots=True)
class ServerRequest(RequestMixin):
    """
    An immutable request as received by a server.

    Attributes:
        server_params: Environment snapshot captured when the request arrived.
        cookie_params: Cookies sent by the client.
        query_params: Deserialized query arguments.
        uploaded_files: Uploaded files keyed by form field name.
        parsed_body: Deserialized body parameters; empty unless set.
        attributes: Values derived from the request, e.g. routing results.
    """
    method: HttpMethod = HttpMethod.GET
    uri: UriInterface | None = None
    headers: Headers = field(default_factory=Headers)
    body: StreamInterface = field(default_factory=empty_body)
    protocol_version: str = "1.1"
    target: str | None = None
    server_params: Mapping[str, Any] = field(default_factory=_empty_mapping)
    cookie_params: Mapping[str, str] = field(default_factory=_empty_mapping)
    query_params: Mapping[str, Any] = field(default_factory=_empty_mapping)
    uploaded_files: Mapping[str, UploadedFileInterface] = field(default_factory=_empty_mapping)
    parsed_body: Mapping[str, Any] = field(default_factory=_empty_mapping)
    attributes: Mapping[str, Any] = field(default_factory=_empty_mapping)

    def __post_init__(self) -> None:
        self._post_init_request()
        object.__setattr__(self, "server_params", _snapshot("Server params", self.server_params))
        object.__setattr__(self, "cookie_params", _snapshot("Cookie params", self.cookie_params))
        object.__setattr__(self, "query_params", _snapshot("Query params", self.query_params))
        object.__setattr__(self, "uploaded_files", _filter_uploaded_files(self.uploaded_files))
        object.__setattr__(self, "parsed_body", _snapshot("Parsed body", self.parsed_body))
        object.__setattr__(self, "attributes", _snapshot("Attributes", self.attributes))

    @classmethod
    def build(
        cls,
        method: HttpMethod | str,
        uri: UriInterface | str,
        server_params: Mapping[str, Any] | None = None,
        *,
        headers: "HeaderInput | None" = None,
        body: StreamInterface | None = None,
        protocol_version: str = "1.1",
    ) -> "ServerRequest":
        """Create a server request, deriving the Host header from ``uri`` unless one is given."""
        request = cls(
            method=method,
            headers=Headers(headers),
            body=body if body is not None else empty_body(),
            protocol_version=protocol_version,
            server_params=server_params or {},
        )
        return request.with_uri(uri, preserve_host=True)

    def with_server_params(self, params: Mapping[str, Any]) -> Self:
        """Replace the whole server parameter snapshot."""
        return replace(self, server_params=params)

    def with_cookie_params(self, cookies: Mapping[str, str]) -> Self:
        return replace(self, cookie_params=cookies)

    def with_query_params(self, query: Mapping[str, Any]) -> Self:
        """Replace the query params. The URI is left as it is."""
        return replace(self, query_params=query)

    def with_uploaded_files(self, files: Mapping[str, UploadedFileInterface]) -> Self:
        return replace(self, uploaded_files=files)

    def with_parsed_body(self, data: Mapping[str, Any]) -> Self:
        return replace(self, parsed_body=data)

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def with_attribute(self, name: str, value: Any) -> Self:
        return replace(self, attributes={**self.attributes, name: value})

    def without_attribute(self, name: str) -> Self:
        return replace(self, attributes={k: v for k, v in self.attributes.items() if k != name})
