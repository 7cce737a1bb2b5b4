"""
Behaviour shared by every message value object.

``MessageMixin`` is mixed into frozen dataclasses that declare
``protocol_version``, ``headers`` and ``body`` fields. Every ``with_*``
method goes through ``dataclasses.replace`` so the new instance runs the
same validation as a freshly constructed one.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from typing_extensions import Self

from ..errors import InvalidArgumentError
from ..headers import Headers
from ..interfaces import StreamInterface
from ..stream import Stream

if TYPE_CHECKING:
    from ..headers import HeaderInput


_VERSION_RE = re.compile(r"^\d(?:\.\d)?$")


def empty_body() -> Stream:
    """Return a fresh, empty in-memory body (typed factory for dataclass fields)."""
    return Stream.from_bytes(b"")


def filter_protocol_version(version: Any) -> str:
    if not isinstance(version, str) or not _VERSION_RE.match(version):
        raise InvalidArgumentError(f"Invalid HTTP protocol version: {version!r}")
    return version


def filter_headers(headers: "HeaderInput | None") -> Headers:
    if isinstance(headers, Headers):
        return headers
    return Headers(headers)


def filter_body(body: Any) -> StreamInterface:
    if not isinstance(body, StreamInterface):
        raise InvalidArgumentError(f"Message body must be a StreamInterface, got {type(body).__name__}")
    return body


class MessageMixin:
    """Header, body and protocol version operations."""

    __slots__ = ()

    if TYPE_CHECKING:
        protocol_version: str
        headers: Headers
        body: StreamInterface

    def _post_init_message(self) -> None:
        object.__setattr__(self, "protocol_version", filter_protocol_version(self.protocol_version))
        object.__setattr__(self, "headers", filter_headers(self.headers))
        object.__setattr__(self, "body", filter_body(self.body))

    def has_header(self, name: str) -> bool:
        """Case-insensitive check for a header."""
        return name in self.headers

    def get_header(self, name: str) -> tuple[str, ...]:
        """Return the values of ``name``, or an empty tuple if absent."""
        return self.headers.get(name, ())

    def get_header_line(self, name: str) -> str:
        """Return the values of ``name`` joined with ", ", or "" if absent."""
        return self.headers.line(name)

    def with_protocol_version(self, version: str) -> Self:
        return replace(self, protocol_version=version)  # type: ignore[type-var]

    def with_header(self, name: str, values: Any) -> Self:
        """Replace every casing variant of ``name`` with ``values``."""
        return replace(self, headers=self.headers.replaced(name, values))  # type: ignore[type-var]

    def with_header_line(self, name: str, value: str) -> Self:
        return self.with_header(name, (value,))

    def with_added_header(self, name: str, values: Any) -> Self:
        """Append ``values`` to ``name``, keeping existing values and casing."""
        return replace(self, headers=self.headers.appended(name, values))  # type: ignore[type-var]

    def with_added_header_line(self, name: str, value: str) -> Self:
        return self.with_added_header(name, (value,))

    def without_header(self, name: str) -> Self:
        return replace(self, headers=self.headers.removed(name))  # type: ignore[type-var]

    def with_body(self, body: StreamInterface) -> Self:
        return replace(self, body=body)  # type: ignore[type-var]
