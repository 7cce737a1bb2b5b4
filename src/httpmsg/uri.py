"""
URI value object.

All normalization and validation happens in ``__post_init__`` so a ``Uri``
built directly, parsed from text or derived with ``with_*`` is always valid.
Components are stored percent-encoded; existing ``%XX`` escapes are kept as
they are so a value never gets encoded twice.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any
from urllib.parse import parse_qsl, quote, urlencode, urlsplit

from .errors import InvalidArgumentError


# Ports omitted from a URI because they are implied by its scheme.
DEFAULT_PORTS: Mapping[str, int] = MappingProxyType({
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
})

_UNRESERVED = r"A-Za-z0-9_\-.~"
_SUB_DELIMS = r"!$&'()*+,;="

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+\-.]*$")
_REG_NAME_RE = re.compile(rf"^(?:[{_UNRESERVED}{_SUB_DELIMS}]|%[A-Fa-f0-9]{{2}})*$")
# characters urlsplit would drop or strip instead of rejecting
_UNSAFE_TEXT_RE = re.compile(r"[\x00-\x1f\x7f]|^\s|\s$")


def _encoder(allowed: str) -> re.Pattern[str]:
    # a character outside ``allowed`` or a '%' that does not start an escape
    return re.compile(rf"[^{allowed}%]|%(?![A-Fa-f0-9]{{2}})")


_USER_RE = _encoder(_UNRESERVED + _SUB_DELIMS)
_PASSWORD_RE = _encoder(_UNRESERVED + _SUB_DELIMS + ":")
_PATH_RE = _encoder(_UNRESERVED + _SUB_DELIMS + ":@/")
_QUERY_RE = _encoder(_UNRESERVED + _SUB_DELIMS + ":@/?")


def _encode(pattern: re.Pattern[str], value: str) -> str:
    return pattern.sub(lambda m: quote(m.group(0), safe=""), value)


def _require_str(component: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidArgumentError(f"URI {component} must be a string, got {type(value).__name__}")
    return value


def _filter_scheme(scheme: Any) -> str:
    scheme = _require_str("scheme", scheme)
    if scheme.endswith(":"):
        scheme = scheme[:-1]
    if scheme and not _SCHEME_RE.match(scheme):
        raise InvalidArgumentError(f"Invalid URI scheme: {scheme!r}")
    return scheme.lower()


def _filter_host(host: Any) -> str:
    host = _require_str("host", host).lower()
    if host.startswith("[") and host.endswith("]"):
        try:
            ipaddress.IPv6Address(host[1:-1])
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid IPv6 host: {host!r}") from e
        return host
    if not _REG_NAME_RE.match(host):
        raise InvalidArgumentError(f"Invalid URI host: {host!r}")
    return host


def _filter_port(port: Any) -> int | None:
    if port is None:
        return None
    if isinstance(port, bool) or not isinstance(port, int):
        raise InvalidArgumentError(f"URI port must be an integer or None, got {port!r}")
    if not 1 <= port <= 65535:
        raise InvalidArgumentError(f"URI port out of range (1-65535): {port}")
    return port


def _filter_path(path: Any) -> str:
    path = _require_str("path", path)
    if "?" in path or "#" in path:
        raise InvalidArgumentError(f"URI path must not contain a query or fragment: {path!r}")
    return _encode(_PATH_RE, path)


def _filter_query(query: Any) -> str:
    query = _require_str("query", query)
    if "#" in query:
        raise InvalidArgumentError(f"URI query must not contain a fragment: {query!r}")
    return _encode(_QUERY_RE, query)


def _filter_fragment(fragment: Any) -> str:
    return _encode(_QUERY_RE, _require_str("fragment", fragment))


def _strip_marker(value: Any, marker: str) -> Any:
    if isinstance(value, str) and value.startswith(marker):
        return value[1:]
    return value


@dataclass(frozen=True, slots=True)
class Uri:
    """
    An immutable URI.

    Attributes:
        scheme: Lowercase scheme without the trailing colon, or "".
        user: Percent-encoded user name, or "".
        password: Percent-encoded password, or "". Dropped when ``user`` is empty.
        host: Lowercase host, or "". IPv6 literals keep their brackets.
        port: Port number, or None when absent or the default for ``scheme``.
        path: Percent-encoded path; may be empty, absolute or rootless.
        raw_query: Percent-encoded query string, excluding the "?" delimiter.
        fragment: Percent-encoded fragment, excluding the "#" delimiter.
    """
    scheme: str = ""
    user: str = ""
    password: str = ""
    host: str = ""
    port: int | None = None
    path: str = ""
    raw_query: str = ""
    fragment: str = ""

    def __post_init__(self) -> None:
        scheme = _filter_scheme(self.scheme)
        user = _encode(_USER_RE, _require_str("user", self.user))
        password = _encode(_PASSWORD_RE, _require_str("password", self.password)) if user else ""
        port = _filter_port(self.port)
        if port is not None and DEFAULT_PORTS.get(scheme) == port:
            port = None

        object.__setattr__(self, "scheme", scheme)
        object.__setattr__(self, "user", user)
        object.__setattr__(self, "password", password)
        object.__setattr__(self, "host", _filter_host(self.host))
        object.__setattr__(self, "port", port)
        object.__setattr__(self, "path", _filter_path(self.path))
        object.__setattr__(self, "raw_query", _filter_query(self.raw_query))
        object.__setattr__(self, "fragment", _filter_fragment(self.fragment))

    @classmethod
    def parse(cls, text: str) -> "Uri":
        """Build a Uri from its string form."""
        text = _require_str("string", text)
        if _UNSAFE_TEXT_RE.search(text):
            raise InvalidArgumentError(f"URI must not contain control characters or surrounding whitespace: {text!r}")
        try:
            parts = urlsplit(text)
            port = parts.port
        except ValueError as e:
            raise InvalidArgumentError(f"Unable to parse URI {text!r}: {e}") from e

        host = parts.hostname or ""
        if ":" in host:
            host = f"[{host}]"
        return cls(
            scheme=parts.scheme,
            user=parts.username or "",
            password=parts.password or "",
            host=host,
            port=port,
            path=parts.path,
            raw_query=parts.query,
            fragment=parts.fragment,
        )

    @property
    def user_info(self) -> str:
        if self.user and self.password:
            return f"{self.user}:{self.password}"
        return self.user

    @property
    def authority(self) -> str:
        if not self.host:
            return ""
        authority = self.host
        if self.user_info:
            authority = f"{self.user_info}@{authority}"
        if self.port is not None:
            authority = f"{authority}:{self.port}"
        return authority

    @property
    def query(self) -> Mapping[str, str]:
        """The query decoded into a read-only mapping; a repeated key keeps its last value."""
        return MappingProxyType(dict(parse_qsl(self.raw_query, keep_blank_values=True)))

    @property
    def origin_form(self) -> str:
        """The ``path?query`` form used as a default request-target."""
        target = self.path or "/"
        if self.raw_query:
            target = f"{target}?{self.raw_query}"
        return target

    def with_scheme(self, scheme: str) -> "Uri":
        return replace(self, scheme=scheme)

    def with_user_info(self, user: str, password: str | None = None) -> "Uri":
        return replace(self, user=user, password=password or "")

    def with_host(self, host: str) -> "Uri":
        return replace(self, host=host)

    def with_port(self, port: int | None) -> "Uri":
        return replace(self, port=port)

    def with_path(self, path: str) -> "Uri":
        return replace(self, path=path)

    def with_query(self, query: Mapping[str, Any]) -> "Uri":
        """Replace the query with ``query`` encoded; sequence values repeat the key."""
        if not isinstance(query, Mapping):
            raise InvalidArgumentError(f"Query must be a mapping, got {type(query).__name__}")
        return replace(self, raw_query=urlencode(query, doseq=True, quote_via=quote))

    def with_raw_query(self, query: str) -> "Uri":
        """Replace the query string; one leading "?" is taken as the delimiter."""
        return replace(self, raw_query=_strip_marker(query, "?"))

    def with_fragment(self, fragment: str) -> "Uri":
        """Replace the fragment; one leading "#" is taken as the delimiter."""
        return replace(self, fragment=_strip_marker(fragment, "#"))

    def __str__(self) -> str:
        authority = self.authority
        if authority and self.path and not self.path.startswith("/"):
            raise InvalidArgumentError("A URI with an authority must have an empty or absolute path")
        if not authority and self.path.startswith("//"):
            raise InvalidArgumentError("A URI without an authority must not have a path starting with '//'")
        if not self.scheme and not authority and ":" in self.path.split("/", 1)[0]:
            raise InvalidArgumentError("A relative reference must not have a colon in its first path segment")

        out = ""
        if self.scheme:
            out += f"{self.scheme}:"
        if authority:
            out += f"//{authority}"
        out += self.path
        if self.raw_query:
            out += f"?{self.raw_query}"
        if self.fragment:
            out += f"#{self.fragment}"
        return out
