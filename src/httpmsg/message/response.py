"""Response value object."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

from ..errors import InvalidArgumentError
from ..headers import Headers
from ..interfaces import StreamInterface
from ..stream import Stream
from .base import MessageMixin, empty_body

if TYPE_CHECKING:
    from ..headers import HeaderInput


def standard_phrase(code: int) -> str:
    """Return the standard reason phrase for ``code``, or "" if it has none."""
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


def _merge_headers(defaults: dict[str, str], headers: "HeaderInput | None") -> Headers:
    merged = Headers(defaults)
    for name, values in Headers(headers).items():
        merged = merged.replaced(name, values)
    return merged


def filter_status(code: Any) -> int:
    if isinstance(code, bool) or not isinstance(code, int) or not 100 <= code <= 599:
        raise InvalidArgumentError(f"Invalid HTTP status code: {code!r}")
    return int(code)


@dataclass(frozen=True, slots=True)
class Response(MessageMixin):
    """
    An immutable response.

    Attributes:
        status_code: 3-digit status code between 100 and 599.
        reason_phrase: Reason phrase; None selects the standard phrase,
            or "" for codes without one.
        headers: Response headers.
        body: The body stream, empty by default.
        protocol_version: "1.1" by default.
    """
    status_code: int = 200
    reason_phrase: str | None = None
    headers: Headers = field(default_factory=Headers)
    body: StreamInterface = field(default_factory=empty_body)
    protocol_version: str = "1.1"

    def __post_init__(self) -> None:
        self._post_init_message()
        code = filter_status(self.status_code)
        reason = self.reason_phrase
        if reason is None:
            reason = standard_phrase(code)
        elif not isinstance(reason, str) or "\r" in reason or "\n" in reason:
            raise InvalidArgumentError(f"Invalid reason phrase: {reason!r}")
        object.__setattr__(self, "status_code", code)
        object.__setattr__(self, "reason_phrase", reason)

    def with_status(self, code: int, reason_phrase: str | None = None) -> "Response":
        """Return a copy with ``code``; an omitted phrase becomes the standard one."""
        return replace(self, status_code=code, reason_phrase=reason_phrase)

    @staticmethod
    def text(
        text: str,
        *,
        status: int = 200,
        headers: "HeaderInput | None" = None,
        encoding: str = "utf-8",
    ) -> "Response":
        body = text.encode(encoding)
        merged = _merge_headers({"Content-Type": f"text/plain; charset={encoding}"}, headers)
        return Response(status_code=status, headers=merged, body=Stream.from_bytes(body))

    @staticmethod
    def json(
        obj: Any,
        *,
        status: int = 200,
        headers: "HeaderInput | None" = None,
    ) -> "Response":
        body = json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        merged = _merge_headers({"Content-Type": "application/json; charset=utf-8"}, headers)
        return Response(status_code=status, headers=merged, body=Stream.from_bytes(body))
