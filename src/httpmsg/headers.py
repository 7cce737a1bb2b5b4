"""Immutable, case-insensitive header collection."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Union

from .errors import InvalidArgumentError


HeaderValues = Union[str, int, Iterable[Union[str, int]]]
HeaderInput = Union["Headers", Mapping[str, HeaderValues], Iterable[tuple[str, HeaderValues]]]

# RFC 7230 token
_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
# visible characters, obs-text, space and tab
_VALUE_RE = re.compile(r"^[\x20\x09\x21-\x7e\x80-\xff]*$")


def validate_name(name: Any) -> str:
    if not isinstance(name, str) or not _NAME_RE.match(name):
        raise InvalidArgumentError(f"Invalid header name: {name!r}")
    return name


def validate_value(value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Header values must be strings, got {type(value).__name__}")
    value = value.strip(" \t")
    if not _VALUE_RE.match(value):
        raise InvalidArgumentError(f"Invalid header value: {value!r}")
    return value


def validate_values(values: Any) -> tuple[str, ...]:
    """Validate a non-empty sequence of header values."""
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise InvalidArgumentError(
            f"Header values must be a sequence of strings, got {type(values).__name__}"
        )
    validated = tuple(validate_value(v) for v in values)
    if not validated:
        raise InvalidArgumentError("Header values must not be empty")
    return validated


class Headers(Mapping[str, tuple[str, ...]]):
    """
    Ordered header map.

    Iteration yields names in their original casing; lookups and membership
    tests ignore case. Each name maps to a tuple of its values. Instances
    never change: ``replaced``, ``appended`` and ``removed`` return new ones.
    """

    __slots__ = ("_entries", "_index")

    def __init__(self, headers: HeaderInput | None = None):
        self._entries: dict[str, tuple[str, ...]] = {}
        self._index: dict[str, str] = {}
        if headers is None:
            return
        items = headers.items() if isinstance(headers, Mapping) else headers
        for name, values in items:
            if isinstance(values, (str, int)):
                values = (values,)
            self._add(validate_name(name), validate_values(values))

    def _add(self, name: str, values: tuple[str, ...]) -> None:
        key = name.lower()
        existing = self._index.get(key)
        if existing is None:
            self._index[key] = name
            self._entries[name] = values
        else:
            self._entries[existing] = self._entries[existing] + values

    @classmethod
    def _from_entries(cls, entries: Iterable[tuple[str, tuple[str, ...]]]) -> "Headers":
        headers = cls()
        for name, values in entries:
            headers._add(name, values)
        return headers

    def __getitem__(self, name: str) -> tuple[str, ...]:
        if not isinstance(name, str):
            raise KeyError(name)
        return self._entries[self._index[name.lower()]]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Headers({self._entries!r})"

    def line(self, name: str) -> str:
        """Return the values of ``name`` joined with ", ", or "" if absent."""
        return ", ".join(self.get(name, ()))

    def replaced(self, name: str, values: Any, *, first: bool = False) -> "Headers":
        """
        Return a copy where ``name`` (any casing) holds exactly ``values``.

        The entry is appended, or placed first when ``first`` is true.
        """
        name = validate_name(name)
        values = validate_values(values)
        key = name.lower()
        rest = [(n, v) for n, v in self._entries.items() if n.lower() != key]
        if first:
            return self._from_entries([(name, values), *rest])
        return self._from_entries([*rest, (name, values)])

    def appended(self, name: str, values: Any) -> "Headers":
        """Return a copy with ``values`` added after any existing values of ``name``."""
        name = validate_name(name)
        values = validate_values(values)
        return self._from_entries([*self._entries.items(), (name, values)])

    def removed(self, name: str) -> "Headers":
        name = validate_name(name)
        key = name.lower()
        return self._from_entries((n, v) for n, v in self._entries.items() if n.lower() != key)
