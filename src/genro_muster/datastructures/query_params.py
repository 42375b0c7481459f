# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Decoded query string with multi-value support.

Purpose
=======
First stage of every strategy: turn ``a=1&b=x+y&a=2`` into an ordered mapping
from field name to one-or-many values. Decoding never fails: ``+`` becomes a
space, percent escapes are decoded as UTF-8, and a name or value whose escapes
are malformed (``%zz``) or not valid UTF-8 (``%FF``) is kept exactly as sent.

Parsing Schema::

    Query string: "name=john&tags=python&tags=web&empty=&bad=%FF"
                        ↓
                split on "&", then on the first "="
                        ↓
    Internal dict: {
        "name": ["john"],
        "tags": ["python", "web"],
        "empty": [""],
        "bad": ["%FF"]
    }
                        ↓
    to_dict() → {"name": "john", "tags": ["python", "web"], "empty": "", "bad": "%FF"}

Definition::

    class QueryParams:
        __slots__ = ("_params",)

        def __init__(self, query_string: bytes | str | None) -> None
        def get(self, key, default: str | None = None) -> str | None
        def to_dict(self) -> dict[str, str | list[str]]

    def decode_query(query_string: bytes | str | None) -> dict[str, str | list[str]]

Design Notes
============
- Field names are case-sensitive
- Key order is first-appearance order; value order is appearance order
- Empty values are preserved (``?key=`` and ``?key`` → ``""``)
- Pairs with an empty name (``?=x``) are dropped
"""

from typing import Any
from urllib.parse import unquote_to_bytes

from ..types import QueryMapping
from ..utils import normalize_key

__all__ = ["QueryParams", "decode_query"]


def unquote_field(text: str) -> str:
    """Decode ``+`` and percent escapes, or return text unchanged if they are not UTF-8."""
    if "%" not in text:
        return text.replace("+", " ")
    try:
        return unquote_to_bytes(text.replace("+", " ")).decode("utf-8")
    except UnicodeError:
        return text


class QueryParams:
    """
    Parsed query string parameters with multi-value support.

    Example:
        >>> params = QueryParams(b"page=2&tags=python&tags=web")
        >>> params.get("page")
        '2'
        >>> "per_page" in params
        False
        >>> params.to_dict()
        {'page': '2', 'tags': ['python', 'web']}
    """

    __slots__ = ("_params",)

    def __init__(self, query_string: bytes | str | None) -> None:
        """
        Args:
            query_string: Raw query string. Bytes are decoded as Latin-1,
                None is an empty query string.
        """
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        params: dict[str, list[str]] = {}
        for pair in (query_string or "").split("&"):
            if not pair:
                continue
            name, _, value = pair.partition("=")
            if not name:
                continue
            params.setdefault(unquote_field(name), []).append(unquote_field(value))
        self._params = params

    def get(self, key: Any, default: str | None = None) -> str | None:
        """Return the first value for a parameter, or default."""
        values = self._params.get(normalize_key(key))
        return values[0] if values else default

    def to_dict(self) -> QueryMapping:
        """
        Return the decoded mapping.

        A field seen once maps to its string, a repeated field maps to the
        list of its values in appearance order.
        """
        return {
            key: values[0] if len(values) == 1 else list(values)
            for key, values in self._params.items()
        }

    def __contains__(self, key: object) -> bool:
        return normalize_key(key) in self._params

    def __repr__(self) -> str:
        return f"QueryParams({self._params!r})"


def decode_query(query_string: bytes | str | None) -> QueryMapping:
    """
    Decode a raw query string into ``{field: str | list[str]}``.

    Example:
        >>> decode_query("a=1&a=2&b=x+y")
        {'a': ['1', '2'], 'b': 'x y'}
        >>> decode_query("")
        {}
    """
    return QueryParams(query_string).to_dict()
