# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Utility helpers for genro-muster.

Exports:
    split_and_strip: Split comma-separated string and strip whitespace.
    normalize_key: Canonical string form of a field name.
    wrap_list: Coerce a value into a list (None -> [], scalar -> [scalar]).
    unique: Order-preserving deduplication.
    collapse: One-element list -> its element.
    to_int: Leading-integer coercion used by pagination.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

__all__ = [
    "split_and_strip",
    "normalize_key",
    "wrap_list",
    "unique",
    "collapse",
    "to_int",
]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def split_and_strip(
    value: str | list[str] | None, default: list[str] | None = None
) -> list[str]:
    """Split comma-separated string and strip whitespace from each item.

    If value is already a list, returns a copy. If None, returns default.
    Empty items are dropped.

    Examples:
        split_and_strip("a, b, c")  # ["a", "b", "c"]
        split_and_strip(["x", "y"])  # ["x", "y"]
        split_and_strip(None, ["default"])  # ["default"]
    """
    if value is None:
        return default if default is not None else []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return list(value)


def normalize_key(key: Any) -> str:
    """Return the canonical string form of a field name.

    Strings pass through, enum members use their string value (or their name),
    bytes are decoded as Latin-1 like the rest of the ASGI layer.

    Examples:
        normalize_key("select")        # "select"
        normalize_key(Field.SELECT)    # "select" for a str-valued enum
        normalize_key(b"page")         # "page"
    """
    if isinstance(key, str) and not isinstance(key, Enum):
        return key
    if isinstance(key, Enum):
        return key.value if isinstance(key.value, str) else key.name
    if isinstance(key, bytes):
        return key.decode("latin-1")
    return str(key)


def wrap_list(value: Any) -> list[Any]:
    """Coerce value into a list.

    None becomes an empty list, lists and tuples are copied, anything else is
    wrapped in a one-element list. Strings and mappings are never iterated.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def unique(values: list[Any]) -> list[Any]:
    """Deduplicate values keeping the first occurrence of each.

    Works with unhashable items (nested mappings) by falling back to
    equality comparison.
    """
    result: list[Any] = []
    seen: set[Any] = set()
    for value in values:
        try:
            if value in seen:
                continue
            seen.add(value)
        except TypeError:
            if value in result:
                continue
        result.append(value)
    return result


def collapse(values: list[Any]) -> Any:
    """Collapse rule: [] -> None, [x] -> x, otherwise the list itself."""
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return values


def to_int(value: Any) -> int:
    """Read a leading integer from value, 0 when there is none.

    Lists use their first element. Parsing stops at the first non-digit, so
    "12abc" is 12, "5.7" is 5 and "abc" is 0.
    """
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0
