# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Building blocks owned by the strategies.

FieldSelector
    Restricts a decoded mapping to an allow-list of field names.

ValueSplitter
    Splits one field's value (scalar or list) on a separator and flattens one
    level. Splitting that produces at most one piece is a no-op, so a scalar
    never turns into a one-element list::

        ValueSplitter().split("1")          → "1"
        ValueSplitter().split("1,2")        → ["1", "2"]
        ValueSplitter().split(["1", "2,1"]) → ["1", "2"]   (unique_values)
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from ..datastructures import COMMA, Separator
from ..types import FieldNames
from ..utils import normalize_key, split_and_strip, unique, wrap_list

__all__ = ["FieldSelector", "ValueSplitter"]


class FieldSelector:
    """
    Allow-list of field names.

    Accepts a single name, a comma-separated string ("select, order"), enum
    members or any iterable of those. Names are compared as strings.

    Attributes:
        names: Allowed names in configuration order, empty for "all fields".
    """

    __slots__ = ("names", "_lookup")

    def __init__(self, fields: FieldNames = None) -> None:
        if fields is None:
            names: list[str] = []
        elif isinstance(fields, str) and not isinstance(fields, Enum):
            names = split_and_strip(fields)
        elif isinstance(fields, (bytes, Enum)):
            names = [normalize_key(fields)]
        else:
            names = [normalize_key(name) for name in fields]
        self.names: tuple[str, ...] = tuple(unique(names))
        self._lookup = frozenset(self.names)

    def __bool__(self) -> bool:
        return bool(self.names)

    def allows(self, key: Any) -> bool:
        return not self.names or normalize_key(key) in self._lookup

    def select(self, mapping: Mapping[Any, Any]) -> dict[str, Any]:
        """Return the allowed entries of mapping, in mapping order."""
        return {
            normalize_key(key): value
            for key, value in mapping.items()
            if self.allows(key)
        }


class ValueSplitter:
    """
    Separator-driven value splitting with the collapse rule.

    Args:
        separator: Separator or option value accepted by Separator.coerce.
        unique_values: Deduplicate list results, first occurrence wins.
    """

    __slots__ = ("separator", "unique_values")

    def __init__(self, separator: Any = COMMA, unique_values: bool = True) -> None:
        self.separator = Separator.coerce(separator)
        self.unique_values = unique_values

    def split(self, value: Any) -> Any:
        """
        Split value and flatten one level.

        Returns:
            The flattened list when splitting produced two or more pieces,
            otherwise value itself.
        """
        pieces = [piece for item in wrap_list(value) for piece in self._split_item(item)]
        result = pieces if len(pieces) > 1 else value
        if self.unique_values and isinstance(result, list):
            result = unique(result)
        return result

    def _split_item(self, item: Any) -> list[Any]:
        if isinstance(item, str):
            return self.separator.split(item)
        return [item]
