# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Parsed query results with indifferent key access.

Purpose
=======
Every strategy returns a ``Results``. It is a mutable mapping whose keys are
always stored as ``str``; lookups normalize the key first, so a ``str`` enum
member and its value find the same entry. Nested ``dict`` values, also inside
lists, are converted to ``Results`` on write so that nested lookups behave the
same way.

On top of the mapping protocol, ``Results`` offers the post-processing helpers
a controller typically needs before handing values to a query builder.

Definition::

    class Results(MutableMapping[str, Any]):
        __slots__ = ("_data", "_raw", "_filters")

        def __init__(self, data: Mapping[Any, Any] | None = None) -> None
        data: Mapping[Any, Any]                       # raw data given at init
        filters: dict[str, tuple[Any, dict]]          # recorded by add_filter
        def fetch(self, key, default=MISSING) -> Any
        def filter(self, key, default=MISSING, *, only=None, exclude=None) -> Any
        def add_filter(self, key, default=MISSING, *, only=None, exclude=None) -> None
        def filtered(self) -> Results
        def merge(self, other: Mapping) -> Results
        def to_dict(self) -> dict[str, Any]

Example::

    results = Results({"select": ["id", "name", "created_at"]})

    results["select"]                                   # ['id', 'name', 'created_at']
    results.filter("select", only=["id", "name"])       # ['id', 'name']
    results.filter("select", exclude="created_at")      # ['id', 'name']
    results.filter("page", 1)                           # 1
    results.filter("page")                              # ResultKeyError

    results.add_filter("select", only=["id", "name"])
    results.add_filter("page", 1)
    results.filtered()                                  # {'select': ['id', 'name'], 'page': 1}

Design Notes
============
- ``fetch``/``filter`` without default raise ``ResultKeyError`` for absent
  keys; a key holding None is present and returns None
- Equality compares contents against any Mapping
- ``filtered()`` returns ``self`` when no filter was recorded
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from ..exceptions import ResultKeyError
from ..utils import normalize_key, unique, wrap_list

__all__ = ["Results", "MISSING"]


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def _convert(value: Any) -> Any:
    """Convert nested mappings (also inside lists) to Results."""
    if isinstance(value, Results):
        return value
    if isinstance(value, Mapping):
        return Results(value)
    if isinstance(value, list):
        return [_convert(item) for item in value]
    return value


class Results(MutableMapping[str, Any]):
    """
    String-keyed result mapping with indifferent access.

    Attributes:
        data: The mapping passed to the constructor, untouched.
        filters: Filters recorded with add_filter, keyed by field name.

    Example:
        >>> results = Results({"where": {"id": "1"}})
        >>> results["where"]["id"]
        '1'
        >>> results == {"where": {"id": "1"}}
        True
    """

    __slots__ = ("_data", "_raw", "_filters")

    def __init__(self, data: Mapping[Any, Any] | None = None) -> None:
        self._raw: Mapping[Any, Any] = data if data is not None else {}
        self._data: dict[str, Any] = {}
        self._filters: dict[str, tuple[Any, dict[str, Any]]] = {}
        for key, value in self._raw.items():
            self[key] = value

    @property
    def data(self) -> Mapping[Any, Any]:
        return self._raw

    @property
    def filters(self) -> dict[str, tuple[Any, dict[str, Any]]]:
        return self._filters

    # Mapping protocol

    def __getitem__(self, key: Any) -> Any:
        return self._data[normalize_key(key)]

    def __setitem__(self, key: Any, value: Any) -> None:
        self._data[normalize_key(key)] = _convert(value)

    def __delitem__(self, key: Any) -> None:
        del self._data[normalize_key(key)]

    def __contains__(self, key: object) -> bool:
        return normalize_key(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Results):
            return self._data == other._data
        if isinstance(other, Mapping):
            if len(other) != len(self._data):
                return False
            try:
                return all(self[key] == value for key, value in other.items())
            except KeyError:
                return False
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Results({self._data!r})"

    # Accessors

    def fetch(self, key: Any, default: Any = MISSING) -> Any:
        """
        Return the value of a field.

        Args:
            key: Field name.
            default: Returned when the field is absent.

        Raises:
            ResultKeyError: Field absent and no default given.
        """
        name = normalize_key(key)
        if name in self._data:
            return self._data[name]
        if default is MISSING:
            raise ResultKeyError(name)
        return default

    def filter(
        self,
        key: Any,
        default: Any = MISSING,
        *,
        only: Any = None,
        exclude: Any = None,
    ) -> Any:
        """
        Return a field's value restricted by an inclusion or exclusion list.

        Args:
            key: Field name.
            default: Used by the plain lookup when neither only nor exclude
                is given.
            only: Allowed value or list of allowed values.
            exclude: Excluded value or list of excluded values.

        Returns:
            With ``only`` as list: the field's values found in it.
            With ``only`` as scalar: that scalar if the field holds it, else None.
            With ``exclude``: list minus excluded values, or the scalar unless
            it is excluded (then None).
            Otherwise the same as ``fetch(key, default)``.
        """
        if only is not None:
            return self._filter_only(key, only)
        if exclude is not None:
            return self._filter_excluded(key, exclude)
        return self.fetch(key, default)

    def add_filter(
        self,
        key: Any,
        default: Any = MISSING,
        *,
        only: Any = None,
        exclude: Any = None,
    ) -> None:
        """Record a filter to be applied by filtered()."""
        self._filters[normalize_key(key)] = (default, {"only": only, "exclude": exclude})

    def filtered(self) -> Results:
        """Apply every recorded filter in one pass.

        Only the filtered fields are present in the returned Results.
        """
        if not self._filters:
            return self
        return Results(
            {
                key: self.filter(key, default, **options)
                for key, (default, options) in self._filters.items()
            }
        )

    def merge(self, other: Mapping[Any, Any]) -> Results:
        """Update in place with other's entries and return self."""
        for key, value in other.items():
            self[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Plain dict copy, nested Results converted back to dicts."""
        return {key: _plain(value) for key, value in self._data.items()}

    def _filter_only(self, key: Any, allowed: Any) -> Any:
        values = wrap_list(self._data.get(normalize_key(key)))
        if isinstance(allowed, (list, tuple)):
            return unique([value for value in values if value in allowed])
        if allowed in values:
            return allowed
        return None

    def _filter_excluded(self, key: Any, excluded: Any) -> Any:
        value = self._data.get(normalize_key(key))
        excluded = wrap_list(excluded)
        if isinstance(value, list):
            return [item for item in value if item not in excluded]
        if value in excluded:
            return None
        return value


def _plain(value: Any) -> Any:
    if isinstance(value, Results):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value
