# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Filter expression strategy - ``where=id:1|2,name:Bob``.

Each field holds a set of ``key<field_separator>value`` expressions. The
value part may carry several values joined by the value separator. Repeated
keys, whether from repeated query fields or repeated expressions, are merged
into one list.

Parsing Schema::

    "where=id:1|2,name:Bob&where=id:3"
                 ↓ decode + select
    {"where": ["id:1|2,name:Bob", "id:3"]}
                 ↓ separate expressions (",\\s*")
    ["id:1|2", "name:Bob", "id:3"]
                 ↓ separate fields (":" first occurrence) and values ("|")
    {"where": {"id": ["1", "2", "3"], "name": "Bob"}}

Edge cases:
    - ``where=active`` (no field separator) → ``{"where": {"active": None}}``
    - ``where=`` → ``{"where": {}}``
    - ``where=url:http://x`` → ``{"where": {"url": "http://x"}}``

Options:
    fields (str|list): Field allow-list. Aliases: field, only.
    expression_separator: Default ``,\\s*``.
    field_separator: Default ``:``.
    value_separator: Default ``|``. None keeps values whole.
    unique_values (bool): Deduplicate merged values. Default: True.
"""

from __future__ import annotations

from typing import Any

from ..datastructures import COMMA, Results, Separator
from ..types import FieldNames
from ..utils import collapse, unique, wrap_list
from .base import BaseStrategy
from .components import ValueSplitter

__all__ = ["FilterExpressionStrategy"]


class FilterExpressionStrategy(BaseStrategy):
    """Parse ``key:value|value`` filter expressions into nested mappings."""

    strategy_name = "filter_expression"

    __slots__ = ("expression_separator", "field_separator", "value_separator", "_value_splitter")

    def __init__(
        self,
        fields: FieldNames = None,
        *,
        field: FieldNames = None,
        only: FieldNames = None,
        expression_separator: Any = COMMA,
        field_separator: Any = ":",
        value_separator: Any = "|",
        unique_values: bool = True,
    ) -> None:
        super().__init__(fields, field=field, only=only, unique_values=unique_values)
        self.expression_separator = Separator.coerce(expression_separator)
        self.field_separator = Separator.coerce(field_separator)
        # Merged values are deduplicated in separate_fields
        self._value_splitter = ValueSplitter(value_separator, unique_values=False)
        self.value_separator = self._value_splitter.separator

    def parse(self, query_string: str | bytes | None) -> Results:
        parameters = self.decode_and_select(query_string)
        for key, value in parameters.items():
            parameters[key] = self.separate_fields(self.separate_expressions(value))
        return self._finish(parameters)

    def separate_expressions(self, value: Any) -> Any:
        """Split on the expression separator; one expression collapses to a scalar."""
        expressions = [
            expression
            for item in wrap_list(value)
            for expression in self.expression_separator.split(item)
        ]
        return collapse(expressions)

    def separate_fields(self, value: Any) -> dict[str, Any]:
        """Group expressions by key, merging values of repeated keys."""
        filters: dict[str, Any] = {}
        for expression in wrap_list(value):
            if not expression:
                continue
            parts = self.field_separator.split(expression, 2)
            name = parts[0]
            field_value = parts[1] if len(parts) > 1 else None
            if field_value is not None and self.value_separator.enabled:
                field_value = self._value_splitter.split(field_value)

            if name in filters:
                field_value = _flatten(filters[name]) + _flatten(field_value)
            if self.unique_values and isinstance(field_value, list):
                field_value = unique(field_value)
            filters[name] = field_value
        return filters


def _flatten(value: Any) -> list[Any]:
    # None is kept, unlike wrap_list
    return list(value) if isinstance(value, list) else [value]
