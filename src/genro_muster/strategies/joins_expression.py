# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Joins expression strategy - ``joins=author.country.name,activity``.

Each expression is a dotted path, folded from the right into nested
single-key mappings. A single segment stays a plain string. The result of a
field is always a list, even for one expression.

Parsing Schema::

    "joins=activity,author.country.name"
                 ↓ decode + select
    {"joins": "activity,author.country.name"}
                 ↓ expressions (",\\s*")
    ["activity", "author.country.name"]
                 ↓ segments ("."), right fold
    {"joins": ["activity", {"author": {"country": "name"}}]}

Repeated fields: with unique_values (the default) a repeated field is reduced
to its first distinct raw value before any splitting, so
``joins=author&joins=activity`` gives ``["author"]``. Without it every raw
value is parsed and the expressions are concatenated.

Options:
    fields (str|list): Field allow-list. Aliases: field, only.
    expression_separator: Default ``,\\s*``.
    field_separator: Default ``.``.
    unique_values (bool): Default: True.
"""

from __future__ import annotations

from typing import Any

from ..datastructures import COMMA, Results, Separator
from ..types import FieldNames
from ..utils import unique
from .base import BaseStrategy

__all__ = ["JoinsExpressionStrategy"]


class JoinsExpressionStrategy(BaseStrategy):
    """Parse dotted join paths into nested mappings."""

    strategy_name = "joins_expression"

    __slots__ = ("expression_separator", "field_separator")

    def __init__(
        self,
        fields: FieldNames = None,
        *,
        field: FieldNames = None,
        only: FieldNames = None,
        expression_separator: Any = COMMA,
        field_separator: Any = ".",
        unique_values: bool = True,
    ) -> None:
        super().__init__(fields, field=field, only=only, unique_values=unique_values)
        self.expression_separator = Separator.coerce(expression_separator)
        self.field_separator = Separator.coerce(field_separator)

    def parse(self, query_string: str | bytes | None) -> Results:
        parameters = self.decode_and_select(query_string)
        for key, value in parameters.items():
            if isinstance(value, list):
                raw_values = unique(value)[:1] if self.unique_values else value
            else:
                raw_values = [value]
            parameters[key] = [node for raw in raw_values for node in self.make_nested(raw)]
        return self._finish(parameters)

    def make_nested(self, value: str) -> list[Any]:
        """Fold each path expression of value into a nested mapping."""
        nodes: list[Any] = []
        for expression in self.expression_separator.split(value):
            segments = self.field_separator.split(expression)
            if not segments:
                continue
            node: Any = segments[-1]
            for segment in reversed(segments[:-1]):
                node = {segment: node}
            nodes.append(node)
        return nodes
