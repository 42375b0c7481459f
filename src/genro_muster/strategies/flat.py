# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Flat strategy - field to scalar-or-list values.

The baseline strategy: decode, keep the allowed fields, split each value on
the value separator. The other strategies reuse it, or its decode+select
stage, before applying their own grammar.

Example::

    strategy = FlatStrategy()
    strategy.parse("a=1&b=2")             # {'a': '1', 'b': '2'}
    strategy.parse("a=1&a=2&a=1")         # {'a': ['1', '2']}
    strategy.parse("a=1,+2,%20   3")      # {'a': ['1', '2', '3']}

    FlatStrategy(fields=["a"], value_separator="|").parse("a=1|2&b=3")
                                          # {'a': ['1', '2']}

Options:
    fields (str|list): Field allow-list. Aliases: field, only.
    value_separator (str|Pattern|None): Default ``,\\s*``. None disables it.
    unique_values (bool): Deduplicate list values. Default: True.
    csv (bool): Also split on commas, whatever value_separator is.
        Default: False.
"""

from __future__ import annotations

from typing import Any

from ..datastructures import COMMA, Results
from ..types import FieldNames
from .base import BaseStrategy
from .components import ValueSplitter

__all__ = ["FlatStrategy"]


class FlatStrategy(BaseStrategy):
    """Decode, select and split query values."""

    strategy_name = "flat"

    __slots__ = ("value_separator", "csv", "_splitters")

    def __init__(
        self,
        fields: FieldNames = None,
        *,
        field: FieldNames = None,
        only: FieldNames = None,
        value_separator: Any = COMMA,
        unique_values: bool = True,
        csv: bool = False,
    ) -> None:
        super().__init__(fields, field=field, only=only, unique_values=unique_values)
        value_splitter = ValueSplitter(value_separator, self.unique_values)
        self.value_separator = value_splitter.separator
        self.csv = csv is True
        splitters = [value_splitter]
        if self.csv and self.value_separator != COMMA:
            splitters.insert(0, ValueSplitter(COMMA, self.unique_values))
        self._splitters: tuple[ValueSplitter, ...] = tuple(splitters)

    def parse(self, query_string: str | bytes | None) -> Results:
        parameters = self.decode_and_select(query_string)
        for key, value in parameters.items():
            parameters[key] = self.separate_values(value)
        return self._finish(parameters)

    def separate_values(self, value: Any) -> Any:
        """Apply the configured splitters to one field's value."""
        for splitter in self._splitters:
            value = splitter.split(value)
        return value
