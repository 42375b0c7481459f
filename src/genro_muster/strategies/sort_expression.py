# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Sort expression strategy - ``order=id:desc,name``.

Each expression is ``name`` or ``name:direction``. Directions starting with
``desc`` (any case) become ``desc``, anything else, including a missing
direction, becomes ``asc``. Output keeps the input order.

Example::

    strategy = SortExpressionStrategy()
    strategy.parse("sort=id")                    # {'sort': 'id asc'}
    strategy.parse("sort=id:descending,name")    # {'sort': ['id desc', 'name asc']}
    strategy.parse("sort=id&sort=name&sort=id")  # {'sort': ['id asc', 'name asc']}
"""

from __future__ import annotations

import re
from typing import Any

from ..datastructures import COMMA, Results, Separator
from ..types import FieldNames
from ..utils import collapse, wrap_list
from .base import BaseStrategy
from .flat import FlatStrategy

__all__ = ["SortExpressionStrategy"]

_DESCENDING = re.compile(r"desc", re.IGNORECASE)


class SortExpressionStrategy(BaseStrategy):
    """Parse sort expressions into ``"<name> asc|desc"`` strings."""

    strategy_name = "sort_expression"

    __slots__ = ("field_separator", "_flat")

    def __init__(
        self,
        fields: FieldNames = None,
        *,
        field: FieldNames = None,
        only: FieldNames = None,
        value_separator: Any = COMMA,
        field_separator: Any = ":",
        unique_values: bool = True,
    ) -> None:
        super().__init__(fields, field=field, only=only, unique_values=unique_values)
        self.field_separator = Separator.coerce(field_separator)
        self._flat = FlatStrategy(
            self.fields, value_separator=value_separator, unique_values=self.unique_values
        )

    def parse(self, query_string: str | bytes | None) -> Results:
        parameters = self._flat.parse(query_string)
        return self._finish(
            {key: self.parse_sort_expression(value) for key, value in parameters.items()}
        )

    def parse_sort_expression(self, value: Any) -> Any:
        """Format each expression; one collapses to a scalar, none to None.

        Uniqueness applies to the raw values only, so every expression
        gives one output.
        """
        expressions = []
        for expression in wrap_list(value):
            parts = self.field_separator.split(expression, 2)
            if not parts or not parts[0]:
                continue
            direction = parts[1] if len(parts) > 1 else None
            expressions.append(f"{parts[0]} {self.parse_direction(direction)}")
        return collapse(expressions)

    @staticmethod
    def parse_direction(direction: str | None) -> str:
        return "desc" if _DESCENDING.match(direction or "") else "asc"
