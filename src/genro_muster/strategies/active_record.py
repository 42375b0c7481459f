# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""ActiveRecord-style compound strategy.

Runs one strategy per query builder clause and returns every clause, with
empty defaults for the absent ones::

    select      FlatStrategy("select")               always a list
    order       SortExpressionStrategy("order")      always a list
    where       FilterExpressionStrategy("where")    {} when absent
    joins       JoinsExpressionStrategy("joins")     {} when absent
    includes    same parse as joins, for eager loading
    pagination  PaginationStrategy                   {"page", "per_page"}
    limit       PaginationStrategy                   page size
    offset      PaginationStrategy                   None on the first page

Example::

    ActiveRecordStrategy().parse(
        "select=id,guid,name&where=name:foop&order=id:desc&order=name&page=3&page_size=5"
    )
    # select=['id', 'guid', 'name'], where={'name': 'foop'},
    # order=['id desc', 'name asc'], pagination={'page': 3, 'per_page': 5},
    # limit=5, offset=10, joins={}, includes={}
"""

from __future__ import annotations

from typing import Any

from ..datastructures import Results
from ..types import FieldNames
from ..utils import wrap_list
from .base import BaseStrategy
from .filter_expression import FilterExpressionStrategy
from .flat import FlatStrategy
from .joins_expression import JoinsExpressionStrategy
from .pagination import DEFAULT_PAGE_SIZE, PaginationStrategy
from .sort_expression import SortExpressionStrategy

__all__ = ["ActiveRecordStrategy"]


class ActiveRecordStrategy(BaseStrategy):
    """Select, order, where, joins, includes and pagination in one pass.

    Options:
        fields: Output clauses to keep. Default: all.
        default_page_size: Passed to the pagination strategy.
        unique_values: Passed to every clause strategy.
    """

    strategy_name = "active_record"

    __slots__ = ("_select", "_order", "_where", "_joins", "_pagination")

    def __init__(
        self,
        fields: FieldNames = None,
        *,
        field: FieldNames = None,
        only: FieldNames = None,
        default_page_size: Any = DEFAULT_PAGE_SIZE,
        unique_values: bool = True,
    ) -> None:
        super().__init__(fields, field=field, only=only, unique_values=unique_values)
        unique = self.unique_values
        self._select = FlatStrategy("select", unique_values=unique)
        self._order = SortExpressionStrategy("order", unique_values=unique)
        self._where = FilterExpressionStrategy("where", unique_values=unique)
        self._joins = JoinsExpressionStrategy("joins", unique_values=unique)
        self._pagination = PaginationStrategy(
            ("pagination", "limit", "offset"), default_page_size=default_page_size
        )

    @property
    def default_page_size(self) -> int:
        return self._pagination.default_page_size

    def parse(self, query_string: str | bytes | None) -> Results:
        pagination = self._pagination.parse(query_string)
        joins = self._joins.parse(query_string).get("joins")

        parameters = {
            "select": wrap_list(self._select.parse(query_string).get("select")),
            "order": wrap_list(self._order.parse(query_string).get("order")),
            "limit": pagination["limit"],
            "offset": pagination["offset"],
            "where": self._where.parse(query_string).get("where") or {},
            "joins": joins or {},
            "includes": joins or {},
            "pagination": pagination["pagination"],
        }
        return self._finish(self._selector.select(parameters))
