# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Strategies package - query string grammars.

Registered strategies (``strategy_name``):
    flat: Field to scalar-or-list values, comma splitting.
    filter_expression: ``where=id:1|2,name:Bob`` → nested mappings.
    sort_expression: ``order=id:desc,name`` → ``"id desc"``, ``"name asc"``.
    joins_expression: ``joins=author.country`` → ``[{"author": "country"}]``.
    pagination: ``page``/``per_page`` → pagination, limit, offset.
    active_record: All of the above for a query builder.

Usage:
    from genro_muster.strategies import build_strategy

    strategy = build_strategy("filter_expression", fields="where")
    strategy.parse("where=id:1,id:2")  # {'where': {'id': ['1', '2']}}
"""

from .base import STRATEGY_REGISTRY, BaseStrategy, build_strategy, get_strategy
from .components import FieldSelector, ValueSplitter
from .flat import FlatStrategy
from .filter_expression import FilterExpressionStrategy
from .sort_expression import SortExpressionStrategy
from .joins_expression import JoinsExpressionStrategy
from .pagination import DEFAULT_PAGE_SIZE, PaginationStrategy
from .active_record import ActiveRecordStrategy

__all__ = [
    "ActiveRecordStrategy",
    "BaseStrategy",
    "DEFAULT_PAGE_SIZE",
    "FieldSelector",
    "FilterExpressionStrategy",
    "FlatStrategy",
    "JoinsExpressionStrategy",
    "PaginationStrategy",
    "STRATEGY_REGISTRY",
    "SortExpressionStrategy",
    "ValueSplitter",
    "build_strategy",
    "get_strategy",
]
