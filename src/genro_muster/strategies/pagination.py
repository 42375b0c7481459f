# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Pagination strategy - page/per_page to limit/offset.

Reads ``page`` and ``per_page`` (or ``page_size``) from the whole query
string, whatever the field allow-list, and computes::

    pagination = {"page": page, "per_page": page_size}
    limit      = page_size
    offset     = (page - 1) * page_size, None when it is 0

Invalid input never raises: a missing, non-numeric or non-positive page
becomes 1, and the same for the page size becomes ``default_page_size``.

Example::

    strategy = PaginationStrategy()
    strategy.parse("")
    # {'pagination': {'page': 1, 'per_page': 30}, 'limit': 30, 'offset': None}
    strategy.parse("page=3&page_size=5")
    # {'pagination': {'page': 3, 'per_page': 5}, 'limit': 5, 'offset': 10}

    PaginationStrategy(fields=["limit", "offset"]).parse("per_page=10&page=2")
    # {'limit': 10, 'offset': 10}

Options:
    fields (str|list): Output keys to keep (pagination, limit, offset).
        Aliases: field, only.
    default_page_size (int): Default: 30. Values below 1 reset to 30.
"""

from __future__ import annotations

from typing import Any

from ..datastructures import QueryParams, Results
from ..types import FieldNames
from ..utils import to_int
from .base import BaseStrategy

__all__ = ["PaginationStrategy", "DEFAULT_PAGE_SIZE"]

DEFAULT_PAGE_SIZE = 30


class PaginationStrategy(BaseStrategy):
    """Compute page, page size, limit and offset."""

    strategy_name = "pagination"

    __slots__ = ("default_page_size",)

    def __init__(
        self,
        fields: FieldNames = None,
        *,
        field: FieldNames = None,
        only: FieldNames = None,
        default_page_size: Any = DEFAULT_PAGE_SIZE,
    ) -> None:
        super().__init__(fields, field=field, only=only)
        page_size = to_int(default_page_size)
        self.default_page_size = page_size if page_size >= 1 else DEFAULT_PAGE_SIZE

    def parse(self, query_string: str | bytes | None) -> Results:
        parameters = QueryParams(query_string)

        page = self.parse_page(parameters)
        page_size = self.parse_page_size(parameters)

        offset: int | None = (page - 1) * page_size
        if offset < 1:
            offset = None

        output = {
            "pagination": {"page": page, "per_page": page_size},
            "limit": page_size,
            "offset": offset,
        }
        return self._finish(self._selector.select(output))

    def parse_page(self, parameters: QueryParams) -> int:
        page = to_int(parameters.get("page"))
        return page if page > 0 else 1

    def parse_page_size(self, parameters: QueryParams) -> int:
        key = "per_page" if "per_page" in parameters else "page_size"
        page_size = to_int(parameters.get(key))
        return page_size if page_size > 0 else self.default_page_size
