# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for ActiveRecordStrategy."""

import pytest

from genro_muster.datastructures import Results
from genro_muster.strategies import ActiveRecordStrategy


@pytest.fixture
def strategy() -> ActiveRecordStrategy:
    return ActiveRecordStrategy()


class TestDefaults:
    """Every clause present, with empty defaults."""

    def test_empty_query_string(self, strategy: ActiveRecordStrategy) -> None:
        results = strategy.parse("")
        assert isinstance(results, Results)
        assert results == {
            "select": [],
            "order": [],
            "limit": 30,
            "offset": None,
            "where": {},
            "joins": {},
            "includes": {},
            "pagination": {"page": 1, "per_page": 30},
        }

    def test_all_clauses(self, strategy: ActiveRecordStrategy) -> None:
        results = strategy.parse(
            "select=id,guid,name&where=name:foop&order=id:desc&order=name"
            "&page=3&page_size=5&joins=author.country"
        )
        assert results == {
            "select": ["id", "guid", "name"],
            "order": ["id desc", "name asc"],
            "limit": 5,
            "offset": 10,
            "where": {"name": "foop"},
            "joins": [{"author": "country"}],
            "includes": [{"author": "country"}],
            "pagination": {"page": 3, "per_page": 5},
        }

    def test_includes_mirror_joins(self, strategy: ActiveRecordStrategy) -> None:
        results = strategy.parse("joins=author,activity.rule")
        assert results["joins"] == ["author", {"activity": "rule"}]
        assert results["includes"] == results["joins"]

    def test_includes_field_not_read(self, strategy: ActiveRecordStrategy) -> None:
        results = strategy.parse("includes=author")
        assert results["joins"] == {}
        assert results["includes"] == {}

    def test_empty_joins_value(self, strategy: ActiveRecordStrategy) -> None:
        assert strategy.parse("joins=")["joins"] == {}

    def test_single_select_is_list(self, strategy: ActiveRecordStrategy) -> None:
        assert strategy.parse("select=id")["select"] == ["id"]

    def test_single_order_is_list(self, strategy: ActiveRecordStrategy) -> None:
        assert strategy.parse("order=name")["order"] == ["name asc"]

    def test_where_combines_values(self, strategy: ActiveRecordStrategy) -> None:
        results = strategy.parse("where=id:1|2&where=name:Bob")
        assert results["where"] == {"id": ["1", "2"], "name": "Bob"}

    def test_ignores_unknown_fields(self, strategy: ActiveRecordStrategy) -> None:
        assert "foo" not in strategy.parse("foo=bar")

    def test_indifferent_access(self, strategy: ActiveRecordStrategy) -> None:
        results = strategy.parse("where=id:1")
        assert results.fetch("where").fetch("id") == "1"

    def test_unique_values_disabled(self) -> None:
        strategy = ActiveRecordStrategy(unique_values=False)
        assert strategy.parse("select=id&select=id")["select"] == ["id", "id"]


class TestOptions:
    """fields and default_page_size."""

    def test_default_page_size(self) -> None:
        strategy = ActiveRecordStrategy(default_page_size=50)
        assert strategy.default_page_size == 50
        results = strategy.parse("page=2")
        assert results["limit"] == 50
        assert results["offset"] == 50

    def test_default_page_size_floor(self) -> None:
        assert ActiveRecordStrategy(default_page_size=0).default_page_size == 30

    @pytest.mark.parametrize("options", [{"fields": ["select", "limit"]}, {"only": "select,limit"}])
    def test_fields(self, options: dict) -> None:
        strategy = ActiveRecordStrategy(**options)
        assert strategy.parse("select=id&page=2") == {"select": ["id"], "limit": 30}

    def test_fields_keeps_empty_defaults(self) -> None:
        strategy = ActiveRecordStrategy(fields=["where", "joins"])
        assert strategy.parse("") == {"where": {}, "joins": {}}
