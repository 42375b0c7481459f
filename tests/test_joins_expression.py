# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for JoinsExpressionStrategy."""

import re

import pytest

from genro_muster.datastructures import Results
from genro_muster.strategies import JoinsExpressionStrategy


@pytest.fixture
def strategy() -> JoinsExpressionStrategy:
    return JoinsExpressionStrategy()


class TestDefaults:
    """Default separators: ',' between expressions, '.' between segments."""

    def test_empty_query_string(self, strategy: JoinsExpressionStrategy) -> None:
        results = strategy.parse("")
        assert results == {}
        assert isinstance(results, Results)

    def test_single_segment_stays_string(self, strategy: JoinsExpressionStrategy) -> None:
        assert strategy.parse("joins=author") == {"joins": ["author"]}

    def test_nested_path(self, strategy: JoinsExpressionStrategy) -> None:
        assert strategy.parse("joins=author.country.name") == {
            "joins": [{"author": {"country": "name"}}]
        }

    def test_siblings(self, strategy: JoinsExpressionStrategy) -> None:
        assert strategy.parse("joins=activity,author.country.name") == {
            "joins": ["activity", {"author": {"country": "name"}}]
        }
        assert strategy.parse("joins=author,author.foop") == {
            "joins": ["author", {"author": "foop"}]
        }

    def test_indifferent_access(self, strategy: JoinsExpressionStrategy) -> None:
        results = strategy.parse("joins=author,activity")
        assert results["joins"][0] == "author"
        assert results["joins"][1] == "activity"

    def test_nested_mapping_access(self, strategy: JoinsExpressionStrategy) -> None:
        results = strategy.parse("joins=author.country")
        assert results["joins"][0]["author"] == "country"

    def test_discards_non_unique_values(self, strategy: JoinsExpressionStrategy) -> None:
        assert strategy.parse("joins=author&joins=author") == {"joins": ["author"]}

    def test_repeated_field_keeps_first_unique_raw_value(self, strategy: JoinsExpressionStrategy) -> None:
        """Deduplication runs on raw values, before any comma splitting."""
        assert strategy.parse("joins=author&joins=activity") == {"joins": ["author"]}
        assert strategy.parse("joins=a,b&joins=c") == {"joins": ["a", "b"]}

    def test_repeated_field_without_unique(self) -> None:
        strategy = JoinsExpressionStrategy(unique_values=False)
        assert strategy.parse("joins=author&joins=activity.rule") == {
            "joins": ["author", {"activity": "rule"}]
        }

    def test_empty_expressions_skipped(self, strategy: JoinsExpressionStrategy) -> None:
        assert strategy.parse("joins=a,,b") == {"joins": ["a", "b"]}
        assert strategy.parse("joins=") == {"joins": []}


class TestExpressionSeparator:
    """expression_separator option."""

    def test_regex(self) -> None:
        strategy = JoinsExpressionStrategy(expression_separator=re.compile(r"\|\s*"))
        assert strategy.parse("joins=author|activity") == {"joins": ["author", "activity"]}
        assert strategy.parse("joins=author|%20  activity") == {"joins": ["author", "activity"]}

    def test_string(self) -> None:
        strategy = JoinsExpressionStrategy(expression_separator="|")
        assert strategy.parse("joins=author|activity|rule") == {
            "joins": ["author", "activity", "rule"]
        }


class TestFieldSeparator:
    """field_separator option."""

    def test_regex(self) -> None:
        strategy = JoinsExpressionStrategy(field_separator=re.compile(r"\s*:\s*"))
        assert strategy.parse("joins=author:country:name") == {
            "joins": [{"author": {"country": "name"}}]
        }
        assert strategy.parse("joins=author : country") == {"joins": [{"author": "country"}]}

    def test_string(self) -> None:
        strategy = JoinsExpressionStrategy(field_separator=":")
        assert strategy.parse("joins=author:country") == {"joins": [{"author": "country"}]}


class TestFields:
    """fields option."""

    @pytest.mark.parametrize("options", [{"field": "includes"}, {"fields": "includes"}])
    def test_single_field(self, options: dict) -> None:
        strategy = JoinsExpressionStrategy(**options)
        assert strategy.parse("includes=author&joins=x") == {"includes": ["author"]}

    @pytest.mark.parametrize("fields", [["includes", "joins"], ("joins", "includes")])
    def test_multiple_fields(self, fields: object) -> None:
        strategy = JoinsExpressionStrategy(fields)
        assert strategy.parse("joins=author&includes=activity&other=x") == {
            "joins": ["author"],
            "includes": ["activity"],
        }
