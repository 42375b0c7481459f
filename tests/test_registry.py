# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for the strategy registry and build_strategy."""

import pytest

from genro_muster.datastructures import Results
from genro_muster.exceptions import MusterError, StrategyNotFound
from genro_muster.strategies import (
    STRATEGY_REGISTRY,
    ActiveRecordStrategy,
    BaseStrategy,
    FilterExpressionStrategy,
    FlatStrategy,
    JoinsExpressionStrategy,
    PaginationStrategy,
    SortExpressionStrategy,
    build_strategy,
    get_strategy,
)


class TestRegistry:
    """Subclass registration."""

    @pytest.mark.parametrize(
        "name, cls",
        [
            ("flat", FlatStrategy),
            ("filter_expression", FilterExpressionStrategy),
            ("sort_expression", SortExpressionStrategy),
            ("joins_expression", JoinsExpressionStrategy),
            ("pagination", PaginationStrategy),
            ("active_record", ActiveRecordStrategy),
        ],
    )
    def test_builtin_strategies(self, name: str, cls: type) -> None:
        assert STRATEGY_REGISTRY[name] is cls
        assert get_strategy(name) is cls
        assert cls.strategy_name == name

    def test_custom_strategy_registers(self) -> None:
        try:

            class UpperStrategy(BaseStrategy):
                strategy_name = "upper"

                def parse(self, query_string):
                    return self._finish(
                        {k: v.upper() for k, v in self.decode_and_select(query_string).items()}
                    )

            assert get_strategy("upper") is UpperStrategy
            assert build_strategy("upper", fields="a").parse("a=x&b=y") == {"a": "X"}
        finally:
            STRATEGY_REGISTRY.pop("upper", None)

    def test_name_defaults_to_class_name(self) -> None:
        try:

            class Unnamed(BaseStrategy):
                def parse(self, query_string):
                    return Results()

            assert Unnamed.strategy_name == "Unnamed"
            assert STRATEGY_REGISTRY["Unnamed"] is Unnamed
        finally:
            STRATEGY_REGISTRY.pop("Unnamed", None)

    def test_duplicate_name_raises(self) -> None:
        with pytest.raises(ValueError, match="already registered"):

            class Duplicate(BaseStrategy):
                strategy_name = "flat"

                def parse(self, query_string):
                    return Results()

        assert STRATEGY_REGISTRY["flat"] is FlatStrategy

    def test_base_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            BaseStrategy()  # type: ignore[abstract]


class TestGetStrategy:
    """Lookup by name."""

    def test_unknown_name(self) -> None:
        with pytest.raises(StrategyNotFound) as exc_info:
            get_strategy("nope")
        assert exc_info.value.name == "nope"
        assert "flat" in exc_info.value.available
        assert "Unknown strategy 'nope'" in str(exc_info.value)

    def test_unknown_name_is_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            get_strategy("nope")
        with pytest.raises(MusterError):
            get_strategy("nope")


class TestBuildStrategy:
    """Instances from names, classes and instances."""

    def test_from_name(self) -> None:
        strategy = build_strategy("flat", fields="a")
        assert isinstance(strategy, FlatStrategy)
        assert strategy.fields == ("a",)

    def test_from_class(self) -> None:
        strategy = build_strategy(PaginationStrategy, default_page_size=10)
        assert isinstance(strategy, PaginationStrategy)
        assert strategy.default_page_size == 10

    def test_from_instance(self) -> None:
        strategy = SortExpressionStrategy("order")
        assert build_strategy(strategy) is strategy

    def test_instance_with_options(self) -> None:
        with pytest.raises(TypeError, match="cannot be applied"):
            build_strategy(FlatStrategy(), fields="a")

    def test_unknown_option(self) -> None:
        with pytest.raises(TypeError):
            build_strategy("flat", bogus=1)

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError, match="Expected a strategy name"):
            build_strategy(42)  # type: ignore[arg-type]

    def test_unknown_name(self) -> None:
        with pytest.raises(StrategyNotFound):
            build_strategy("nope")

    def test_repr(self) -> None:
        assert repr(FlatStrategy("a")) == "FlatStrategy(fields=['a'])"
