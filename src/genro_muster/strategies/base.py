# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Strategy base class and registry.

A strategy turns a raw query string into a ``Results``. Every strategy has
one public operation, ``parse(query_string)``, and holds configuration that
is resolved in ``__init__`` and never changed afterwards, so one instance can
serve any number of requests.

Subclasses register themselves in ``STRATEGY_REGISTRY`` on class creation,
keyed by ``strategy_name`` (default: class name). The query middleware and the
config loader look strategies up by that name.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from ..datastructures import Results, decode_query
from ..exceptions import StrategyNotFound
from ..types import FieldNames, QueryMapping
from .components import FieldSelector

__all__ = ["BaseStrategy", "STRATEGY_REGISTRY", "get_strategy", "build_strategy"]

STRATEGY_REGISTRY: dict[str, type["BaseStrategy"]] = {}

logger = logging.getLogger("genro_muster.strategies")


class BaseStrategy(ABC):
    """Base class for all strategies. Subclasses auto-register via __init_subclass__.

    Class attributes:
        strategy_name: Registry key (default: class name).

    Options shared by every strategy:
        fields: Field name or list of names to restrict the output to.
            ``field`` and ``only`` are accepted as aliases. Empty means all.
        unique_values: Deduplicate list values, keeping first occurrences.
    """

    strategy_name: str = ""

    __slots__ = ("fields", "unique_values", "_selector")

    def __init__(
        self,
        fields: FieldNames = None,
        *,
        field: FieldNames = None,
        only: FieldNames = None,
        unique_values: bool = True,
    ) -> None:
        selected = next((f for f in (fields, field, only) if f is not None), None)
        self._selector = FieldSelector(selected)
        self.fields: tuple[str, ...] = self._selector.names
        self.unique_values = unique_values is True

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        name = cls.strategy_name or cls.__name__
        if name in STRATEGY_REGISTRY:
            raise ValueError(f"Strategy name '{name}' already registered")
        cls.strategy_name = name
        STRATEGY_REGISTRY[name] = cls

    @abstractmethod
    def parse(self, query_string: str | bytes | None) -> Results: ...

    def decode_and_select(self, query_string: str | bytes | None) -> QueryMapping:
        """Decode the query string and keep the allowed fields only."""
        return self._selector.select(decode_query(query_string))

    def _finish(self, parameters: Mapping[str, Any]) -> Results:
        results = Results(parameters)
        logger.debug(f"{self.strategy_name}: parsed fields {list(results)}")
        return results

    def __repr__(self) -> str:
        return f"{type(self).__name__}(fields={list(self.fields)!r})"


def get_strategy(name: str) -> type[BaseStrategy]:
    """Return the strategy class registered under name.

    Raises:
        StrategyNotFound: name is not registered.
    """
    try:
        return STRATEGY_REGISTRY[name]
    except KeyError:
        raise StrategyNotFound(name, sorted(STRATEGY_REGISTRY)) from None


def build_strategy(strategy: str | type[BaseStrategy] | BaseStrategy, **options: Any) -> BaseStrategy:
    """Return a strategy instance from a name, a class or an instance.

    Args:
        strategy: Registered name, BaseStrategy subclass or ready instance.
        **options: Constructor options, not allowed with an instance.

    Raises:
        StrategyNotFound: Unknown name.
        TypeError: Options given with an instance, or unsupported strategy type.
    """
    if isinstance(strategy, BaseStrategy):
        if options:
            raise TypeError(
                f"Options {sorted(options)} cannot be applied to a {type(strategy).__name__} instance"
            )
        return strategy
    if isinstance(strategy, str):
        return get_strategy(strategy)(**options)
    if isinstance(strategy, type) and issubclass(strategy, BaseStrategy):
        return strategy(**options)
    raise TypeError(f"Expected a strategy name, class or instance, got {type(strategy).__name__}")
