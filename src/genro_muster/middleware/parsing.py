# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Query Middleware - parse the query string once per request.

Runs a strategy on ``scope["query_string"]`` and stores the parsed results in
the scope for downstream handlers. Several query middlewares can be stacked:
each one merges its results into the same accumulator, later ones overwriting
keys set by earlier ones.

Scope keys:
    ``muster.query`` (QUERY): Results accumulator.
    ``muster.query_string`` (QUERY_STRING): The raw query string.

Config:
    strategy (str): Registered strategy name. Default: "flat".
    strategy_<option>: Any strategy option, e.g. ``strategy_fields``.
    logger_name (str): Logger name. Default: "genro_muster.middleware".

Example:
    Enable in muster.toml::

        [middleware]
        query = "on"

        [query_middleware]
        strategy = "filter_expression"
        strategy_fields = ["where", "filter"]

    Or in code::

        app = QueryMiddleware(app, "sort_expression", strategy_fields="order")
        ...
        results = results_from_scope(scope)
        results.fetch("order", [])
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from genro_toolbox import extract_kwargs

from . import BaseMiddleware
from ..datastructures import Results
from ..strategies import BaseStrategy, build_strategy

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

__all__ = ["QueryMiddleware", "QUERY", "QUERY_STRING", "results_from_scope"]

QUERY = "muster.query"

QUERY_STRING = "muster.query_string"


class QueryMiddleware(BaseMiddleware):
    """Query string parsing middleware for HTTP and WebSocket requests.

    Attributes:
        strategy: The strategy instance applied to every request.
        logger: Python Logger instance.

    Class Attributes:
        middleware_name: "query" - identifier for config.
        middleware_order: 600 - business logic range, after auth.
        middleware_default: False - disabled by default.
    """

    middleware_name = "query"
    middleware_order = 600
    middleware_default = False

    __slots__ = ("strategy", "logger")

    @extract_kwargs(strategy=True)
    def __init__(
        self,
        app: ASGIApp,
        strategy: str | type[BaseStrategy] | BaseStrategy = "flat",
        strategy_kwargs: dict[str, Any] | None = None,
        logger_name: str = "genro_muster.middleware",
        **kwargs: Any,
    ) -> None:
        """Initialize query middleware.

        Args:
            app: Next ASGI application in the middleware chain.
            strategy: Strategy name, class or instance. Defaults to "flat".
            strategy_kwargs: Strategy options, also collected from
                ``strategy_<option>`` keyword arguments.
            logger_name: Name for the Python logger.
            **kwargs: Additional arguments passed to BaseMiddleware.
        """
        super().__init__(app, **kwargs)
        self.strategy = build_strategy(strategy, **(strategy_kwargs or {}))
        self.logger = logging.getLogger(logger_name)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Parse the query string into the scope, then call the next app.

        Lifespan and other non-request scopes pass through untouched.
        """
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        query_string = scope.get("query_string", b"")
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")

        results = scope.get(QUERY)
        if not isinstance(results, Results):
            results = Results(results or {})
            scope[QUERY] = results

        parsed = self.strategy.parse(query_string)
        results.merge(parsed)
        scope[QUERY_STRING] = query_string

        self.logger.debug(
            f"{self.strategy.strategy_name} ?{query_string} -> {list(parsed)}"
        )
        await self.app(scope, receive, send)


def results_from_scope(scope: Scope) -> Results:
    """Return the accumulated query results, empty when no middleware ran."""
    results = scope.get(QUERY)
    if isinstance(results, Results):
        return results
    return Results(results or {})
