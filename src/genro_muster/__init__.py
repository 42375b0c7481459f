# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""genro-muster - Query string strategies for genro ASGI applications.

Main components:
    FlatStrategy: Field to scalar-or-list values, comma splitting
    FilterExpressionStrategy: ``where=id:1|2,name:Bob`` filters
    SortExpressionStrategy: ``order=id:desc,name`` sort clauses
    JoinsExpressionStrategy: ``joins=author.country`` nested join paths
    PaginationStrategy: page/per_page to limit/offset
    ActiveRecordStrategy: All clauses for a query builder
    Results: Parsed output with indifferent access and filters

Middleware:
    QueryMiddleware: Parses the query string into the ASGI scope

Usage:
    from genro_muster import ActiveRecordStrategy

    results = ActiveRecordStrategy().parse("select=id,name&order=id:desc&page=2")
    results["order"]   # ['id desc']
    results["offset"]  # 30
"""

__version__ = "0.1.0"

from .datastructures import (
    MISSING,
    QueryParams,
    Results,
    Separator,
    decode_query,
)
from .exceptions import MusterError, ResultKeyError, SeparatorError, StrategyNotFound
from .strategies import (
    STRATEGY_REGISTRY,
    ActiveRecordStrategy,
    BaseStrategy,
    FieldSelector,
    FilterExpressionStrategy,
    FlatStrategy,
    JoinsExpressionStrategy,
    PaginationStrategy,
    SortExpressionStrategy,
    ValueSplitter,
    build_strategy,
    get_strategy,
)
from .middleware import MIDDLEWARE_REGISTRY, BaseMiddleware, middleware_chain
from .middleware.parsing import QUERY, QUERY_STRING, QueryMiddleware, results_from_scope
from .config import ConfigError, find_config_file, load_config, strategies_from_config
from .types import ASGIApp, Message, Receive, Scope, Send

__all__ = [
    # Data structures
    "MISSING",
    "QueryParams",
    "Results",
    "Separator",
    "decode_query",
    # Exceptions
    "MusterError",
    "ResultKeyError",
    "SeparatorError",
    "StrategyNotFound",
    # Strategies
    "STRATEGY_REGISTRY",
    "ActiveRecordStrategy",
    "BaseStrategy",
    "FieldSelector",
    "FilterExpressionStrategy",
    "FlatStrategy",
    "JoinsExpressionStrategy",
    "PaginationStrategy",
    "SortExpressionStrategy",
    "ValueSplitter",
    "build_strategy",
    "get_strategy",
    # Middleware
    "BaseMiddleware",
    "MIDDLEWARE_REGISTRY",
    "QUERY",
    "QUERY_STRING",
    "QueryMiddleware",
    "middleware_chain",
    "results_from_scope",
    # Config
    "ConfigError",
    "find_config_file",
    "load_config",
    "strategies_from_config",
    # ASGI types
    "ASGIApp",
    "Message",
    "Receive",
    "Scope",
    "Send",
]
