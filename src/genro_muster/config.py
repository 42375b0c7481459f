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

"""
Configuration utilities for genro-muster.

Strategies and the query middleware are configured from a TOML file. Every
``[strategies.<name>]`` table builds one strategy; ``type`` selects the
registered strategy and defaults to the table name. Separators are given as
plain strings (literal) or as ``{ pattern = "..." }`` tables.

Example muster.toml:
    [middleware]
    query = "on"

    [query_middleware]
    strategy = "active_record"
    strategy_default_page_size = 50

    [strategies.where]
    type = "filter_expression"
    fields = ["where"]
    value_separator = { pattern = ',\\s*' }

    [strategies.pagination]
    default_page_size = "${PAGE_SIZE:-30}"

String values may reference environment variables as ``${VAR}`` (must be
set) or ``${VAR:-default}``.

Run as a module to check a file::

    python -m genro_muster.config muster.toml --query "where=id:1|2&page=2"
"""

from __future__ import annotations

import logging
import os
import re
import sys
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .exceptions import MusterError, SeparatorError, StrategyNotFound
from .strategies import BaseStrategy, build_strategy

__all__ = ["load_config", "find_config_file", "strategies_from_config", "ConfigError"]

logger = logging.getLogger("genro_muster.config")

CONFIG_ENV = "GENRO_MUSTER_CONFIG"

CONFIG_NAME = "muster.toml"

_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::-(?P<default>[^}]*))?\}")


class ConfigError(MusterError):
    """Configuration error."""


def load_config(path: str | Path) -> dict[str, Any]:
    """
    Read a TOML configuration file.

    Args:
        path: File to read.

    Returns:
        The parsed tables, environment references expanded.

    Raises:
        ConfigError: Missing file, invalid TOML or an unset required
            environment variable.
    """
    source = Path(path)
    try:
        raw = source.read_bytes()
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {source}") from None

    try:
        config = tomllib.loads(raw.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to parse TOML {source}: {e}") from e

    logger.debug(f"Loaded configuration from {source}")
    return _expand(config)


def strategies_from_config(config: Mapping[str, Any]) -> dict[str, BaseStrategy]:
    """
    Build one strategy per ``[strategies.<name>]`` table.

    Args:
        config: Configuration mapping, as returned by load_config.

    Returns:
        Strategies keyed by table name, in file order.

    Raises:
        ConfigError: A table is not a table, names an unknown strategy type
            or carries options the strategy does not accept.
    """
    tables = config.get("strategies") or {}
    if not isinstance(tables, Mapping):
        raise ConfigError("'strategies' must be a table of strategy tables")

    strategies: dict[str, BaseStrategy] = {}
    for name, table in tables.items():
        if not isinstance(table, Mapping):
            raise ConfigError(f"Invalid strategy 'strategies.{name}': expected a table")
        options = dict(table)
        strategy_type = options.pop("type", name)
        try:
            strategies[name] = build_strategy(strategy_type, **options)
        except StrategyNotFound as e:
            raise ConfigError(f"Invalid strategy 'strategies.{name}': {e}") from e
        except (TypeError, SeparatorError) as e:
            raise ConfigError(f"Invalid options for 'strategies.{name}': {e}") from e
        logger.debug(f"Built strategy '{name}' ({strategy_type}) with {sorted(options)}")
    return strategies


def find_config_file(directory: str | Path | None = None) -> Path | None:
    """
    Locate the configuration file.

    Looks at, in order: the file named by GENRO_MUSTER_CONFIG, then
    ``muster.toml`` and ``config/muster.toml`` under directory (default:
    the working directory), then ``~/.config/genro-muster/config.toml``.

    Returns:
        The first existing file, or None.
    """
    candidates: list[Path] = []
    if os.environ.get(CONFIG_ENV):
        candidates.append(Path(os.environ[CONFIG_ENV]))
    base = Path.cwd() if directory is None else Path(directory)
    candidates += [
        base / CONFIG_NAME,
        base / "config" / CONFIG_NAME,
        Path.home() / ".config" / "genro-muster" / "config.toml",
    ]
    return next((candidate for candidate in candidates if candidate.is_file()), None)


def _expand(value: Any) -> Any:
    """Expand environment references in every string, tables and arrays included."""
    if isinstance(value, dict):
        return {key: _expand(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand(item) for item in value]
    if isinstance(value, str) and "${" in value:
        return _ENV_REFERENCE.sub(_env_value, value)
    return value


def _env_value(match: re.Match[str]) -> str:
    name, default = match.group("name"), match.group("default")
    if name in os.environ:
        return os.environ[name]
    if default is None:
        raise ConfigError(f"Required environment variable not set: {name}")
    return default


def main(argv: list[str] | None = None) -> int:
    """Load a configuration and print what each strategy makes of a query."""
    import argparse
    import json

    parser = argparse.ArgumentParser(
        prog="python -m genro_muster.config",
        description="Load a genro-muster configuration and parse a query string",
    )
    parser.add_argument("config", nargs="?", help=f"Config file (default: search for {CONFIG_NAME})")
    parser.add_argument("--query", default="", help="Query string to parse with each strategy")
    args = parser.parse_args(argv)

    path = Path(args.config) if args.config else find_config_file()
    if path is None:
        print("No configuration file found", file=sys.stderr)
        return 1

    try:
        strategies = strategies_from_config(load_config(path))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"# {path}")
    for name, strategy in strategies.items():
        print(f"[{name}] {strategy!r}")
        print(json.dumps(strategy.parse(args.query).to_dict(), indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
