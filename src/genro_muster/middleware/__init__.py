# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Middleware package - ASGI middleware for genro-muster.

Middleware classes register themselves on definition; ``middleware_chain``
wraps an application with the enabled ones, in ``middleware_order``.
Modules in this package are imported on package import, so registering a new
middleware only takes dropping its module here.

TOML format::

    [middleware]
    query = "on"

    [query_middleware]
    strategy = "active_record"
    strategy_default_page_size = 50
"""

from __future__ import annotations

import importlib
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

MIDDLEWARE_REGISTRY: dict[str, type["BaseMiddleware"]] = {}

_ON_VALUES = frozenset({"on", "true", "yes", "1"})


class BaseMiddleware(ABC):
    """Base class for all middleware. Subclasses auto-register via __init_subclass__.

    Class attributes:
        middleware_name: Registry key and config name (default: class name).
        middleware_order: Position in the chain, lower wraps outer.
            Query parsing sits at 600.
        middleware_default: Enabled when the config does not mention it.
    """

    middleware_name: str = ""
    middleware_order: int = 500
    middleware_default: bool = False

    __slots__ = ("app",)

    def __init__(self, app: ASGIApp, **kwargs: Any) -> None:
        self.app = app

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        name = cls.middleware_name or cls.__name__
        if name in MIDDLEWARE_REGISTRY:
            raise ValueError(f"Middleware name '{name}' already registered")
        cls.middleware_name = name
        MIDDLEWARE_REGISTRY[name] = cls

    @abstractmethod
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None: ...


def _autodiscover() -> None:
    """Import the package modules so their middleware classes register."""
    for module_path in sorted(Path(__file__).parent.glob("*.py")):
        if not module_path.name.startswith("_"):
            importlib.import_module(f".{module_path.stem}", __package__)


def _switches(middleware_config: str | Iterable[str] | Mapping[str, Any] | None) -> dict[str, bool]:
    """Normalize the [middleware] section into {name: enabled}."""
    if not middleware_config:
        return {}
    if isinstance(middleware_config, str):
        names = (name.strip() for name in middleware_config.split(","))
        return {name: True for name in names if name}
    if isinstance(middleware_config, Mapping):
        return {name: _is_on(value) for name, value in middleware_config.items()}
    return {name: True for name in middleware_config}


def _is_on(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() in _ON_VALUES
    return bool(value)


def middleware_chain(
    middleware_config: str | Iterable[str] | Mapping[str, Any] | None,
    app: ASGIApp,
    full_config: Mapping[str, Any] | None = None,
) -> ASGIApp:
    """Wrap app with every enabled middleware.

    Args:
        middleware_config: ``{name: "on"|"off"|bool}``, a comma-separated
            string or a list of names. Unlisted middleware follow their
            ``middleware_default``.
        app: The innermost ASGI app.
        full_config: Whole configuration, searched for ``<name>_middleware``
            option tables.

    Returns:
        The outermost middleware, or app itself when none is enabled.
    """
    switches = _switches(middleware_config)
    enabled = sorted(
        (cls for name, cls in MIDDLEWARE_REGISTRY.items() if switches.get(name, cls.middleware_default)),
        key=lambda cls: cls.middleware_order,
    )
    # innermost first, so the lowest order ends up outermost
    for cls in reversed(enabled):
        options: Mapping[str, Any] = {}
        if full_config is not None:
            options = full_config.get(f"{cls.middleware_name}_middleware") or {}
        app = cls(app, **dict(options))
    return app


_autodiscover()
globals().update(MIDDLEWARE_REGISTRY)

__all__ = [
    "BaseMiddleware",
    "MIDDLEWARE_REGISTRY",
    "middleware_chain",
    *MIDDLEWARE_REGISTRY.keys(),
]
