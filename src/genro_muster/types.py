# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Type definitions for genro-muster.

Purpose
=======
Two families of aliases live here:

- ASGI aliases used by the query middleware to plug strategies into an ASGI
  application chain.
- Query aliases describing the shapes strategies read and produce.

Type Definitions
================

Scope, Message, Receive, Send, ASGIApp
    The usual ASGI callable and mapping shapes. ``MutableMapping`` is used for
    Scope/Message because ASGI servers are free to add extension keys.

RawValue : str | list[str]
    A decoded query value. A field appearing once yields a ``str``; a field
    repeated N>1 times yields the N values in appearance order.

QueryMapping : dict[str, RawValue]
    The decoded, ordered query string.

ResultValue
    What a strategy stores per field: ``None``, ``str``, ``int`` (pagination
    only), a list of values, or a nested mapping of the same.

Definition::

    RawValue = str | list[str]
    QueryMapping = dict[str, RawValue]
    ResultValue = Any
    FieldNames = str | Iterable[str] | None
"""

from collections.abc import Iterable
from typing import Any, Awaitable, Callable, MutableMapping

__all__ = [
    "Scope",
    "Message",
    "Receive",
    "Send",
    "ASGIApp",
    "RawValue",
    "QueryMapping",
    "ResultValue",
    "FieldNames",
]

# ASGI Scope - connection metadata
Scope = MutableMapping[str, Any]

# ASGI Message - sent/received data
Message = MutableMapping[str, Any]

Receive = Callable[[], Awaitable[Message]]

Send = Callable[[Message], Awaitable[None]]

ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]

# Decoded query value: scalar for single keys, list for repeated keys
RawValue = str | list[str]

QueryMapping = dict[str, RawValue]

# Recursive in practice: None | str | int | list[ResultValue] | Mapping[str, ResultValue]
ResultValue = Any

# Allow-list as accepted by strategy options
FieldNames = str | Iterable[Any] | None
