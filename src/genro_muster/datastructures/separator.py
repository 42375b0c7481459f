# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Separator configuration for expression grammars.

Purpose
=======
Every strategy splits text on some delimiter: commas between values, ``:``
between a filter key and its values, ``.`` between join segments. A delimiter
is either a literal string or a regular expression. ``Separator`` makes that
choice explicit and is resolved once, when the strategy is built.

Split Rules::

    Separator.literal(",").split("a,b,,")     → ["a", "b"]        trailing empties dropped
    Separator.literal(",").split("")          → []
    Separator.literal(":").split("a:b:c", 2)  → ["a", "b:c"]      first occurrence only
    Separator.literal(":").split("id:", 2)    → ["id", ""]        bounded split keeps the value
    Separator.pattern(r",\\s*").split("1, 2") → ["1", "2"]
    Separator.none().split("a,b")             → ["a,b"]

Accepted option values (``Separator.coerce``)::

    +----------------------------+---------------------------+
    | Option value               | Separator                 |
    +----------------------------+---------------------------+
    | None, ""                   | disabled (no splitting)   |
    | "|"                        | literal                   |
    | re.compile(r",\\s*")        | pattern                   |
    | {"pattern": ",\\\\s*"}       | pattern (TOML friendly)   |
    | {"literal": "|"}           | literal (TOML friendly)   |
    | Separator(...)             | itself                    |
    +----------------------------+---------------------------+
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..exceptions import SeparatorError

__all__ = ["Separator", "COMMA"]


class Separator:
    """
    Literal or pattern delimiter.

    Instances are immutable and hashable, so strategies can share them.

    Attributes:
        kind: "literal", "pattern" or "none".
        source: The literal text or the pattern source.
    """

    __slots__ = ("kind", "source", "_regex")

    def __init__(self, kind: str, source: str = "", flags: int = 0) -> None:
        if kind not in ("literal", "pattern", "none"):
            raise SeparatorError(f"Unknown separator kind '{kind}'")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "source", source)
        regex = None
        if kind == "pattern":
            regex = re.compile(source, flags)
        object.__setattr__(self, "_regex", regex)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Separator is immutable")

    @classmethod
    def literal(cls, text: str) -> Separator:
        """Split on an exact string."""
        return cls("literal", text) if text else cls.none()

    @classmethod
    def pattern(cls, regex: str | re.Pattern[str]) -> Separator:
        """Split on a regular expression (string source or compiled)."""
        if isinstance(regex, re.Pattern):
            return cls("pattern", regex.pattern, regex.flags)
        return cls("pattern", regex) if regex else cls.none()

    @classmethod
    def none(cls) -> Separator:
        """Disabled separator: nothing is split."""
        return cls("none")

    @classmethod
    def coerce(cls, value: Any) -> Separator:
        """Resolve an option value into a Separator.

        Raises:
            SeparatorError: value is of an unsupported type.
        """
        if isinstance(value, Separator):
            return value
        if value is None:
            return cls.none()
        if isinstance(value, re.Pattern):
            return cls.pattern(value)
        if isinstance(value, str):
            return cls.literal(value)
        if isinstance(value, Mapping):
            if "pattern" in value:
                return cls.pattern(value["pattern"])
            if "literal" in value:
                return cls.literal(value["literal"])
        raise SeparatorError(
            f"Separator must be a string, a compiled pattern or a "
            f"{{'pattern'|'literal': ...}} table, got {type(value).__name__}"
        )

    @property
    def enabled(self) -> bool:
        return self.kind != "none"

    def split(self, text: str, maxsplit: int = 0) -> list[str]:
        """
        Split text on this separator.

        Args:
            text: Text to split.
            maxsplit: 0 splits everywhere and drops trailing empty fields;
                2 splits on the first occurrence only, keeping both parts.

        Returns:
            The fields. Empty text gives an empty list.
        """
        if not text:
            return []
        if self.kind == "none":
            return [text]
        pieces_max = maxsplit - 1 if maxsplit > 0 else 0
        if self._regex is not None:
            parts = self._regex.split(text, maxsplit=pieces_max)
        else:
            parts = text.split(self.source, pieces_max if pieces_max else -1)
        if maxsplit <= 0:
            while parts and parts[-1] == "":
                parts.pop()
        return parts

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Separator):
            return NotImplemented
        return (self.kind, self.source) == (other.kind, other.source)

    def __hash__(self) -> int:
        return hash((self.kind, self.source))

    def __repr__(self) -> str:
        if self.kind == "none":
            return "Separator.none()"
        return f"Separator.{self.kind}({self.source!r})"


COMMA = Separator.pattern(r",\s*")
