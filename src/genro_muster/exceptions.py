# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Exception classes for genro-muster.

Parsing a query string never fails: malformed percent-encoding, empty input
and non-numeric pagination values all degrade to defaults. The exceptions
below cover the remaining cases, which are caller programming errors.

Module Structure
----------------
- MusterError - Common base, catch it to handle any genro-muster error
- ResultKeyError - A field was looked up on a Results without a default
- StrategyNotFound - A strategy name is not in the registry
- SeparatorError - A separator option has an unsupported type

Design Decisions
----------------
- Each concrete class also inherits the builtin that matches its meaning
  (KeyError, LookupError, TypeError), so generic ``except KeyError`` code
  keeps working.
- ResultKeyError distinguishes "absent" from "present but None": a field
  holding None is returned, never raised.

Example:
    >>> results = Results({"page": None})
    >>> results.fetch("page")          # None, present
    >>> results.fetch("select")        # raises ResultKeyError
    >>> results.fetch("select", [])    # []
"""

__all__ = ["MusterError", "ResultKeyError", "StrategyNotFound", "SeparatorError"]


class MusterError(Exception):
    """Base class for genro-muster errors."""


class ResultKeyError(MusterError, KeyError):
    """
    Field not present in a parsed Results.

    Attributes:
        key: The normalized field name that was looked up.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"'{self.key}' does not exist"


class StrategyNotFound(MusterError, LookupError):
    """
    Strategy name not found in the registry.

    Attributes:
        name: The requested strategy name.
        available: Registered names at lookup time.
    """

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        super().__init__(name)

    def __str__(self) -> str:
        known = ", ".join(self.available) or "none"
        return f"Unknown strategy '{self.name}' (registered: {known})"


class SeparatorError(MusterError, TypeError):
    """Separator option is neither a string, a pattern nor a pattern table."""
