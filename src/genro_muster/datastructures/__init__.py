# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Data structures shared by every strategy.

Mapping from query data to genro-muster classes::

    Raw data                               genro-muster Classes
    ─────────────────                      ──────────────────
    scope["query_string"] = b"a=1&a=2"     →  QueryParams (decoded, multi-value)
    ",\\s*" / ":" / "."                     →  Separator (literal or pattern)
    strategy output                        →  Results (indifferent access)

Public Exports
==============
::

    from genro_muster.datastructures import (
        QueryParams,
        Results,
        Separator,
        decode_query,
    )

Modules
=======
- ``query_params``: Decoded query string parameters
- ``separator``: Literal/pattern delimiters with split rules
- ``results``: Parsed results container
"""

from .query_params import QueryParams, decode_query
from .results import MISSING, Results
from .separator import COMMA, Separator

__all__ = [
    "COMMA",
    "MISSING",
    "QueryParams",
    "Results",
    "Separator",
    "decode_query",
]
