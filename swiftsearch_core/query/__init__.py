"""SwiftSearch Query Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from swiftsearch_core.query.filters import (
    Filter,
    FilterType,
    MatchText,
    Equals,
    InSet,
    Range,
    And,
    Or,
    MATCH_ALL,
)
from swiftsearch_core.query.builder import (
    QueryBuilder,
    MATCH_FIELDS,
    SIMPLE_MATCH_FIELDS,
)
from swiftsearch_core.query.executor import (
    FilterEvaluator,
    FilterRewriter,
    analyze,
)

__all__ = [
    "Filter",
    "FilterType",
    "MatchText",
    "Equals",
    "InSet",
    "Range",
    "And",
    "Or",
    "MATCH_ALL",
    "QueryBuilder",
    "MATCH_FIELDS",
    "SIMPLE_MATCH_FIELDS",
    "FilterEvaluator",
    "FilterRewriter",
    "analyze",
]
