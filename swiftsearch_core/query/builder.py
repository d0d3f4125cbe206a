"""SwiftSearch Query Builder - Search Parameters to Filters.

Translates optional search parameters into a filter tree. Each present
parameter contributes one clause; clauses are ANDed in a fixed order:
keyword, category, brands, colors, price, rating.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence

from swiftsearch_core.errors import ValidationError
from swiftsearch_core.query.filters import (
    MATCH_ALL,
    And,
    Equals,
    Filter,
    InSet,
    MatchText,
    Or,
    Range,
    is_number,
)

logger = logging.getLogger(__name__)

# Text fields matched by the full (faceted/enhanced) searches.
MATCH_FIELDS = ("name", "description", "synonyms")

# Simple and synonym searches skip the description.
SIMPLE_MATCH_FIELDS = ("name", "synonyms")


def _present(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


def _labels(values: Optional[Iterable[Any]]) -> List[Any]:
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    return list(dict.fromkeys(v for v in values if v is not None))


def _range(field_name: str, low: Optional[float], high: Optional[float]) -> Optional[Range]:
    if low is None and high is None:
        return None
    for bound in (low, high):
        if bound is not None and not is_number(bound):
            raise ValidationError(f"{field_name} bound must be a number, got {bound!r}")
    if low is not None and high is not None and low > high:
        raise ValidationError(f"{field_name} range is empty: min {low} > max {high}")
    return Range(field_name, low, high)


class QueryBuilder:
    """Builds filters from search parameters.

    The builder holds no per-request state and can be shared.
    """

    def __init__(
        self,
        keyword_fields: Sequence[str] = MATCH_FIELDS,
        simple_keyword_fields: Sequence[str] = SIMPLE_MATCH_FIELDS,
    ):
        """Initialize builder.

        Args:
            keyword_fields: Text fields matched by build()
            simple_keyword_fields: Text fields matched by build_simple()
        """
        self.keyword_fields = tuple(keyword_fields)
        self.simple_keyword_fields = tuple(simple_keyword_fields)

    def keyword_clause(self, keyword: str, fields: Sequence[str]) -> Filter:
        """Match a keyword against any of the given text fields."""
        keyword = keyword.strip()
        return Or(*(MatchText(name, keyword) for name in fields))

    def build(
        self,
        keyword: Optional[str] = None,
        category: Optional[str] = None,
        brands: Optional[Iterable[str]] = None,
        colors: Optional[Iterable[str]] = None,
        price_min: Optional[float] = None,
        price_max: Optional[float] = None,
        rating_min: Optional[float] = None,
        rating_max: Optional[float] = None,
    ) -> Filter:
        """Build a filter from search parameters.

        Args:
            keyword: Free text matched against name, description and synonyms
            category: Exact category
            brands: Accepted brands, empty for any
            colors: Accepted colors, empty for any
            price_min: Inclusive lower price bound
            price_max: Inclusive upper price bound
            rating_min: Inclusive lower rating bound
            rating_max: Inclusive upper rating bound

        Returns:
            Filter; MATCH_ALL when no parameter applies

        Raises:
            ValidationError: A range bound is not a number, or min
                is greater than max
        """
        clauses: List[Filter] = []

        if _present(keyword):
            clauses.append(self.keyword_clause(keyword, self.keyword_fields))

        if _present(category):
            clauses.append(Equals("category", category))

        brand_values = _labels(brands)
        if brand_values:
            clauses.append(InSet("brand", brand_values))

        color_values = _labels(colors)
        if color_values:
            clauses.append(InSet("color", color_values))

        for clause in (
            _range("price", price_min, price_max),
            _range("rating", rating_min, rating_max),
        ):
            if clause is not None:
                clauses.append(clause)

        result = And(*clauses)
        logger.debug(f"Built filter: {result}")
        return result

    def build_simple(self, keyword: Optional[str]) -> Filter:
        """Build the name/synonym keyword filter used by simple search."""
        if not _present(keyword):
            return MATCH_ALL
        return self.keyword_clause(keyword, self.simple_keyword_fields)


__all__ = ["QueryBuilder", "MATCH_FIELDS", "SIMPLE_MATCH_FIELDS"]
