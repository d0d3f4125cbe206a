"""SwiftSearch Facet Builder - Facet Computation.

Computes category counts and numeric range buckets over a sample of
documents. Pure: no I/O, no state kept between calls.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from swiftsearch_core.facets.aggregations import (
    Aggregation,
    BucketClosure,
    RangeAggregation,
    RangeBucket,
    TermsAggregation,
)
from swiftsearch_core.index.document import Document

TERM_FACETS: Tuple[str, ...] = ("brand", "color", "category")

# [lower, upper) in currency units; the last bucket is open-ended.
PRICE_BUCKETS: Tuple[RangeBucket, ...] = (
    RangeBucket("<200", 0, 200),
    RangeBucket("200-499", 200, 500),
    RangeBucket("500-999", 500, 1000),
    RangeBucket("1000-1999", 1000, 2000),
    RangeBucket(">=2000", 2000, None),
)

# (lower, upper]; the first bucket takes everything up to 2.0.
RATING_BUCKETS: Tuple[RangeBucket, ...] = (
    RangeBucket("1.0-2.0", None, 2.0, BucketClosure.RIGHT),
    RangeBucket("2.1-3.0", 2.0, 3.0, BucketClosure.RIGHT),
    RangeBucket("3.1-4.0", 3.0, 4.0, BucketClosure.RIGHT),
    RangeBucket("4.1-5.0", 4.0, 5.0, BucketClosure.RIGHT),
)

RANGE_FACETS: Tuple[Tuple[str, str, Tuple[RangeBucket, ...]], ...] = (
    ("price_ranges", "price", PRICE_BUCKETS),
    ("rating_ranges", "rating", RATING_BUCKETS),
)


@dataclass
class FacetValue:
    """A single facet value with count."""
    value: str
    count: int = 0


@dataclass
class FacetResult:
    """Result of facet computation.

    Attributes:
        terms: Facet name to label counts
        ranges: Facet name to ordered bucket counts
        missing: Facet name to documents with no value for the field
        unbucketed: Range facet name to values outside every bucket
    """

    terms: Dict[str, Dict[Any, int]] = field(default_factory=dict)
    ranges: Dict[str, List[FacetValue]] = field(default_factory=dict)
    missing: Dict[str, int] = field(default_factory=dict)
    unbucketed: Dict[str, int] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Dict[Any, int]:
        if name in self.terms:
            return self.terms[name]
        return {v.value: v.count for v in self.ranges[name]}

    def to_dict(self) -> Dict[str, Dict[Any, int]]:
        """Render as the facets section of a search response."""
        result: Dict[str, Dict[Any, int]] = {name: dict(counts) for name, counts in self.terms.items()}
        for name, values in self.ranges.items():
            result[name] = {v.value: v.count for v in values}
        return result


class FacetBuilder:
    """Builds facets from candidate documents."""

    def __init__(
        self,
        term_fields: Sequence[str] = TERM_FACETS,
        range_facets: Sequence[Tuple[str, str, Sequence[RangeBucket]]] = RANGE_FACETS,
    ):
        self.term_fields = tuple(term_fields)
        self.range_facets = tuple(range_facets)

    def _aggregations(self) -> List[Aggregation]:
        aggs: List[Aggregation] = [TermsAggregation(name, name) for name in self.term_fields]
        aggs.extend(
            RangeAggregation(name, field_name, buckets)
            for name, field_name, buckets in self.range_facets
        )
        return aggs

    def build(self, documents: Iterable[Document]) -> FacetResult:
        aggs = self._aggregations()
        for document in documents:
            for agg in aggs:
                agg.add(document.get(agg.field))

        result = FacetResult()
        for agg in aggs:
            result.missing[agg.name] = agg.missing
            if isinstance(agg, RangeAggregation):
                result.ranges[agg.name] = [
                    FacetValue(value=key, count=count) for key, count in agg.result().items()
                ]
                result.unbucketed[agg.name] = agg.unbucketed
            else:
                result.terms[agg.name] = agg.result()
        return result


_DEFAULT_BUILDER = FacetBuilder()


def compute_facets(documents: Iterable[Document]) -> FacetResult:
    """Compute brand, color, category, price and rating facets."""
    return _DEFAULT_BUILDER.build(documents)


__all__ = [
    "FacetBuilder",
    "FacetValue",
    "FacetResult",
    "compute_facets",
    "PRICE_BUCKETS",
    "RATING_BUCKETS",
    "TERM_FACETS",
]
