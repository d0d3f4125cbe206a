"""SwiftSearch Faceted Search Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from swiftsearch_core.facets.builder import (
    FacetBuilder,
    FacetValue,
    FacetResult,
    compute_facets,
    PRICE_BUCKETS,
    RATING_BUCKETS,
    TERM_FACETS,
)
from swiftsearch_core.facets.aggregations import (
    Aggregation,
    BucketClosure,
    RangeBucket,
    TermsAggregation,
    RangeAggregation,
)

__all__ = [
    "FacetBuilder",
    "FacetValue",
    "FacetResult",
    "compute_facets",
    "PRICE_BUCKETS",
    "RATING_BUCKETS",
    "TERM_FACETS",
    "Aggregation",
    "BucketClosure",
    "RangeBucket",
    "TermsAggregation",
    "RangeAggregation",
]
