"""SwiftSearch - Faceted Catalog Search Core.

Composes structured product filters, runs them against an external
document index and aggregates facets over a bounded candidate sample.

Architecture:
┌─────────────────────────────────────────────────────────────────────────────┐
│                             SearchService                                   │
│   simple_search · synonym_search · faceted_search · enhanced_search        │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌────────────────┐      ┌──────────────────────────────────────────┐      │
│   │ Query Builder  │ ───→ │              SearchEngine                │      │
│   │ params → Filter│      │  candidate query ──┐   page query ──┐   │      │
│   └────────────────┘      └────────────────────┼─────────────────┼───┘      │
│                                                ↓                 ↓          │
│   ┌────────────────┐      ┌──────────────────────────────────────────┐      │
│   │ Facet Builder  │ ←─── │               IndexClient                │      │
│   │ terms · ranges │      │   MemoryIndexClient · Elasticsearch      │      │
│   └────────────────┘      └──────────────────────────────────────────┘      │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Key Features:
- Immutable filter trees: text match, equality, set membership, ranges
- AND/OR composition with an identity (match-all) filter
- Facets over a bounded sample: brand, color, category counts plus
  fixed price and rating buckets
- Candidate and page queries run concurrently, failing as one
- Pluggable index clients, with in-memory and Elasticsearch adapters

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "BlackRoad OS"
__license__ = "Proprietary"

# Core engine
from swiftsearch_core.engine import (
    SearchEngine,
    SearchService,
    SearchConfig,
    SearchResponse,
    SIMPLE_PAGE,
    SYNONYM_PAGE,
    FACETED_PAGE,
    ENHANCED_PAGE,
)

# Errors
from swiftsearch_core.errors import (
    SearchError,
    ValidationError,
    IndexUnavailable,
    IndexQueryRejected,
    InvalidFilter,
    SearchCancelled,
)

# Query components
from swiftsearch_core.query import (
    Filter,
    MatchText,
    Equals,
    InSet,
    Range,
    And,
    Or,
    MATCH_ALL,
    QueryBuilder,
)

# Index components
from swiftsearch_core.index import (
    Document,
    IndexClient,
    IndexResponse,
    PageSpec,
    MemoryIndexClient,
    ElasticsearchConfig,
    ElasticsearchIndexClient,
)

# Faceted search
from swiftsearch_core.facets import (
    FacetBuilder,
    FacetResult,
    FacetValue,
    compute_facets,
)

__all__ = [
    # Version
    "__version__",
    "__author__",
    "__license__",
    # Core
    "SearchEngine",
    "SearchService",
    "SearchConfig",
    "SearchResponse",
    "SIMPLE_PAGE",
    "SYNONYM_PAGE",
    "FACETED_PAGE",
    "ENHANCED_PAGE",
    # Errors
    "SearchError",
    "ValidationError",
    "IndexUnavailable",
    "IndexQueryRejected",
    "InvalidFilter",
    "SearchCancelled",
    # Query
    "Filter",
    "MatchText",
    "Equals",
    "InSet",
    "Range",
    "And",
    "Or",
    "MATCH_ALL",
    "QueryBuilder",
    # Index
    "Document",
    "IndexClient",
    "IndexResponse",
    "PageSpec",
    "MemoryIndexClient",
    "ElasticsearchConfig",
    "ElasticsearchIndexClient",
    # Facets
    "FacetBuilder",
    "FacetResult",
    "FacetValue",
    "compute_facets",
]
