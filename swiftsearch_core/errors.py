"""SwiftSearch Errors - Exception Hierarchy.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations


class SearchError(Exception):
    """Base class for all search errors."""

    retryable: bool = False


class ValidationError(SearchError, ValueError):
    """Malformed or out-of-range caller input.

    Raised before any index query is issued.
    """


class IndexUnavailable(SearchError):
    """The external index could not be reached or timed out."""

    retryable = True


class IndexQueryRejected(SearchError):
    """The index adapter rejected the constructed filter.

    Signals a mismatch between the query builder and the adapter,
    not bad caller input.
    """


InvalidFilter = IndexQueryRejected


class SearchCancelled(SearchError):
    """The caller cancelled the request."""


__all__ = [
    "SearchError",
    "ValidationError",
    "IndexUnavailable",
    "IndexQueryRejected",
    "InvalidFilter",
    "SearchCancelled",
]
