"""SwiftSearch Index Client - External Index Contract.

The core talks to the document index only through IndexClient.
Ranking, tokenization and storage belong to the implementation.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from swiftsearch_core.errors import SearchCancelled, ValidationError
from swiftsearch_core.index.document import Document
from swiftsearch_core.query.filters import Filter

# Largest result window served by default, matching the candidate cap.
DEFAULT_MAX_WINDOW = 1000


@dataclass(frozen=True)
class PageSpec:
    """Requested slice of the ranked result list.

    Attributes:
        limit: Maximum documents to return
        offset: Number of leading hits to skip
    """

    limit: int = 10
    offset: int = 0

    def __post_init__(self):
        """Reject negative or non-integer values."""
        for name in ("limit", "offset"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValidationError(f"{name} must be >= 0, got {value}")


@dataclass
class IndexResponse:
    """Result of one index query.

    Attributes:
        total: Size of the full matching set, independent of the page
        documents: Documents in the requested page, in rank order
    """

    total: int = 0
    documents: List[Document] = field(default_factory=list)


class IndexClient(ABC):
    """Abstract index client.

    Implementations raise IndexUnavailable when the index cannot be
    reached and IndexQueryRejected when a filter is not supported.
    Neither is retried here.
    """

    max_window: int = DEFAULT_MAX_WINDOW
    # Deepest hit (offset + limit) the index can page to, None if unbounded.
    max_result_window: Optional[int] = None

    @abstractmethod
    def execute(
        self,
        filter: Filter,
        page: PageSpec,
        cancel: Optional[threading.Event] = None,
    ) -> IndexResponse:
        """Execute a filter and return one page of hits.

        Args:
            filter: Filter to match
            page: Page to return
            cancel: Set by the caller to abandon the request

        Returns:
            Total match count and the page's documents
        """

    def check_cancelled(self, cancel: Optional[threading.Event]) -> None:
        """Raise SearchCancelled if the caller has cancelled."""
        if cancel is not None and cancel.is_set():
            raise SearchCancelled("Search cancelled by caller")

    def check_window(self, page: PageSpec) -> None:
        """Raise ValidationError if the page reaches past max_result_window."""
        if self.max_result_window is None:
            return
        end = page.offset + min(page.limit, self.max_window)
        if end > self.max_result_window:
            raise ValidationError(
                f"Page ends at hit {end}, past the index result window of {self.max_result_window}"
            )

    def close(self) -> None:
        pass


__all__ = ["IndexClient", "IndexResponse", "PageSpec", "DEFAULT_MAX_WINDOW"]
