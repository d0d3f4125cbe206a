"""SwiftSearch Core Engine - Search Orchestration.

The SearchEngine runs every search as two independent index queries:
a candidate query that samples up to ``candidate_cap`` matches for
facet computation, and a page query for the caller's page. Facets are
therefore approximate over the sample, and their counts need not add
up to ``total``, which always comes from the page query.

SearchService exposes the four catalog searches on top of it.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from swiftsearch_core.errors import SearchCancelled, SearchError, ValidationError
from swiftsearch_core.facets.builder import FacetBuilder, FacetResult, compute_facets
from swiftsearch_core.index.client import IndexClient, IndexResponse, PageSpec
from swiftsearch_core.index.document import Document
from swiftsearch_core.query.builder import QueryBuilder
from swiftsearch_core.query.filters import Filter
from swiftsearch_core.settings import env_bool, env_int

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATE_CAP = 1000

# Two queries per search, so this serves four searches at once.
DEFAULT_MAX_WORKERS = 8

SIMPLE_PAGE = PageSpec(limit=50, offset=0)
SYNONYM_PAGE = PageSpec(limit=50, offset=0)
FACETED_PAGE = PageSpec(limit=50, offset=0)
ENHANCED_PAGE = PageSpec(limit=10, offset=0)


@dataclass
class SearchConfig:
    """Search engine configuration.

    Attributes:
        candidate_cap: Documents sampled for facets when the caller
            does not ask for a specific sample size
        max_window: Largest candidate page; None uses the index's own
        parallel_queries: Run candidate and page queries concurrently
        max_workers: Query threads shared by all searches on the engine
        simple_page: Default page for simple search
        synonym_page: Default page for synonym search
        faceted_page: Default page for faceted search
        enhanced_page: Default page for enhanced search
    """

    candidate_cap: int = DEFAULT_CANDIDATE_CAP
    max_window: Optional[int] = None
    parallel_queries: bool = True
    max_workers: int = DEFAULT_MAX_WORKERS
    simple_page: PageSpec = SIMPLE_PAGE
    synonym_page: PageSpec = SYNONYM_PAGE
    faceted_page: PageSpec = FACETED_PAGE
    enhanced_page: PageSpec = ENHANCED_PAGE

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Load settings from SWIFTSEARCH_* environment variables."""
        return cls(
            candidate_cap=env_int("SWIFTSEARCH_CANDIDATE_CAP", DEFAULT_CANDIDATE_CAP),
            max_window=env_int("SWIFTSEARCH_MAX_WINDOW", None),
            parallel_queries=env_bool("SWIFTSEARCH_PARALLEL_QUERIES", True),
            max_workers=env_int("SWIFTSEARCH_MAX_WORKERS", DEFAULT_MAX_WORKERS),
        )


@dataclass
class SearchResponse:
    """Search result container.

    Attributes:
        total: Total matching documents, as reported by the page query
        documents: Documents in the requested page
        facets: Facets over the candidate sample
        took_ms: Wall time of the search in milliseconds
    """

    total: int = 0
    documents: List[Document] = field(default_factory=list)
    facets: FacetResult = field(default_factory=lambda: compute_facets([]))
    took_ms: float = 0.0

    def __len__(self) -> int:
        """Return number of documents in the page."""
        return len(self.documents)

    def __iter__(self):
        """Iterate over page documents."""
        yield from self.documents

    def to_dict(self) -> Dict[str, Any]:
        """Render as ``{"total", "products", "facets"}``."""
        return {
            "total": self.total,
            "products": [doc.to_dict() for doc in self.documents],
            "facets": self.facets.to_dict(),
        }


class SearchEngine:
    """Runs filters against the index and assembles responses.

    The engine holds no per-request state; one instance serves any
    number of concurrent searches.
    """

    def __init__(
        self,
        index: IndexClient,
        config: Optional[SearchConfig] = None,
        facet_builder: Optional[FacetBuilder] = None,
    ):
        """Initialize search engine.

        Args:
            index: Client for the external index
            config: Engine configuration
            facet_builder: Facet computation, default facets if None
        """
        self.index = index
        self.config = config or SearchConfig()
        self.facet_builder = facet_builder or FacetBuilder()
        self._executor: Optional[ThreadPoolExecutor] = None
        if self.config.parallel_queries:
            self._executor = ThreadPoolExecutor(
                max_workers=self.config.max_workers,
                thread_name_prefix="swiftsearch",
            )

    @property
    def max_window(self) -> int:
        if self.config.max_window is not None:
            return self.config.max_window
        return self.index.max_window

    def search(
        self,
        filter: Filter,
        page: PageSpec,
        candidate_cap: Optional[int] = None,
        cancel: Optional[threading.Event] = None,
    ) -> SearchResponse:
        """Execute a search.

        Args:
            filter: Filter to match
            page: Page of documents to return
            candidate_cap: Documents sampled for facets, config default if None
            cancel: Set by the caller to abandon the search

        Returns:
            Page documents, total match count and facets

        Raises:
            ValidationError: Negative candidate cap, or a page past the
                index result window
            SearchCancelled: The caller cancelled
            IndexUnavailable: The index could not be reached
            IndexQueryRejected: The index rejected the filter
        """
        start_time = time.time()

        if candidate_cap is None:
            candidate_cap = self.config.candidate_cap
        if isinstance(candidate_cap, bool) or not isinstance(candidate_cap, int) or candidate_cap < 0:
            raise ValidationError(f"candidate_cap must be a non-negative integer, got {candidate_cap!r}")
        candidate_page = PageSpec(limit=min(candidate_cap, self.max_window), offset=0)
        self.index.check_window(candidate_page)
        self.index.check_window(page)
        if cancel is not None and cancel.is_set():
            raise SearchCancelled("Search cancelled before it started")

        logger.debug(
            f"Searching {filter}: candidates limit={candidate_page.limit}, "
            f"page limit={page.limit} offset={page.offset}"
        )

        try:
            candidates, results = self._run_queries(filter, candidate_page, page, cancel)
        except SearchError as e:
            logger.warning(f"Search failed ({type(e).__name__}): {e}")
            raise

        facets = self.facet_builder.build(candidates.documents)
        took_ms = (time.time() - start_time) * 1000

        return SearchResponse(
            total=results.total,
            documents=list(results.documents),
            facets=facets,
            took_ms=took_ms,
        )

    def _run_queries(
        self,
        filter: Filter,
        candidate_page: PageSpec,
        page: PageSpec,
        cancel: Optional[threading.Event],
    ) -> Tuple[IndexResponse, IndexResponse]:
        """Run the candidate and page queries.

        Either failure fails the whole search. When run concurrently the
        first failure is raised without waiting for the other query.
        """
        if self._executor is None:
            candidates = self.index.execute(filter, candidate_page, cancel)
            results = self.index.execute(filter, page, cancel)
            return candidates, results

        futures: List[Future] = [
            self._executor.submit(self.index.execute, filter, candidate_page, cancel),
            self._executor.submit(self.index.execute, filter, page, cancel),
        ]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in futures:
            if future in done and future.exception() is not None:
                for other in pending:
                    other.cancel()
                raise future.exception()
        return futures[0].result(), futures[1].result()

    def close(self) -> None:
        """Release the query thread pool."""
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    def __enter__(self) -> "SearchEngine":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


def _require_keyword(keyword: Optional[str]) -> str:
    if keyword is None or not keyword.strip():
        raise ValidationError("keyword is required")
    return keyword


class SearchService:
    """Catalog search entry points.

    Each entry point builds a filter and runs it through the engine
    with its own default page:

    - simple_search: name and synonyms, 50 per page
    - synonym_search: name and synonyms, 50 per page
    - faceted_search: all filters, 50 per page
    - enhanced_search: all filters, caller's limit/offset (default 10)
    """

    def __init__(
        self,
        index: IndexClient,
        config: Optional[SearchConfig] = None,
        query_builder: Optional[QueryBuilder] = None,
    ):
        self.engine = SearchEngine(index, config)
        self.config = self.engine.config
        self.query_builder = query_builder or QueryBuilder()

    def simple_search(
        self,
        keyword: str,
        cancel: Optional[threading.Event] = None,
    ) -> SearchResponse:
        """Search name and synonyms for a keyword."""
        filter = self.query_builder.build_simple(_require_keyword(keyword))
        return self.engine.search(filter, self.config.simple_page, cancel=cancel)

    def synonym_search(
        self,
        keyword: str,
        cancel: Optional[threading.Event] = None,
    ) -> SearchResponse:
        """Search name and synonyms for a keyword, with facets."""
        filter = self.query_builder.build_simple(_require_keyword(keyword))
        return self.engine.search(filter, self.config.synonym_page, cancel=cancel)

    def faceted_search(
        self,
        keyword: Optional[str] = None,
        category: Optional[str] = None,
        brands: Optional[Iterable[str]] = None,
        colors: Optional[Iterable[str]] = None,
        price_min: Optional[float] = None,
        price_max: Optional[float] = None,
        rating_min: Optional[float] = None,
        rating_max: Optional[float] = None,
        facet_sample_size: Optional[int] = None,
        cancel: Optional[threading.Event] = None,
    ) -> SearchResponse:
        """Search with structured filters, returning the first page."""
        filter = self.query_builder.build(
            keyword=keyword,
            category=category,
            brands=brands,
            colors=colors,
            price_min=price_min,
            price_max=price_max,
            rating_min=rating_min,
            rating_max=rating_max,
        )
        return self.engine.search(
            filter,
            self.config.faceted_page,
            candidate_cap=facet_sample_size,
            cancel=cancel,
        )

    def enhanced_search(
        self,
        keyword: Optional[str] = None,
        category: Optional[str] = None,
        brands: Optional[Iterable[str]] = None,
        colors: Optional[Iterable[str]] = None,
        price_min: Optional[float] = None,
        price_max: Optional[float] = None,
        rating_min: Optional[float] = None,
        rating_max: Optional[float] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        facet_sample_size: Optional[int] = None,
        cancel: Optional[threading.Event] = None,
    ) -> SearchResponse:
        """Search with structured filters and caller-controlled paging.

        Args:
            limit: Page size, default 10
            offset: Hits to skip, default 0

        Raises:
            ValidationError: Negative limit or offset
        """
        defaults = self.config.enhanced_page
        page = PageSpec(
            limit=defaults.limit if limit is None else limit,
            offset=defaults.offset if offset is None else offset,
        )
        filter = self.query_builder.build(
            keyword=keyword,
            category=category,
            brands=brands,
            colors=colors,
            price_min=price_min,
            price_max=price_max,
            rating_min=rating_min,
            rating_max=rating_max,
        )
        return self.engine.search(
            filter,
            page,
            candidate_cap=facet_sample_size,
            cancel=cancel,
        )

    def close(self) -> None:
        self.engine.close()

    def __enter__(self) -> "SearchService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = [
    "SearchEngine",
    "SearchService",
    "SearchConfig",
    "SearchResponse",
    "DEFAULT_CANDIDATE_CAP",
    "SIMPLE_PAGE",
    "SYNONYM_PAGE",
    "FACETED_PAGE",
    "ENHANCED_PAGE",
]
