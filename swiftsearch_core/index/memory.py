"""SwiftSearch Memory Index - In-Process Index Client.

Holds documents in memory and answers queries with the filter
executor. Suitable for tests and small embedded catalogs.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional, Union

from swiftsearch_core.errors import IndexUnavailable
from swiftsearch_core.index.client import DEFAULT_MAX_WINDOW, IndexClient, IndexResponse, PageSpec
from swiftsearch_core.index.document import FIELD_NAMES, NUMERIC_FIELDS, Document
from swiftsearch_core.query.executor import FilterEvaluator
from swiftsearch_core.query.filters import Filter

logger = logging.getLogger(__name__)


class MemoryIndexClient(IndexClient):
    """In-memory index client.

    Hits are ordered by the number of matched text terms, best first;
    ties keep insertion order.
    """

    def __init__(
        self,
        documents: Optional[Iterable[Document]] = None,
        max_window: int = DEFAULT_MAX_WINDOW,
    ):
        """Initialize the index.

        Args:
            documents: Initial documents
            max_window: Largest page the index will serve
        """
        self.max_window = max_window
        self.available = True
        self._documents: Dict[Union[str, int], Document] = {}
        self._lock = threading.RLock()
        self._evaluator = FilterEvaluator(
            supported_fields=FIELD_NAMES,
            numeric_fields=NUMERIC_FIELDS,
        )
        if documents:
            self.add_all(documents)

    def add(self, document: Document) -> None:
        """Add or replace a document."""
        with self._lock:
            self._documents[document.id] = document

    def add_all(self, documents: Iterable[Document]) -> int:
        """Add documents, returning how many were added."""
        count = 0
        with self._lock:
            for document in documents:
                self._documents[document.id] = document
                count += 1
        logger.debug(f"Added {count} documents to memory index")
        return count

    def remove(self, doc_id: Union[str, int]) -> bool:
        """Remove a document by ID."""
        with self._lock:
            return self._documents.pop(doc_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._documents.clear()

    def get(self, doc_id: Union[str, int]) -> Optional[Document]:
        return self._documents.get(doc_id)

    def __len__(self) -> int:
        return len(self._documents)

    def execute(
        self,
        filter: Filter,
        page: PageSpec,
        cancel: Optional[threading.Event] = None,
    ) -> IndexResponse:
        self.check_cancelled(cancel)
        if not self.available:
            raise IndexUnavailable("Memory index is marked unavailable")

        with self._lock:
            snapshot: List[Document] = list(self._documents.values())

        hits = self._evaluator.select(filter, snapshot)
        limit = min(page.limit, self.max_window)
        return IndexResponse(
            total=len(hits),
            documents=hits[page.offset:page.offset + limit],
        )


__all__ = ["MemoryIndexClient"]
