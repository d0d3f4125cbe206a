"""SwiftSearch Elasticsearch Client - Remote Index Adapter.

Translates filters into the Elasticsearch query DSL and maps client
errors onto the search error taxonomy.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from elasticsearch import (
    ApiError,
    BadRequestError,
    ConnectionError as ESConnectionError,
    ConnectionTimeout,
    Elasticsearch,
    TransportError,
)

from swiftsearch_core.errors import IndexQueryRejected, IndexUnavailable
from swiftsearch_core.index.client import DEFAULT_MAX_WINDOW, IndexClient, IndexResponse, PageSpec
from swiftsearch_core.index.document import Document
from swiftsearch_core.query.executor import FilterRewriter
from swiftsearch_core.query.filters import (
    And,
    Equals,
    Filter,
    InSet,
    MatchText,
    Or,
    Range,
)
from swiftsearch_core.settings import env_bool, env_int

logger = logging.getLogger(__name__)

# Elasticsearch default for index.max_result_window.
DEFAULT_MAX_RESULT_WINDOW = 10000


@dataclass
class ElasticsearchConfig:
    """Elasticsearch connection settings.

    Attributes:
        url: Cluster URL
        index: Index holding the documents
        timeout: Request timeout in seconds
        username: Basic auth user
        password: Basic auth password
        verify_certs: Verify TLS certificates
        max_window: Largest page requested from the cluster
        max_result_window: The index.max_result_window setting of the index
    """

    url: str = "http://localhost:9200"
    index: str = "products"
    timeout: float = 5.0
    username: Optional[str] = None
    password: Optional[str] = None
    verify_certs: bool = True
    max_window: int = DEFAULT_MAX_WINDOW
    max_result_window: int = DEFAULT_MAX_RESULT_WINDOW

    @classmethod
    def from_env(cls) -> "ElasticsearchConfig":
        """Load settings from SWIFTSEARCH_ES_* environment variables."""
        return cls(
            url=os.environ.get("SWIFTSEARCH_ES_URL", cls.url),
            index=os.environ.get("SWIFTSEARCH_ES_INDEX", cls.index),
            timeout=float(os.environ.get("SWIFTSEARCH_ES_TIMEOUT", cls.timeout)),
            username=os.environ.get("SWIFTSEARCH_ES_USERNAME"),
            password=os.environ.get("SWIFTSEARCH_ES_PASSWORD"),
            verify_certs=env_bool("SWIFTSEARCH_ES_VERIFY_CERTS", cls.verify_certs),
            max_window=env_int("SWIFTSEARCH_ES_MAX_WINDOW", cls.max_window),
            max_result_window=env_int("SWIFTSEARCH_ES_MAX_RESULT_WINDOW", cls.max_result_window),
        )


def _has_text(node: Filter) -> bool:
    if isinstance(node, MatchText):
        return True
    if isinstance(node, (And, Or)):
        return any(_has_text(child) for child in node.children)
    return False


class QueryTranslator:
    """Translates filters into Elasticsearch query DSL.

    Text clauses of an And go to ``bool.must`` so they contribute to
    scoring; the rest go to ``bool.filter``.
    """

    def __init__(self):
        self._rewriter = FilterRewriter()

    def translate(self, node: Filter) -> Dict[str, Any]:
        """Translate a filter into a query body."""
        return self._translate(self._rewriter.rewrite(node))

    def _translate(self, node: Filter) -> Dict[str, Any]:
        if isinstance(node, And):
            if not node.children:
                return {"match_all": {}}
            must = [self._translate(c) for c in node.children if _has_text(c)]
            filters = [self._translate(c) for c in node.children if not _has_text(c)]
            body: Dict[str, Any] = {}
            if must:
                body["must"] = must
            if filters:
                body["filter"] = filters
            return {"bool": body}
        if isinstance(node, Or):
            if not node.children:
                return {"match_none": {}}
            return {
                "bool": {
                    "should": [self._translate(c) for c in node.children],
                    "minimum_should_match": 1,
                }
            }
        if isinstance(node, MatchText):
            return {"match": {node.field: node.term}}
        if isinstance(node, Equals):
            return {"term": {node.field: node.value}}
        if isinstance(node, InSet):
            if node.is_empty:
                return {"match_all": {}}
            return {"terms": {node.field: list(node.values)}}
        if isinstance(node, Range):
            bounds: Dict[str, Any] = {}
            if node.min is not None:
                bounds["gte"] = node.min
            if node.max is not None:
                bounds["lte"] = node.max
            return {"range": {node.field: bounds}}
        raise IndexQueryRejected(f"Cannot translate filter type: {type(node).__name__}")


class ElasticsearchIndexClient(IndexClient):
    """Index client backed by an Elasticsearch cluster."""

    def __init__(
        self,
        config: Optional[ElasticsearchConfig] = None,
        client: Optional[Elasticsearch] = None,
    ):
        """Initialize the client.

        Args:
            config: Connection settings
            client: Pre-built Elasticsearch client, built from config if None
        """
        self.config = config or ElasticsearchConfig()
        self.max_window = self.config.max_window
        self.max_result_window = self.config.max_result_window
        self._client = client if client is not None else self._connect()
        self._translator = QueryTranslator()

    def _connect(self) -> Elasticsearch:
        kwargs: Dict[str, Any] = {
            "request_timeout": self.config.timeout,
            "verify_certs": self.config.verify_certs,
        }
        if self.config.username and self.config.password:
            kwargs["basic_auth"] = (self.config.username, self.config.password)
        logger.info(f"Connecting to Elasticsearch at {self.config.url}, index {self.config.index}")
        return Elasticsearch(self.config.url, **kwargs)

    def execute(
        self,
        filter: Filter,
        page: PageSpec,
        cancel: Optional[threading.Event] = None,
    ) -> IndexResponse:
        query = self._translator.translate(filter)
        size = min(page.limit, self.max_window)
        self.check_window(page)
        self.check_cancelled(cancel)
        logger.debug(f"Elasticsearch query from={page.offset} size={size}: {query}")

        try:
            response = self._client.search(
                index=self.config.index,
                query=query,
                from_=page.offset,
                size=size,
                track_total_hits=True,
            )
        except (ESConnectionError, ConnectionTimeout) as exc:
            logger.warning(f"Elasticsearch unreachable: {type(exc).__name__}")
            raise IndexUnavailable(f"Elasticsearch unreachable at {self.config.url}") from exc
        except BadRequestError as exc:
            logger.warning(f"Elasticsearch rejected query: {query}")
            raise IndexQueryRejected(f"Elasticsearch rejected query on index {self.config.index}") from exc
        except ApiError as exc:
            logger.warning(f"Elasticsearch search failed: {type(exc).__name__}")
            raise IndexUnavailable(f"Elasticsearch search failed on index {self.config.index}") from exc
        except TransportError as exc:
            logger.warning(f"Elasticsearch transport error: {type(exc).__name__}")
            raise IndexUnavailable(f"Elasticsearch transport error at {self.config.url}") from exc

        return self._parse_response(response)

    def _parse_response(self, response: Any) -> IndexResponse:
        hits = response.get("hits", {})
        total = hits.get("total", {})
        if isinstance(total, dict):
            total = total.get("value", 0)
        documents: List[Document] = []
        for hit in hits.get("hits", []):
            source = dict(hit.get("_source") or {})
            if "id" not in source and "sku" not in source and hit.get("_id") is not None:
                source["id"] = hit["_id"]
            documents.append(Document.from_dict(source))
        return IndexResponse(total=int(total or 0), documents=documents)

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except (ApiError, TransportError) as exc:
            logger.warning(f"Elasticsearch ping failed: {type(exc).__name__}")
            return False

    def close(self) -> None:
        self._client.close()


__all__ = ["ElasticsearchConfig", "ElasticsearchIndexClient", "QueryTranslator"]
