"""SwiftSearch Index Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from swiftsearch_core.index.document import Document
from swiftsearch_core.index.client import (
    IndexClient,
    IndexResponse,
    PageSpec,
    DEFAULT_MAX_WINDOW,
)
from swiftsearch_core.index.memory import MemoryIndexClient
from swiftsearch_core.index.elastic import (
    ElasticsearchConfig,
    ElasticsearchIndexClient,
    QueryTranslator,
)

__all__ = [
    "Document",
    "IndexClient",
    "IndexResponse",
    "PageSpec",
    "DEFAULT_MAX_WINDOW",
    "MemoryIndexClient",
    "ElasticsearchConfig",
    "ElasticsearchIndexClient",
    "QueryTranslator",
]
