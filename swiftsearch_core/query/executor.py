"""SwiftSearch Filter Executor - In-Process Filter Evaluation.

Rewrites filter trees into a simplified canonical form and evaluates
them against documents. Index adapters that hold documents in process
use this; remote adapters only need the rewriter.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Callable, Collection, Iterable, List, Optional

from swiftsearch_core.errors import IndexQueryRejected
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

if TYPE_CHECKING:
    from swiftsearch_core.index.document import Document

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"[^\W_]+", re.UNICODE)


def analyze(text: Any) -> List[str]:
    """Analyze text into tokens.

    Lowercases and breaks on every non-alphanumeric character, so
    "Standing-Desk" yields "standing" and "desk". Sequences are
    analyzed item by item.
    """
    if text is None:
        return []
    if isinstance(text, (list, tuple, set, frozenset)):
        tokens: List[str] = []
        for item in text:
            tokens.extend(analyze(item))
        return tokens
    return TOKEN_PATTERN.findall(str(text).lower())


def _is_multi_valued(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


class FilterRewriter:
    """Rewrites filters into a simplified equivalent form.

    - Empty InSet nodes become MATCH_ALL
    - Nested And/Or nodes of the same kind are flattened
    - MATCH_ALL children are dropped from And, and absorb an Or
    - Single-child And/Or nodes are replaced by the child
    """

    def rewrite(self, node: Filter) -> Filter:
        """Rewrite a filter.

        Args:
            node: Original filter

        Returns:
            Equivalent, simplified filter
        """
        if isinstance(node, InSet) and node.is_empty:
            return MATCH_ALL
        if isinstance(node, And):
            return self._rewrite_and(node)
        if isinstance(node, Or):
            return self._rewrite_or(node)
        return node

    def _rewrite_and(self, node: And) -> Filter:
        children: List[Filter] = []
        for child in node.children:
            child = self.rewrite(child)
            if isinstance(child, And):
                # MATCH_ALL flattens to nothing
                children.extend(child.children)
            else:
                children.append(child)
        if len(children) == 1:
            return children[0]
        return And(*children)

    def _rewrite_or(self, node: Or) -> Filter:
        children: List[Filter] = []
        for child in node.children:
            child = self.rewrite(child)
            if child == MATCH_ALL:
                return MATCH_ALL
            if isinstance(child, Or):
                children.extend(child.children)
            else:
                children.append(child)
        if len(children) == 1:
            return children[0]
        return Or(*children)


class FilterEvaluator:
    """Evaluates filters against documents.

    Absent field values never satisfy a leaf predicate: a document
    with no price is outside every price range.
    """

    def __init__(
        self,
        analyzer: Callable[[Any], List[str]] = analyze,
        supported_fields: Optional[Collection[str]] = None,
        numeric_fields: Optional[Collection[str]] = None,
    ):
        """Initialize evaluator.

        Args:
            analyzer: Text analyzer for MatchText
            supported_fields: Fields a filter may reference, None for any
            numeric_fields: Fields a Range may reference, None for any
        """
        self.analyzer = analyzer
        self.supported_fields = (
            frozenset(supported_fields) if supported_fields is not None else None
        )
        self.numeric_fields = (
            frozenset(numeric_fields) if numeric_fields is not None else None
        )
        self._rewriter = FilterRewriter()

    def prepare(self, node: Filter) -> Filter:
        """Validate and rewrite a filter before evaluation.

        Raises:
            IndexQueryRejected: The filter references an unsupported field
                or ranges over a non-numeric one
        """
        self._check(node)
        return self._rewriter.rewrite(node)

    def _check(self, node: Filter) -> None:
        if isinstance(node, (And, Or)):
            for child in node.children:
                self._check(child)
            return
        field_name = node.fields()[0]
        if self.supported_fields is not None and field_name not in self.supported_fields:
            raise IndexQueryRejected(f"Unsupported field: {field_name}")
        if isinstance(node, Range):
            if self.numeric_fields is not None and field_name not in self.numeric_fields:
                raise IndexQueryRejected(f"Range over non-numeric field: {field_name}")
            for bound in (node.min, node.max):
                if bound is not None and not is_number(bound):
                    raise IndexQueryRejected(f"Non-numeric range bound on {field_name}: {bound!r}")

    def matches(self, node: Filter, document: Document) -> bool:
        """Check whether a document satisfies a filter."""
        if isinstance(node, And):
            return all(self.matches(child, document) for child in node.children)
        if isinstance(node, Or):
            return any(self.matches(child, document) for child in node.children)
        if isinstance(node, MatchText):
            return self._match_text(node, document) > 0
        if isinstance(node, Equals):
            return self._match_equals(node, document)
        if isinstance(node, InSet):
            return self._match_in_set(node, document)
        if isinstance(node, Range):
            return self._match_range(node, document)
        raise IndexQueryRejected(f"Unknown filter type: {type(node).__name__}")

    def score(self, node: Filter, document: Document) -> float:
        """Score a matching document by the number of text terms it hits."""
        if isinstance(node, (And, Or)):
            return sum(self.score(child, document) for child in node.children)
        if isinstance(node, MatchText):
            return float(self._match_text(node, document))
        return 0.0

    def _match_text(self, node: MatchText, document: Document) -> int:
        terms = self.analyzer(node.term)
        if not terms:
            return 0
        field_tokens = set(self.analyzer(document.get(node.field)))
        return sum(1 for term in terms if term in field_tokens)

    def _match_equals(self, node: Equals, document: Document) -> bool:
        value = document.get(node.field)
        if value is None:
            return False
        if _is_multi_valued(value):
            return node.value in value
        return value == node.value

    def _match_in_set(self, node: InSet, document: Document) -> bool:
        if node.is_empty:
            return True
        value = document.get(node.field)
        if value is None:
            return False
        if _is_multi_valued(value):
            return any(item in node.values for item in value)
        return value in node.values

    def _match_range(self, node: Range, document: Document) -> bool:
        value = document.get(node.field)
        if not is_number(value):
            return False
        if node.min is not None and value < node.min:
            return False
        if node.max is not None and value > node.max:
            return False
        return True

    def select(self, node: Filter, documents: Iterable[Document]) -> List[Document]:
        """Return the matching documents, best score first.

        Ties keep input order.
        """
        node = self.prepare(node)
        logger.debug(f"Evaluating filter: {node}")
        scored = [
            (self.score(node, doc), position, doc)
            for position, doc in enumerate(documents)
            if self.matches(node, doc)
        ]
        scored.sort(key=lambda x: (-x[0], x[1]))
        return [doc for _, _, doc in scored]


__all__ = [
    "analyze",
    "FilterRewriter",
    "FilterEvaluator",
]
