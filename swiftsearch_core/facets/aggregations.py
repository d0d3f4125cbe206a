"""SwiftSearch Aggregations - Facet Aggregations.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from swiftsearch_core.query.filters import is_number


class BucketClosure(Enum):
    """Which end of a range bucket is inclusive."""

    LEFT = "left"  # [lower, upper)
    RIGHT = "right"  # (lower, upper]


@dataclass(frozen=True)
class RangeBucket:
    """A labeled numeric bucket.

    Attributes:
        key: Bucket label
        lower: Lower bound, None for unbounded
        upper: Upper bound, None for unbounded
        closure: Inclusive end of the bucket
    """

    key: str
    lower: Optional[float] = None
    upper: Optional[float] = None
    closure: BucketClosure = BucketClosure.LEFT

    def contains(self, value: float) -> bool:
        if self.closure is BucketClosure.LEFT:
            return (self.lower is None or value >= self.lower) and (
                self.upper is None or value < self.upper
            )
        return (self.lower is None or value > self.lower) and (
            self.upper is None or value <= self.upper
        )


class Aggregation(ABC):
    """Base aggregation class."""

    def __init__(self, name: str, field: str):
        self.name = name
        self.field = field
        self.missing = 0

    def add(self, value: Any) -> None:
        if value is None:
            self.missing += 1
        else:
            self.collect(value)

    def add_all(self, values: Iterable[Any]) -> None:
        for value in values:
            self.add(value)

    @abstractmethod
    def collect(self, value: Any) -> None:
        pass

    @abstractmethod
    def result(self) -> Dict[Any, int]:
        pass


class TermsAggregation(Aggregation):
    """Count documents per distinct value.

    Keys keep the order of first occurrence. Absent values are counted
    in ``missing`` only, never under a key.
    """

    def __init__(self, name: str, field: str):
        super().__init__(name, field)
        self._counts: Dict[Any, int] = {}

    def collect(self, value: Any) -> None:
        self._counts[value] = self._counts.get(value, 0) + 1

    def result(self) -> Dict[Any, int]:
        return dict(self._counts)


class RangeAggregation(Aggregation):
    """Count documents in fixed, non-overlapping ranges.

    Every bucket appears in the result, zero if empty. A value that
    falls in no bucket is counted in ``unbucketed``.
    """

    def __init__(self, name: str, field: str, buckets: Iterable[RangeBucket]):
        super().__init__(name, field)
        self.buckets = tuple(buckets)
        self.unbucketed = 0
        self._counts: Dict[str, int] = {b.key: 0 for b in self.buckets}

    def collect(self, value: Any) -> None:
        if not is_number(value):
            self.unbucketed += 1
            return
        for bucket in self.buckets:
            if bucket.contains(value):
                self._counts[bucket.key] += 1
                return
        self.unbucketed += 1

    def result(self) -> Dict[str, int]:
        return dict(self._counts)


__all__ = [
    "Aggregation",
    "BucketClosure",
    "RangeBucket",
    "TermsAggregation",
    "RangeAggregation",
]
