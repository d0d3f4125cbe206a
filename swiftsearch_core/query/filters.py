"""SwiftSearch Filter Model - Predicate Trees.

Filters are immutable trees of predicates over document fields. Leaf
nodes test a single field; ``And`` and ``Or`` nodes combine children.
Trees are built once and shared freely between threads.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from numbers import Real
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple, Union

from swiftsearch_core.errors import ValidationError

Number = Union[int, float, Decimal]


class FilterType(Enum):
    """Filter node kinds."""

    MATCH_TEXT = "match_text"
    EQUALS = "equals"
    IN_SET = "in_set"
    RANGE = "range"
    AND = "and"
    OR = "or"


def _check_field(field_name: Any) -> None:
    if not isinstance(field_name, str) or not field_name:
        raise ValidationError(f"Filter field must be a non-empty string, got {field_name!r}")


def is_number(value: Any) -> bool:
    """Check for a comparable number: ints, floats and Decimals, not bools or NaN."""
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        return False
    if isinstance(value, Decimal):
        return not value.is_nan()
    return not (isinstance(value, float) and math.isnan(value))


class Filter(ABC):
    """Abstract base class for filter nodes.

    Combinators never mutate their operands; they return new trees
    that may share structure with them.
    """

    filter_type: ClassVar[FilterType]

    @abstractmethod
    def to_string(self) -> str:
        """Convert to a readable query string."""

    @abstractmethod
    def fields(self) -> List[str]:
        """Get the fields referenced by this filter."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {"type": self.filter_type.value}

    def and_(self, other: "Filter") -> "And":
        """Combine with another filter using AND."""
        return And(self, other)

    def or_(self, other: "Filter") -> "Or":
        """Combine with another filter using OR."""
        return Or(self, other)

    def __and__(self, other: "Filter") -> "And":
        if not isinstance(other, Filter):
            return NotImplemented
        return self.and_(other)

    def __or__(self, other: "Filter") -> "Or":
        if not isinstance(other, Filter):
            return NotImplemented
        return self.or_(other)

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class MatchText(Filter):
    """Tokenized text match.

    Matches documents whose field contains the analyzed term. How
    the term is analyzed is up to the index.
    """

    field: str
    term: str

    filter_type: ClassVar[FilterType] = FilterType.MATCH_TEXT

    def __post_init__(self):
        _check_field(self.field)
        if not isinstance(self.term, str):
            raise ValidationError(f"MatchText term must be a string, got {self.term!r}")

    def to_string(self) -> str:
        return f'{self.field}:"{self.term}"'

    def fields(self) -> List[str]:
        return [self.field]

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "field": self.field, "term": self.term}


@dataclass(frozen=True)
class Equals(Filter):
    """Exact value equality."""

    field: str
    value: Any

    filter_type: ClassVar[FilterType] = FilterType.EQUALS

    def __post_init__(self):
        _check_field(self.field)

    def to_string(self) -> str:
        return f"{self.field}={self.value!r}"

    def fields(self) -> List[str]:
        return [self.field]

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "field": self.field, "value": self.value}


@dataclass(frozen=True, init=False)
class InSet(Filter):
    """Set membership.

    An empty value set places no constraint on the field.
    """

    field: str
    values: Tuple[Any, ...]

    filter_type: ClassVar[FilterType] = FilterType.IN_SET

    def __init__(self, field: str, values: Iterable[Any] = ()):
        _check_field(field)
        if isinstance(values, (str, bytes)):
            values = (values,)
        # Deduplicated, first-occurrence order.
        object.__setattr__(self, "field", field)
        object.__setattr__(self, "values", tuple(dict.fromkeys(values)))

    @property
    def is_empty(self) -> bool:
        return not self.values

    def to_string(self) -> str:
        return f"{self.field}:({' OR '.join(repr(v) for v in self.values)})"

    def fields(self) -> List[str]:
        return [self.field]

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "field": self.field, "values": list(self.values)}


@dataclass(frozen=True)
class Range(Filter):
    """Inclusive numeric range.

    Either bound may be None, which leaves that side unbounded.
    """

    field: str
    min: Optional[Number] = None
    max: Optional[Number] = None

    filter_type: ClassVar[FilterType] = FilterType.RANGE

    def __post_init__(self):
        _check_field(self.field)

    def to_string(self) -> str:
        lower = "*" if self.min is None else str(self.min)
        upper = "*" if self.max is None else str(self.max)
        return f"{self.field}:[{lower} TO {upper}]"

    def fields(self) -> List[str]:
        return [self.field]

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "field": self.field, "min": self.min, "max": self.max}


class _Compound(Filter):
    """Shared behaviour for And/Or nodes."""

    children: Tuple[Filter, ...]
    joiner: ClassVar[str] = ""

    def __init__(self, *children: Filter):
        for child in children:
            if not isinstance(child, Filter):
                raise ValidationError(f"{type(self).__name__} children must be filters, got {child!r}")
        object.__setattr__(self, "children", tuple(children))

    def to_string(self) -> str:
        if not self.children:
            return "*:*" if isinstance(self, And) else "-*:*"
        inner = f" {self.joiner} ".join(child.to_string() for child in self.children)
        return f"({inner})"

    def fields(self) -> List[str]:
        seen: Dict[str, None] = {}
        for child in self.children:
            for name in child.fields():
                seen.setdefault(name, None)
        return list(seen)

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "children": [c.to_dict() for c in self.children]}


@dataclass(frozen=True, init=False)
class And(_Compound):
    """Conjunction. An empty And matches every document."""

    children: Tuple[Filter, ...] = ()

    filter_type: ClassVar[FilterType] = FilterType.AND
    joiner: ClassVar[str] = "AND"

    @property
    def is_match_all(self) -> bool:
        return not self.children


@dataclass(frozen=True, init=False)
class Or(_Compound):
    """Disjunction. An empty Or matches no document."""

    children: Tuple[Filter, ...] = ()

    filter_type: ClassVar[FilterType] = FilterType.OR
    joiner: ClassVar[str] = "OR"


MATCH_ALL = And()


__all__ = [
    "Filter",
    "FilterType",
    "MatchText",
    "Equals",
    "InSet",
    "Range",
    "And",
    "Or",
    "MATCH_ALL",
    "is_number",
]
