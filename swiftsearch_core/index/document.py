"""SwiftSearch Documents - Catalog Document Record.

The document is the unit the external index returns. The core never
mutates it; filtering and faceting read fields by name.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple, Union

from swiftsearch_core.errors import ValidationError


# Wire names used by the product catalog service, mapped to field names.
FIELD_ALIASES: Dict[str, str] = {
    "sku": "id",
    "_id": "id",
    "colorVariants": "color_variants",
    "color_variants": "color_variants",
    "total_reviews": "review_count",
    "totalReviews": "review_count",
    "reviewCount": "review_count",
}

TEXT_FIELDS = frozenset({"name", "description", "synonyms"})
KEYWORD_FIELDS = frozenset({
    "id", "brand", "category", "subcategory", "color",
    "color_variants", "materials",
})
NUMERIC_FIELDS = frozenset({"price", "rating", "stock", "review_count"})


def _as_tuple(value: Optional[Iterable[Any]]) -> Tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@dataclass(frozen=True)
class Document:
    """Immutable catalog document.

    Attributes:
        id: Unique document identifier
        name: Product name
        description: Free-text description
        brand: Brand label
        category: Category label
        subcategory: Subcategory label
        price: Price in currency units, None when unknown
        rating: Average rating in [0, 5], None when unknown
        stock: Units in stock
        color: Primary color label
        color_variants: Other available colors, in order
        materials: Material labels
        synonyms: Extra terms matched alongside the name
        review_count: Number of reviews
    """

    id: Union[str, int]
    name: Optional[str] = None
    description: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    price: Optional[float] = None
    rating: Optional[float] = None
    stock: Optional[int] = None
    color: Optional[str] = None
    color_variants: Tuple[str, ...] = ()
    materials: FrozenSet[str] = field(default_factory=frozenset)
    synonyms: Tuple[str, ...] = ()
    review_count: Optional[int] = None

    def __post_init__(self):
        """Check the identifier and normalize collection fields."""
        if self.id is None or self.id == "":
            raise ValidationError("Document identifier is required")
        object.__setattr__(self, "color_variants", _as_tuple(self.color_variants))
        object.__setattr__(self, "materials", frozenset(_as_tuple(self.materials)))
        object.__setattr__(self, "synonyms", _as_tuple(self.synonyms))

    def get(self, field_name: str, default: Any = None) -> Any:
        """Get field value by name.

        Args:
            field_name: Field name or wire alias
            default: Returned when the field is unknown

        Returns:
            Field value
        """
        name = FIELD_ALIASES.get(field_name, field_name)
        return getattr(self, name, default) if name in FIELD_NAMES else default

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "brand": self.brand,
            "category": self.category,
            "subcategory": self.subcategory,
            "price": self.price,
            "rating": self.rating,
            "stock": self.stock,
            "color": self.color,
            "color_variants": list(self.color_variants),
            "materials": sorted(self.materials),
            "synonyms": list(self.synonyms),
            "review_count": self.review_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        """Create from dictionary.

        Accepts both field names and catalog wire names
        (``sku``, ``colorVariants``, ``total_reviews``). Unknown keys
        are ignored.
        """
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = FIELD_ALIASES.get(key, key)
            if name in FIELD_NAMES:
                values[name] = value
        if "id" not in values:
            raise ValidationError(f"Document has no identifier: {sorted(data)}")
        return cls(**values)


FIELD_NAMES = frozenset(f.name for f in fields(Document))

__all__ = [
    "Document",
    "FIELD_ALIASES",
    "FIELD_NAMES",
    "TEXT_FIELDS",
    "KEYWORD_FIELDS",
    "NUMERIC_FIELDS",
]
