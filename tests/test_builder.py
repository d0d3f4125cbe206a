from decimal import Decimal

import pytest

from swiftsearch_core.errors import ValidationError
from swiftsearch_core.query.builder import QueryBuilder
from swiftsearch_core.query.filters import (
    MATCH_ALL,
    And,
    Equals,
    InSet,
    MatchText,
    Or,
    Range,
)


@pytest.fixture
def builder():
    return QueryBuilder()


def test_no_parameters_builds_identity_filter(builder):
    assert builder.build() == MATCH_ALL


def test_blank_and_empty_parameters_are_ignored(builder):
    assert builder.build(keyword="  ", category="", brands=[], colors=None) == MATCH_ALL


def test_keyword_matches_name_description_and_synonyms(builder):
    assert builder.build(keyword="desk") == And(
        Or(
            MatchText("name", "desk"),
            MatchText("description", "desk"),
            MatchText("synonyms", "desk"),
        )
    )


def test_simple_keyword_skips_description(builder):
    assert builder.build_simple("desk") == Or(
        MatchText("name", "desk"),
        MatchText("synonyms", "desk"),
    )
    assert builder.build_simple(None) == MATCH_ALL


def test_all_clauses_in_fixed_order(builder):
    result = builder.build(
        keyword="desk",
        category="Furniture",
        brands=["Acme", "Lumo"],
        colors=["Black"],
        price_min=100,
        price_max=500,
        rating_min=4.0,
    )
    assert result == And(
        Or(
            MatchText("name", "desk"),
            MatchText("description", "desk"),
            MatchText("synonyms", "desk"),
        ),
        Equals("category", "Furniture"),
        InSet("brand", ("Acme", "Lumo")),
        InSet("color", ("Black",)),
        Range("price", 100, 500),
        Range("rating", 4.0, None),
    )


def test_single_bound_leaves_other_side_open(builder):
    assert builder.build(price_max=200) == And(Range("price", None, 200))
    assert builder.build(rating_min=3) == And(Range("rating", 3, None))


def test_brand_list_drops_none_and_duplicates(builder):
    assert builder.build(brands=["Acme", None, "Acme", "Lumo"]) == And(
        InSet("brand", ("Acme", "Lumo"))
    )


def test_inverted_range_is_rejected(builder):
    with pytest.raises(ValidationError):
        builder.build(price_min=500, price_max=100)
    with pytest.raises(ValidationError):
        builder.build(rating_min=4.5, rating_max=2)


def test_build_is_deterministic(builder):
    params = dict(keyword="lamp", brands=["Lumo", "Acme"], price_min=10)
    assert builder.build(**params) == builder.build(**params)
    assert str(builder.build(**params)) == str(builder.build(**params))


@pytest.mark.parametrize(
    "params",
    [
        {"price_min": "10", "price_max": 5},
        {"price_min": "cheap"},
        {"rating_max": float("nan")},
        {"rating_min": True},
    ],
)
def test_non_numeric_bounds_are_rejected(builder, params):
    with pytest.raises(ValidationError):
        builder.build(**params)


def test_decimal_bounds_are_accepted(builder):
    assert builder.build(price_min=Decimal("9.99")) == And(Range("price", Decimal("9.99"), None))
