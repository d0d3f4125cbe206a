from decimal import Decimal

from swiftsearch_core.facets.aggregations import (
    BucketClosure,
    RangeAggregation,
    RangeBucket,
    TermsAggregation,
)
from swiftsearch_core.facets.builder import FacetBuilder, compute_facets
from swiftsearch_core.index.document import Document

PRICE_KEYS = ["<200", "200-499", "500-999", "1000-1999", ">=2000"]
RATING_KEYS = ["1.0-2.0", "2.1-3.0", "3.1-4.0", "4.1-5.0"]


def test_empty_input_still_has_every_bucket():
    facets = compute_facets([]).to_dict()
    assert facets["brand"] == {}
    assert facets["color"] == {}
    assert facets["category"] == {}
    assert facets["price_ranges"] == dict.fromkeys(PRICE_KEYS, 0)
    assert facets["rating_ranges"] == dict.fromkeys(RATING_KEYS, 0)


def test_bucket_order_is_fixed():
    facets = compute_facets([]).to_dict()
    assert list(facets["price_ranges"]) == PRICE_KEYS
    assert list(facets["rating_ranges"]) == RATING_KEYS


def test_catalog_facets(catalog):
    result = compute_facets(catalog)
    facets = result.to_dict()

    assert facets["brand"] == {"Acme": 2, "Lumo": 1, "Oakline": 1, "Voltex": 2}
    assert facets["color"] == {"Black": 2, "White": 1, "Gray": 1, "Silver": 1}
    assert facets["category"] == {"Furniture": 3, "Lighting": 1, "Electronics": 2}
    assert facets["price_ranges"] == {
        "<200": 2, "200-499": 1, "500-999": 0, "1000-1999": 1, ">=2000": 1,
    }
    assert facets["rating_ranges"] == {
        "1.0-2.0": 1, "2.1-3.0": 0, "3.1-4.0": 1, "4.1-5.0": 3,
    }
    assert result.missing["color"] == 1
    assert result.missing["price_ranges"] == 1
    assert result.missing["rating_ranges"] == 1


def test_absent_values_get_no_synthetic_key(catalog):
    facets = compute_facets(catalog).to_dict()
    assert None not in facets["color"]
    assert "unknown" not in facets["color"]
    with_color = sum(1 for doc in catalog if doc.color is not None)
    assert sum(facets["color"].values()) == with_color


def test_price_scenario_of_one_thousand_documents():
    prices = [50, 250, 750, 1500, 2500]
    docs = [Document(id=i, price=prices[i % 5]) for i in range(1000)]
    assert compute_facets(docs)["price_ranges"] == {
        "<200": 200, "200-499": 200, "500-999": 200, "1000-1999": 200, ">=2000": 200,
    }


def test_price_boundaries_are_upper_exclusive():
    docs = [Document(id=i, price=p) for i, p in enumerate([0, 199.99, 200, 499.99, 500, 1000, 2000])]
    assert compute_facets(docs)["price_ranges"] == {
        "<200": 2, "200-499": 2, "500-999": 1, "1000-1999": 1, ">=2000": 1,
    }


def test_rating_boundaries_are_upper_inclusive():
    ratings = [0.0, 1.0, 2.0, 2.01, 3.0, 3.5, 4.0, 4.01, 5.0]
    docs = [Document(id=i, rating=r) for i, r in enumerate(ratings)]
    assert compute_facets(docs)["rating_ranges"] == {
        "1.0-2.0": 3, "2.1-3.0": 2, "3.1-4.0": 2, "4.1-5.0": 2,
    }


def test_out_of_range_values_are_left_out_of_buckets_only():
    docs = [
        Document(id=1, price=-5.0, rating=5.5, brand="Acme"),
        Document(id=2, price=300.0, rating=4.2, brand="Acme"),
        Document(id=3),
    ]
    result = compute_facets(docs)

    assert sum(result["price_ranges"].values()) == 1
    assert result.unbucketed["price_ranges"] == 1
    assert result.missing["price_ranges"] == 1
    assert sum(result["rating_ranges"].values()) == 1
    assert result.unbucketed["rating_ranges"] == 1
    assert result["brand"] == {"Acme": 2}


def test_bucket_totals_account_for_every_document(catalog):
    result = compute_facets(catalog)
    for name in ("price_ranges", "rating_ranges"):
        counted = sum(result[name].values())
        assert counted + result.missing[name] + result.unbucketed[name] == len(catalog)


def test_builder_with_custom_facets():
    builder = FacetBuilder(
        term_fields=("subcategory",),
        range_facets=(("stock_levels", "stock", (RangeBucket("empty", None, 0, BucketClosure.RIGHT), RangeBucket("in stock", 0, None))),),
    )
    docs = [
        Document(id=1, subcategory="Desks", stock=0),
        Document(id=2, subcategory="Desks", stock=3),
        Document(id=3, subcategory="Chairs"),
    ]
    assert builder.build(docs).to_dict() == {
        "subcategory": {"Desks": 2, "Chairs": 1},
        "stock_levels": {"empty": 1, "in stock": 1},
    }


def test_aggregations_directly():
    terms = TermsAggregation("brand", "brand")
    terms.add_all(["Acme", None, "Lumo", "Acme"])
    assert terms.result() == {"Acme": 2, "Lumo": 1}
    assert terms.missing == 1

    ranges = RangeAggregation("p", "price", [RangeBucket("low", 0, 10), RangeBucket("high", 10, None)])
    ranges.add_all([0, 9.5, 10, -1])
    assert ranges.result() == {"low": 2, "high": 1}
    assert ranges.unbucketed == 1


def test_decimal_and_unusable_prices():
    docs = [
        Document(id=1, price=Decimal("199.99")),
        Document(id=2, price=Decimal("200")),
        Document(id=3, price=Decimal("NaN")),
        Document(id=4, price="n/a"),
    ]
    result = compute_facets(docs)
    assert result["price_ranges"]["<200"] == 1
    assert result["price_ranges"]["200-499"] == 1
    assert result.unbucketed["price_ranges"] == 2
