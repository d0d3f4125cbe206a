from decimal import Decimal

import pytest

from swiftsearch_core.errors import IndexQueryRejected
from swiftsearch_core.index.document import FIELD_NAMES, NUMERIC_FIELDS, Document
from swiftsearch_core.query.builder import QueryBuilder
from swiftsearch_core.query.executor import FilterEvaluator, FilterRewriter, analyze
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
def evaluator():
    return FilterEvaluator(supported_fields=FIELD_NAMES, numeric_fields=NUMERIC_FIELDS)


def ids(documents):
    return [doc.id for doc in documents]


def test_analyze_lowercases_and_strips_punctuation():
    assert analyze("Standing-Desk, OAK!") == ["standing", "desk", "oak"]
    assert analyze("desk_lamp 2-in-1") == ["desk", "lamp", "2", "in", "1"]
    assert analyze(["Work Station", "desk"]) == ["work", "station", "desk"]
    assert analyze(None) == []


def test_rewriter_drops_empty_in_set_and_flattens():
    rewriter = FilterRewriter()
    node = And(
        InSet("brand", []),
        And(Equals("category", "Furniture"), Range("price", 0, 10)),
    )
    assert rewriter.rewrite(node) == And(
        Equals("category", "Furniture"),
        Range("price", 0, 10),
    )
    assert rewriter.rewrite(And(InSet("color", []))) == MATCH_ALL
    assert rewriter.rewrite(Or(MatchText("name", "a"), InSet("color", []))) == MATCH_ALL
    assert rewriter.rewrite(Or(Or(MatchText("name", "a")), MatchText("name", "b"))) == Or(
        MatchText("name", "a"), MatchText("name", "b")
    )


def test_identity_filter_matches_everything(evaluator, catalog):
    assert ids(evaluator.select(MATCH_ALL, catalog)) == [1, 2, 3, 4, 5, 6]


def test_empty_in_set_never_changes_results(evaluator, catalog):
    base = And(Range("price", None, 1000))
    with_empty = And(Range("price", None, 1000), InSet("brand", []))
    assert ids(evaluator.select(with_empty, catalog)) == ids(evaluator.select(base, catalog))
    assert ids(evaluator.select(InSet("color", []), catalog)) == [1, 2, 3, 4, 5, 6]


def test_empty_or_matches_nothing(evaluator, catalog):
    assert evaluator.select(Or(), catalog) == []


def test_text_match_is_tokenized_and_case_insensitive(evaluator, catalog):
    assert ids(evaluator.select(MatchText("name", "DESK"), catalog)) == [1, 3]
    assert ids(evaluator.select(MatchText("synonyms", "bookcase"), catalog)) == [4]
    assert evaluator.select(MatchText("name", "!!"), catalog) == []


def test_range_is_inclusive_and_skips_absent_values(evaluator, catalog):
    assert ids(evaluator.select(Range("price", 150, 450), catalog)) == [1, 2]
    # Document 6 has no price.
    assert 6 not in ids(evaluator.select(Range("price", None, None), catalog))
    assert ids(evaluator.select(Range("rating", 4.5, None), catalog)) == [1, 5]


def test_membership_on_multi_valued_fields(evaluator, catalog):
    assert ids(evaluator.select(Equals("color_variants", "Black"), catalog)) == [5]
    assert ids(evaluator.select(InSet("materials", ["oak", "steel"]), catalog)) == [4]


def test_absent_values_never_match_equality(evaluator, catalog):
    assert 4 not in ids(evaluator.select(InSet("color", ["Black", "White", "Gray", "Silver"]), catalog))


def test_results_ordered_by_text_hits(evaluator):
    docs = [
        Document(id="a", name="desk"),
        Document(id="b", name="oak desk"),
        Document(id="c", name="lamp"),
    ]
    node = Or(MatchText("name", "oak desk"))
    assert ids(evaluator.select(node, docs)) == ["b", "a"]


def test_keyword_and_brand_round_trip(evaluator):
    docs = [
        Document(id="both", name="Oak Desk", brand="Acme"),
        Document(id="brand-only", name="Chair", brand="Acme"),
        Document(id="neither", name="Lamp", brand="Lumo"),
    ]
    node = QueryBuilder().build(keyword="desk", brands=["Acme"])
    assert ids(evaluator.select(node, docs)) == ["both"]


def test_unknown_field_is_rejected(evaluator, catalog):
    with pytest.raises(IndexQueryRejected):
        evaluator.select(Equals("warehouse", "north"), catalog)


def test_range_over_text_field_is_rejected(evaluator, catalog):
    with pytest.raises(IndexQueryRejected):
        evaluator.select(Range("brand", 1, 2), catalog)
    with pytest.raises(IndexQueryRejected):
        evaluator.select(Range("price", "cheap", None), catalog)


def test_punctuation_joined_words_match_separately(evaluator):
    docs = [Document(id=1, name="Standing-Desk"), Document(id=2, name="Lamp/Shade")]
    assert ids(evaluator.select(MatchText("name", "desk"), docs)) == [1]
    assert ids(evaluator.select(MatchText("name", "shade"), docs)) == [2]


def test_decimal_prices_match_ranges(evaluator):
    docs = [
        Document(id="dec", price=Decimal("250.00")),
        Document(id="float", price=99.5),
        Document(id="nan", price=Decimal("NaN")),
    ]
    assert ids(evaluator.select(Range("price", 100, 500), docs)) == ["dec"]
    assert ids(evaluator.select(Range("price", Decimal("50"), Decimal("260")), docs)) == ["dec", "float"]
    assert ids(evaluator.select(Range("price", None, None), docs)) == ["dec", "float"]
