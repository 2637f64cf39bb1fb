"""RawRecord 정규화 테스트."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from partsearch.schemas.listing_schema import Availability
from partsearch.services.normalizer import (
    classify_availability,
    normalize,
    parse_price,
    score_confidence,
)
from tests.fixtures.fakes import make_record


class TestParsePrice:
    """가격 패턴 우선순위"""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("$123.45", 123.45),
            ("$1,234.56 each", 1234.56),
            ("1,234.56 USD", 1234.56),
            ("42 dollars", 42.0),
            ("Price: $99", 99.0),
            ("Price: 15.5", 15.5),
            ("€8.20", 8.20),
        ],
    )
    def test_recognized_forms(self, text, expected):
        assert parse_price(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["Call for pricing", "", None, "Login to see price"])
    def test_unrecognized_is_none(self, text):
        assert parse_price(text) is None


class TestClassifyAvailability:
    def test_out_of_stock_phrases(self):
        assert classify_availability("Out of Stock") == Availability.OUT_OF_STOCK
        assert classify_availability("This item is DISCONTINUED") == Availability.OUT_OF_STOCK
        assert classify_availability("Backordered until May") == Availability.OUT_OF_STOCK

    def test_empty_counts_as_available(self):
        assert classify_availability("") == Availability.IN_STOCK
        assert classify_availability("   ") == Availability.IN_STOCK
        assert classify_availability(None) == Availability.IN_STOCK

    def test_other_text_is_available(self):
        assert classify_availability("Ships in 2 days") == Availability.IN_STOCK


class TestScoreConfidence:
    def test_all_signals(self):
        assert score_confidence(12.34, "6383K13", "https://www.mcmaster.com/6383K13") == 1.0

    def test_base_only(self):
        assert score_confidence(None, "A1", None) == 0.5

    def test_zero_price_gets_no_bonus(self):
        assert score_confidence(0.0, "6383K13", None) == 0.6

    def test_bounded(self):
        for price in (None, 0.0, 5.0):
            for part in ("", "abc", "abcd"):
                for url in (None, "https://x"):
                    assert 0.0 <= score_confidence(price, part, url) <= 1.0


def test_normalize_full_record():
    retrieved = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    raw = make_record(
        " 6383K13 ",
        "Ball Bearing 6203 Sealed",
        price_text="$12.34 each",
        availability_text="Out of Stock",
        product_url="https://www.mcmaster.com/6383K13",
    )

    listing = normalize(raw, retrieved_at=retrieved)

    assert listing.part_number == "6383K13"
    assert listing.numeric_price == pytest.approx(12.34)
    assert listing.price_text == "$12.34 each"
    assert listing.availability == Availability.OUT_OF_STOCK
    assert listing.in_stock is False
    assert listing.confidence == 1.0
    assert listing.source_id == "mcmaster"
    assert listing.retrieved_at == retrieved


def test_normalize_unparseable_price_keeps_text():
    listing = normalize(make_record("MSC-1", "Oil Seal", price_text="Call for pricing"))

    assert listing.numeric_price is None
    assert listing.price_text == "Call for pricing"
    assert listing.in_stock is True
    assert listing.confidence == 0.6
    assert listing.retrieved_at.tzinfo is not None
