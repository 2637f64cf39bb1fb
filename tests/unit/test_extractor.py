"""계단식 필드 추출기 테스트."""

from __future__ import annotations

from selectolax.parser import HTMLParser

from partsearch.crawlers.extractor import extract, extract_records, select_containers
from tests.fixtures.supplier_pages import (
    MCMASTER_RESULTS,
    MSC_BOTH_CONTAINERS,
    MSC_FALLBACK_CONTAINER,
    NO_RESULTS_PAGE,
)


class TestExtract:
    """후보 selector 순서 규칙"""

    def test_first_non_empty_candidate_wins(self):
        node = HTMLParser('<div><span class="a">  </span><span class="b">Second</span><span class="c">Third</span></div>')
        assert extract(node, [".a", ".b", ".c"]) == "Second"

    def test_missing_candidates_are_skipped(self):
        node = HTMLParser('<div><span class="c">Third</span></div>')
        assert extract(node, [".a", ".b", ".c"]) == "Third"

    def test_nothing_matches_returns_empty(self):
        node = HTMLParser("<div><p>text</p></div>")
        assert extract(node, [".a", ".b"]) == ""

    def test_attribute_value(self):
        node = HTMLParser('<div><a class="x" href="/p/1">Link</a></div>')
        assert extract(node, ["a.x"], attribute="href") == "/p/1"


def test_select_containers_returns_first_matching_selector():
    parser = HTMLParser(MSC_BOTH_CONTAINERS)
    selector, nodes = select_containers(parser, [".missing", ".product-tile", ".search-result"])
    assert selector == ".product-tile"
    assert len(nodes) == 1


def test_select_containers_no_match():
    assert select_containers(HTMLParser(NO_RESULTS_PAGE), [".product-tile"]) == (None, [])


def test_extract_records_mcmaster(mcmaster):
    records = extract_records(MCMASTER_RESULTS, mcmaster, max_results=10)

    # 가격 없는 세 번째 행은 승격되지 않음
    assert [r.part_number for r in records] == ["6383K13", "6383K14"]
    first = records[0]
    assert first.name == "Ball Bearing 6203 Sealed"
    assert first.price_text == "$12.34 each"
    assert first.availability_text == "In stock"
    assert first.product_url == "https://www.mcmaster.com/6383K13"
    assert first.source_id == "mcmaster"
    assert records[1].product_url is None


def test_extract_records_caps_containers(mcmaster):
    records = extract_records(MCMASTER_RESULTS, mcmaster, max_results=1)
    assert len(records) == 1


def test_extract_records_second_container_candidate(mscdirect):
    records = extract_records(MSC_FALLBACK_CONTAINER, mscdirect, max_results=10)

    assert len(records) == 1
    record = records[0]
    assert record.part_number == "MSC-03071552"
    assert record.name == "6203 Ball Bearing"
    assert record.price_text == "9.99 USD"
    assert record.availability_text == ""


def test_extract_records_ignores_later_container_candidates(mscdirect):
    records = extract_records(MSC_BOTH_CONTAINERS, mscdirect, max_results=10)

    assert [r.part_number for r in records] == ["MSC-1"]
    assert records[0].product_url == "https://www.mscdirect.com/product/details/1"


def test_extract_records_no_match_is_empty(mcmaster):
    assert extract_records(NO_RESULTS_PAGE, mcmaster, max_results=10) == []
    assert extract_records("", mcmaster, max_results=10) == []


def test_extract_records_is_deterministic(mcmaster):
    first = extract_records(MCMASTER_RESULTS, mcmaster, max_results=10)
    second = extract_records(MCMASTER_RESULTS, mcmaster, max_results=10)
    assert first == second
