"""공급사 간 중복 제거 테스트."""

from __future__ import annotations

from partsearch.services.deduplicator import canonical_key, dedupe
from tests.fixtures.fakes import make_listing


def test_canonical_key_ignores_whitespace_and_case():
    assert canonical_key(make_listing("6203", "Bearing")) == "6203bearing"
    assert canonical_key(make_listing("62 03", " BEAR ING ")) == "6203bearing"


def test_earliest_listing_survives():
    first = make_listing("6203", "Bearing", source_id="mcmaster")
    duplicate = make_listing("6203 ", "bearing", source_id="grainger")
    other = make_listing("6204", "Bearing", source_id="grainger")

    result = dedupe([first, other, duplicate])

    assert result == [first, other]
    assert result[0].source_id == "mcmaster"


def test_empty_input():
    assert dedupe([]) == []
