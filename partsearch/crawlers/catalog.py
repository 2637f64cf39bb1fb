"""공급사 카탈로그 설정 (SourceCatalog).

공급사별 base URL, 검색 경로, 필드별 후보 selector 목록을 한 곳에 모읍니다.
후보 순서 = 신뢰도 순서입니다. 앞쪽 selector가 더 구체적/최신이라고 가정하고,
추출기는 항상 앞에서부터 시도합니다.

프로세스 시작 시 한 번 만들어지고 이후 변경되지 않습니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional
from urllib.parse import quote


FIELDS = ("container", "part_number", "name", "price", "availability", "product_url")


@dataclass(frozen=True)
class FieldSelectorSet:
    """한 필드의 후보 selector 목록.

    attribute가 지정되면 텍스트 대신 해당 속성 값을 읽습니다 (예: href).
    """

    selectors: tuple[str, ...]
    attribute: Optional[str] = None

    def __iter__(self):
        return iter(self.selectors)

    def __len__(self) -> int:
        return len(self.selectors)


@dataclass(frozen=True)
class SourceProfile:
    source_id: str
    display_name: str
    base_url: str
    search_path: str
    container: FieldSelectorSet
    part_number: FieldSelectorSet
    name: FieldSelectorSet
    price: FieldSelectorSet
    availability: FieldSelectorSet
    product_url: FieldSelectorSet

    def search_url(self, query: str) -> str:
        """검색 URL 생성 (쿼리는 percent-encoding)"""
        return f"{self.base_url}{self.search_path.format(query=quote(query, safe=''))}"

    def selectors_for(self, field: str) -> FieldSelectorSet:
        if field not in FIELDS:
            raise KeyError(f"Unknown field '{field}' for source '{self.source_id}'")
        return getattr(self, field)


_PROFILES = (
    SourceProfile(
        source_id="mcmaster",
        display_name="McMaster-Carr",
        base_url="https://www.mcmaster.com",
        search_path="/search?searchQuery={query}",
        container=FieldSelectorSet((
            ".ProductTableRow",
            'tr[data-testid="product-row"]',
            ".product-row",
        )),
        part_number=FieldSelectorSet((
            ".PartNumber",
            ".part-number",
            "td:first-child",
        )),
        name=FieldSelectorSet((
            ".ProductDescription",
            ".description",
            "td:nth-child(2)",
        )),
        price=FieldSelectorSet((
            ".Price",
            ".price",
            ".cost",
        )),
        availability=FieldSelectorSet((
            ".Availability",
            ".availability",
            ".stock-status",
        )),
        product_url=FieldSelectorSet((
            "a.PartNumberLink",
            ".PartNumber a",
            "a[href]",
        ), attribute="href"),
    ),
    SourceProfile(
        source_id="mscdirect",
        display_name="MSC Industrial Supply",
        base_url="https://www.mscdirect.com",
        search_path="/browse/search?searchQuery={query}",
        container=FieldSelectorSet((
            ".product-tile",
            ".search-result",
        )),
        part_number=FieldSelectorSet((
            ".product-number",
            ".item-number",
        )),
        name=FieldSelectorSet((
            ".product-title",
            ".product-name",
        )),
        price=FieldSelectorSet((
            ".price",
            ".product-price",
        )),
        availability=FieldSelectorSet((
            ".availability-message",
            ".stock-status",
            ".availability",
        )),
        product_url=FieldSelectorSet((
            "a.product-title",
            ".product-title a",
            "a[href]",
        ), attribute="href"),
    ),
    SourceProfile(
        source_id="grainger",
        display_name="Grainger",
        base_url="https://www.grainger.com",
        search_path="/search?searchQuery={query}",
        container=FieldSelectorSet((
            '[data-testid="product-tile"]',
            ".search-result-item",
            ".product-tile",
        )),
        part_number=FieldSelectorSet((
            '[data-testid="item-number"]',
            ".item-number",
            ".grainger-item-number",
        )),
        name=FieldSelectorSet((
            '[data-testid="product-title"]',
            ".product-title",
            "h2",
        )),
        price=FieldSelectorSet((
            '[data-testid="pricing-display"]',
            ".pricing .price",
            ".price",
        )),
        availability=FieldSelectorSet((
            '[data-testid="availability"]',
            ".availability",
            ".stock-status",
        )),
        product_url=FieldSelectorSet((
            'a[data-testid="product-link"]',
            "a.product-title",
            "a[href]",
        ), attribute="href"),
    ),
)


SOURCE_CATALOG: Mapping[str, SourceProfile] = MappingProxyType({p.source_id: p for p in _PROFILES})


def list_sources() -> tuple[str, ...]:
    """설정된 공급사 ID (정의 순서 유지)"""
    return tuple(SOURCE_CATALOG.keys())


def get_profile(source_id: str) -> SourceProfile:
    try:
        return SOURCE_CATALOG[source_id]
    except KeyError:
        raise KeyError(f"Unknown source '{source_id}'") from None


def selectors_for(source_id: str, field: str) -> FieldSelectorSet:
    """(source, field) → 순서 있는 후보 selector 목록

    Raises:
        KeyError: 알 수 없는 source/field (프로그래밍 오류)
    """
    return get_profile(source_id).selectors_for(field)
