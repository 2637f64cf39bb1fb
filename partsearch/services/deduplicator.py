"""여러 공급사 결과의 중복 제거.

정규 키 = 부품 번호 + 상품명을 이어 붙이고 모든 공백 제거 후 소문자.
먼저 나온 항목(소스 순서 기준)이 남고 이후 중복은 버립니다.
"""

from __future__ import annotations

import re
from typing import Iterable, List

from partsearch.schemas.listing_schema import NormalizedListing


_WHITESPACE = re.compile(r"\s+")


def canonical_key(listing: NormalizedListing) -> str:
    return _WHITESPACE.sub("", f"{listing.part_number}{listing.name}").lower()


def dedupe(listings: Iterable[NormalizedListing]) -> List[NormalizedListing]:
    seen: set[str] = set()
    unique: List[NormalizedListing] = []
    for listing in listings:
        key = canonical_key(listing)
        if key in seen:
            continue
        seen.add(key)
        unique.append(listing)
    return unique
