"""RawRecord → NormalizedListing 정규화.

- 가격 파싱: 통화기호 접두 → 통화 단어 접미 → "Price:" 라벨 순, 첫 매칭 사용
- 재고 분류: 빈 문구는 재고 있음 (기본 정책), 거부 목록 부분 일치 시 품절
- 신뢰도: 기본 0.5 + 가격 0.3 + 부품번호 길이 0.1 + URL 0.1, 최대 1.0
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

from partsearch.crawlers.result import RawRecord
from partsearch.schemas.listing_schema import Availability, NormalizedListing


_NUMBER = r"(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"

PRICE_PATTERNS: tuple[re.Pattern, ...] = (
    # $1,234.56
    re.compile(rf"[$€£]\s*{_NUMBER}"),
    # 123.45 USD
    re.compile(rf"{_NUMBER}\s*(?:USD|CAD|EUR|GBP|dollars?)\b", re.IGNORECASE),
    # Price: 99
    re.compile(rf"price\s*[:\-]?\s*(?:[$€£]\s*)?{_NUMBER}", re.IGNORECASE),
)

UNAVAILABLE_PHRASES = (
    "out of stock",
    "discontinued",
    "unavailable",
    "backordered",
    "special order",
    "not available",
)

BASE_CONFIDENCE = 0.5
PRICE_BONUS = 0.3
PART_NUMBER_BONUS = 0.1
URL_BONUS = 0.1


def parse_price(price_text: Optional[str]) -> Optional[float]:
    """가격 원문에서 숫자 가격 추출, 실패 시 None"""
    if not price_text:
        return None

    for pattern in PRICE_PATTERNS:
        match = pattern.search(price_text)
        if not match:
            continue
        try:
            return float(match.group(1).replace(",", ""))
        except ValueError:
            return None
    return None


def classify_availability(availability_text: Optional[str]) -> Availability:
    # NOTE: 문구가 없으면 "알 수 없음"이 아니라 재고 있음으로 간주합니다.
    if not availability_text or not availability_text.strip():
        return Availability.IN_STOCK

    lowered = availability_text.lower()
    if any(phrase in lowered for phrase in UNAVAILABLE_PHRASES):
        return Availability.OUT_OF_STOCK
    return Availability.IN_STOCK


def score_confidence(numeric_price: Optional[float], part_number: str, product_url: Optional[str]) -> float:
    score = BASE_CONFIDENCE
    if numeric_price is not None and numeric_price > 0:
        score += PRICE_BONUS
    if len((part_number or "").strip()) > 3:
        score += PART_NUMBER_BONUS
    if product_url:
        score += URL_BONUS
    return round(min(score, 1.0), 2)


def normalize(raw: RawRecord, retrieved_at: Optional[datetime] = None) -> NormalizedListing:
    """RawRecord 하나를 NormalizedListing으로 변환

    Raises:
        pydantic.ValidationError: 부품 번호/상품명이 비어있는 레코드 (승격 대상 아님)
    """
    numeric_price = parse_price(raw.price_text)
    part_number = (raw.part_number or "").strip()

    return NormalizedListing(
        part_number=part_number,
        name=(raw.name or "").strip(),
        numeric_price=numeric_price,
        price_text=(raw.price_text or "").strip(),
        availability=classify_availability(raw.availability_text),
        availability_text=(raw.availability_text or "").strip(),
        source_id=raw.source_id,
        product_url=raw.product_url or None,
        confidence=score_confidence(numeric_price, part_number, raw.product_url),
        retrieved_at=retrieved_at or datetime.now(timezone.utc),
    )
