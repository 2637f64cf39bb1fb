"""공통 Dummy/Fake 객체 (네트워크/브라우저 독립)"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

import httpx

from partsearch.crawlers.catalog import SourceProfile
from partsearch.crawlers.result import RawRecord
from partsearch.schemas.listing_schema import Availability, NormalizedListing
from partsearch.services.llm_client import LLMClient


LLM_TEST_ENDPOINT = "https://llm.test/v1/chat/completions"


def make_record(
    part_number: str,
    name: str,
    price_text: str = "$10.00",
    source_id: str = "mcmaster",
    **kwargs,
) -> RawRecord:
    return RawRecord(part_number=part_number, name=name, price_text=price_text, source_id=source_id, **kwargs)


def make_listing(
    part_number: str,
    name: str,
    source_id: str = "mcmaster",
    price: Optional[float] = 10.0,
) -> NormalizedListing:
    return NormalizedListing(
        part_number=part_number,
        name=name,
        numeric_price=price,
        price_text=f"${price}" if price is not None else "",
        availability=Availability.IN_STOCK,
        source_id=source_id,
        confidence=0.8,
    )


@dataclass
class FakeFetcher:
    """SupplierSearch Unit 테스트용 가짜 SourceFetcher

    - source_id별 결과 목록 또는 예외를 반환
    - 호출 기록 유지
    """

    responses: dict[str, object]
    calls: list[tuple[str, str, int]] = field(default_factory=list)

    async def fetch(self, profile: SourceProfile, query: str, max_results: int) -> list[RawRecord]:
        self.calls.append((profile.source_id, query, max_results))
        response = self.responses.get(profile.source_id, [])
        if isinstance(response, Exception):
            raise response
        return list(response)


def llm_client_returning(handler: Callable[[httpx.Request], httpx.Response]) -> LLMClient:
    return LLMClient(
        api_key="sk-test",
        endpoint=LLM_TEST_ENDPOINT,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def unreachable_llm_client() -> LLMClient:
    """호출되면 테스트를 실패시키는 LLM 클라이언트 (API 키는 설정됨)"""

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"LLM must not be called: {request.url}")

    return llm_client_returning(handler)


def completion(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})
