"""Search Result - Cascade Outcome Format

Carries the listings of whichever cascade stage produced them, together with
the query and method that stage used.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from partsearch.schemas.listing_schema import EnhancementMethod, NormalizedListing


class SearchMethod(str, Enum):
    """결과를 낸 단계

    보강 방식 값에 대체 검색어(suggestion) / 원래 검색어(original) 단계를 더한 것입니다.
    """

    RULE_BASED = EnhancementMethod.RULE_BASED.value
    LLM = EnhancementMethod.LLM.value
    LLM_FALLBACK = EnhancementMethod.LLM_FALLBACK.value
    PASSTHROUGH = EnhancementMethod.PASSTHROUGH.value
    ERROR_FALLBACK = EnhancementMethod.ERROR_FALLBACK.value
    SUGGESTION = "suggestion"
    ORIGINAL = "original"

    @classmethod
    def from_enhancement(cls, method: EnhancementMethod) -> "SearchMethod":
        return cls(method.value)


@dataclass
class SmartSearchResult:
    """단계적 검색 결과

    Attributes:
        results: 정규화된 리스팅 (비어있을 수 있음)
        query: 결과를 낸(또는 마지막으로 시도한) 검색어
        original_query: 사용자 입력 검색어
        method: 결과를 낸 단계
        confidence: 해당 단계의 신뢰도
        suggestions: 사용자에게 보여줄 대체 검색어
    """

    results: List[NormalizedListing]
    query: str
    original_query: str
    method: SearchMethod
    confidence: float
    suggestions: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.results) == 0
