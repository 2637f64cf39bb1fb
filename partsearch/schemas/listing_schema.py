"""Pydantic 스키마 정의 (검색 결과/검색어 보강 출력)"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Availability(str, Enum):
    """재고 상태"""
    IN_STOCK = "in_stock"
    OUT_OF_STOCK = "out_of_stock"


class EnhancementMethod(str, Enum):
    """검색어 보강 방식"""
    RULE_BASED = "rule_based"
    LLM = "llm"
    LLM_FALLBACK = "llm_fallback"
    PASSTHROUGH = "passthrough"
    ERROR_FALLBACK = "error_fallback"


class NormalizedListing(BaseModel):
    """정규화된 상품 리스팅 (최종 출력 단위, 생성 후 불변)"""
    model_config = ConfigDict(frozen=True)

    part_number: str = Field(..., min_length=1, description="공급사 부품 번호")
    name: str = Field(..., min_length=1, description="상품명")
    numeric_price: Optional[float] = Field(None, ge=0, description="파싱된 가격 (실패 시 None)")
    price_text: str = Field(..., description="가격 원문")
    availability: Availability = Field(..., description="재고 상태")
    availability_text: str = Field("", description="재고 문구 원문")
    source_id: str = Field(..., description="공급사 ID")
    product_url: Optional[str] = Field(None, description="상품 상세 URL")
    confidence: float = Field(..., ge=0.0, le=1.0, description="리스팅 품질 추정치")
    retrieved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="수집 시각 (UTC)")

    @property
    def in_stock(self) -> bool:
        return self.availability == Availability.IN_STOCK


class QueryEnhancement(BaseModel):
    """검색어 보강 결과"""
    model_config = ConfigDict(frozen=True)

    original_query: str = Field(..., description="입력 검색어")
    enhanced_query: str = Field(..., description="보강된 검색어")
    suggestions: List[str] = Field(default_factory=list, description="대체 검색어 (우선순위 순)")
    confidence: float = Field(..., ge=0.0, le=1.0, description="보강 신뢰도")
    method: EnhancementMethod = Field(..., description="보강 방식")
    reasoning: Optional[str] = Field(None, description="LLM이 제시한 근거")
    error: Optional[str] = Field(None, description="error_fallback일 때 오류 메시지")

    @field_validator("suggestions")
    @classmethod
    def drop_blank_suggestions(cls, v: List[str]) -> List[str]:
        return [s.strip() for s in v if s and s.strip()]


class SearchResponse(BaseModel):
    """검색 진입점 응답"""
    results: List[NormalizedListing] = Field(default_factory=list)
    query: str = Field(..., description="실제로 결과를 낸(또는 마지막으로 시도한) 검색어")
    original_query: str = Field(..., description="사용자 입력 검색어")
    enhancement_method: str = Field(..., description="결과를 낸 단계 (rule_based/llm/suggestion/original 등)")
    confidence: float = Field(..., ge=0.0, le=1.0)
    result_count: int = Field(..., ge=0)
    suggestions: List[str] = Field(default_factory=list)
    suppliers_searched: List[str] = Field(default_factory=list)
    status: str = Field(..., description="no_results | few_results | good_results")
    advice: List[str] = Field(default_factory=list, description="결과 개선 팁")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
