"""부품 검색 서비스 - 검색 진입점"""
from typing import Any, Dict, Optional

from partsearch.core.config import settings
from partsearch.core.exceptions import InvalidQueryException, ValidationException
from partsearch.core.logging import logger, sanitize_for_log
from partsearch.crawlers.http_client import shutdown_shared_http_client
from partsearch.engine.orchestrator import SearchOrchestrator
from partsearch.engine.session_limiter import SessionLimiter, get_session_limiter
from partsearch.engine.supplier_search import SupplierSearch
from partsearch.schemas.listing_schema import QueryEnhancement, SearchResponse

from .llm_client import LLMClient
from .query_enhancer import QueryEnhancer


class PartSearchService:
    """
    부품 검색 서비스 - 입력 검증과 응답 조립만 담당

    - 검색어 보강은 QueryEnhancer
    - 단계적 검색은 SearchOrchestrator
    - 공급사 병렬 검색은 SupplierSearch
    """

    def __init__(
        self,
        supplier_search: Optional[SupplierSearch] = None,
        enhancer: Optional[QueryEnhancer] = None,
        limiter: Optional[SessionLimiter] = None,
    ):
        self.limiter = limiter or get_session_limiter()
        self.supplier_search = supplier_search or SupplierSearch()
        self.enhancer = enhancer or QueryEnhancer()
        self.orchestrator = SearchOrchestrator(self.enhancer)

    @staticmethod
    def validate_query(query: Any) -> str:
        if not isinstance(query, str):
            raise InvalidQueryException("query must be a string")

        cleaned = query.strip()
        if len(cleaned) < settings.search_min_query_length:
            raise InvalidQueryException(
                f"query must be at least {settings.search_min_query_length} characters long"
            )
        return cleaned

    @staticmethod
    def validate_limit(limit: Any) -> int:
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValidationException("limit", "limit must be an integer")
        if not 1 <= limit <= settings.search_max_limit:
            raise ValidationException("limit", f"limit must be between 1 and {settings.search_max_limit}")
        return limit

    async def search(self, query: str, limit: Optional[int] = None) -> SearchResponse:
        """
        스마트 부품 검색

        1. 입력 검증 (검색어 2자 이상, limit 1..50)
        2. 보강 검색어 → 대체 검색어 → 원래 검색어 순 검색
        3. 결과 수에 따른 상태/개선 팁 첨부

        Raises:
            InvalidQueryException: 검색어가 비었거나 너무 짧은 경우
            ValidationException: limit 범위 오류
        """
        cleaned = self.validate_query(query)
        max_results = self.validate_limit(settings.search_default_limit if limit is None else limit)

        logger.info(f"Search request: '{sanitize_for_log(cleaned)}' (limit={max_results})")

        async def search_fn(q: str):
            return await self.supplier_search.search(q, max_results)

        outcome = await self.orchestrator.smart_search(cleaned, search_fn)
        analysis = self.enhancer.analyze_results(outcome.query, outcome.results)

        logger.info(
            f"Search completed: {len(outcome.results)} results via {outcome.method.value} "
            f"(query='{sanitize_for_log(outcome.query)}')"
        )

        return SearchResponse(
            results=outcome.results,
            query=outcome.query,
            original_query=outcome.original_query,
            enhancement_method=outcome.method.value,
            confidence=outcome.confidence,
            result_count=len(outcome.results),
            suggestions=outcome.suggestions,
            suppliers_searched=self.supplier_search.source_ids,
            status=analysis["status"],
            advice=analysis["suggestions"],
        )

    async def enhance(self, query: str) -> QueryEnhancement:
        """검색어 보강만 실행 (검색 없음)"""
        return await self.enhancer.enhance(self.validate_query(query))

    def status(self) -> Dict[str, Any]:
        """서비스 상태 (브라우저 세션/공급사/LLM 설정)"""
        llm: LLMClient = self.enhancer.llm
        return {
            "status": "OK",
            "environment": settings.environment,
            "browser_sessions": self.limiter.snapshot(),
            "suppliers": self.supplier_search.source_ids,
            "llm": {
                "configured": llm.is_configured,
                "model": llm.model,
            },
        }

    async def shutdown(self) -> None:
        """공유 브라우저/HTTP 세션/LLM 클라이언트 정리"""
        from partsearch.crawlers.playwright.browser import shutdown_shared_browser

        logger.info("Shutting down part search service")
        await shutdown_shared_browser()
        await shutdown_shared_http_client()
        await self.enhancer.llm.close()
