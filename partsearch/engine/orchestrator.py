"""Search Orchestrator - Query Cascade Entry Point

Runs a search function over a cascade of queries until one yields results:
1. Enhanced query (rule-based or LLM)
2. Up to two suggestions from the enhancement
3. The original query as typed
"""

from typing import Awaitable, Callable, List, Optional, Sequence

from partsearch.core.logging import logger, sanitize_for_log
from partsearch.schemas.listing_schema import NormalizedListing
from partsearch.services.query_enhancer import PASSTHROUGH_CONFIDENCE, QueryEnhancer

from .result import SearchMethod, SmartSearchResult


SearchFn = Callable[[str], Awaitable[Sequence[NormalizedListing]]]

MAX_SUGGESTION_ATTEMPTS = 2
SUGGESTION_CONFIDENCE = 0.7


class SearchOrchestrator:
    """단계적 검색 오케스트레이터

    각 단계는 이전 단계가 0건일 때만 실행됩니다.
    앞 단계에서 이미 보낸 검색어는 다시 보내지 않습니다.
    """

    def __init__(self, enhancer: Optional[QueryEnhancer] = None):
        self.enhancer = enhancer or QueryEnhancer()

    async def smart_search(self, query: str, search_fn: SearchFn) -> SmartSearchResult:
        """보강 검색어 → 대체 검색어 → 원래 검색어 순으로 검색

        Args:
            query: 사용자 입력 검색어
            search_fn: 검색어 하나를 받아 리스팅을 반환하는 코루틴 함수

        Returns:
            SmartSearchResult: 결과를 낸 단계 (모두 0건이면 원래 검색어 단계)
        """
        logger.info(f"[SmartSearch] Starting smart search for: '{sanitize_for_log(query)}'")
        attempted: set[str] = set()

        enhancement = await self.enhancer.enhance(query)

        # 1. 보강 검색어
        enhanced = enhancement.enhanced_query
        results = await self._attempt(enhanced, search_fn, attempted)
        if results:
            logger.info(f"[SmartSearch] Enhanced query found {len(results)} results")
            return SmartSearchResult(
                results=results,
                query=enhanced,
                original_query=query,
                method=SearchMethod.from_enhancement(enhancement.method),
                confidence=enhancement.confidence,
                suggestions=list(enhancement.suggestions),
            )

        # 2. 대체 검색어
        for suggestion in enhancement.suggestions[:MAX_SUGGESTION_ATTEMPTS]:
            if suggestion in attempted:
                continue
            logger.info(f"[SmartSearch] Trying suggestion: '{suggestion}'")
            results = await self._attempt(suggestion, search_fn, attempted)
            if results:
                logger.info(f"[SmartSearch] Suggestion found {len(results)} results")
                return SmartSearchResult(
                    results=results,
                    query=suggestion,
                    original_query=query,
                    method=SearchMethod.SUGGESTION,
                    confidence=SUGGESTION_CONFIDENCE,
                    suggestions=list(enhancement.suggestions),
                )

        # 3. 원래 검색어
        if query not in attempted:
            logger.info("[SmartSearch] Falling back to original query")
            results = await self._attempt(query, search_fn, attempted)
        else:
            results = []

        return SmartSearchResult(
            results=results,
            query=query,
            original_query=query,
            method=SearchMethod.ORIGINAL,
            confidence=PASSTHROUGH_CONFIDENCE,
            suggestions=list(enhancement.suggestions) or self.enhancer.generate_suggestions(query),
        )

    @staticmethod
    async def _attempt(query: str, search_fn: SearchFn, attempted: set[str]) -> List[NormalizedListing]:
        attempted.add(query)
        return list(await search_fn(query))
