"""Supplier Search - Concurrent multi-source fan-out

모든 공급사를 동시에 검색하고 결과를 정규화/중복 제거합니다.
한 공급사의 실패는 해당 공급사의 빈 결과로만 반영됩니다.
"""

import asyncio
from typing import List, Optional, Sequence

from partsearch.core.config import settings
from partsearch.core.logging import logger, sanitize_for_log
from partsearch.crawlers.catalog import SOURCE_CATALOG, SourceProfile
from partsearch.crawlers.result import RawRecord
from partsearch.schemas.listing_schema import NormalizedListing
from partsearch.services.deduplicator import dedupe
from partsearch.services.normalizer import normalize

from .source_fetcher import SourceFetcher
from .strategy import ExecutionStrategy


class SupplierSearch:
    """공급사 병렬 검색

    Usage:
        search = SupplierSearch()
        listings = await search.search("6203 bearing", max_results=10)
    """

    def __init__(
        self,
        fetcher: Optional[SourceFetcher] = None,
        sources: Optional[Sequence[SourceProfile]] = None,
    ):
        self.fetcher = fetcher or SourceFetcher()
        self.sources: List[SourceProfile] = list(sources) if sources is not None else list(SOURCE_CATALOG.values())

    @property
    def source_ids(self) -> List[str]:
        return [p.source_id for p in self.sources]

    async def search(self, query: str, max_results: int = 10) -> List[NormalizedListing]:
        """모든 공급사 검색 → 정규화 → 중복 제거 → 상위 max_results"""
        per_source = min(max_results, settings.crawler_max_results_per_source)
        logger.info(
            f"[SupplierSearch] query='{sanitize_for_log(query)}' sources={self.source_ids} per_source={per_source}"
        )

        batches = await asyncio.gather(
            *(self._search_source(profile, query, per_source) for profile in self.sources)
        )

        listings: List[NormalizedListing] = []
        for batch in batches:
            listings.extend(normalize(raw) for raw in batch)

        unique = dedupe(listings)
        logger.info(f"[SupplierSearch] {len(listings)} listings, {len(unique)} after dedupe")
        return unique[:max_results]

    async def _search_source(self, profile: SourceProfile, query: str, max_results: int) -> List[RawRecord]:
        try:
            records = await self.fetcher.fetch(profile, query, max_results)
        except Exception as e:
            if ExecutionStrategy.is_isolated_failure(e):
                logger.warning(f"[SupplierSearch] {profile.source_id} failed: {e}")
            else:
                logger.error(f"[SupplierSearch] {profile.source_id} unexpected error: {type(e).__name__}", exc_info=True)
            return []

        return [r for r in records if r.is_promotable]
