"""Source Fetcher - Static → Rendered Fallback per Source

한 공급사에 대해 Static 경로를 먼저 실행하고, 0건이거나 전송 오류이면
같은 검색어로 Rendered 경로를 실행합니다. 두 경로는 동시에 실행되지 않습니다.
"""

from typing import List, Optional

from partsearch.core.exceptions import TransportError
from partsearch.core.logging import logger
from partsearch.crawlers.catalog import SourceProfile
from partsearch.crawlers.executor import FetchStrategy
from partsearch.crawlers.result import RawRecord

from .strategy import ExecutionPath, ExecutionStrategy


class SourceFetcher:
    """소스 하나에 대한 Static/Rendered 실행자 조합"""

    def __init__(
        self,
        static: Optional[FetchStrategy] = None,
        rendered: Optional[FetchStrategy] = None,
        strategy: Optional[ExecutionStrategy] = None,
    ):
        # rendered_fetch가 engine.session_limiter를 import하므로 기본값은 지연 생성
        if static is None:
            from partsearch.crawlers.static_fetch import StaticFetch
            static = StaticFetch()
        if rendered is None:
            from partsearch.crawlers.rendered_fetch import RenderedFetch
            rendered = RenderedFetch()

        self.static = static
        self.rendered = rendered
        self.strategy = strategy or ExecutionStrategy()

    async def fetch(self, profile: SourceProfile, query: str, max_results: int) -> List[RawRecord]:
        """Static 실행 후 필요 시 Rendered 폴백

        Raises:
            CrawlerException: Rendered 경로 실패 (호출자 경계에서 처리)
        """
        error: Optional[Exception] = None
        try:
            records = await self.static.get_listings(profile, query, max_results)
        except TransportError as e:
            logger.warning(f"[SourceFetcher] {profile.source_id}: static fetch failed ({e.message})")
            records, error = [], e

        if not self.strategy.should_fallback_to_rendered(records, error):
            logger.debug(f"[SourceFetcher] {profile.source_id}: {ExecutionPath.STATIC.value} ok")
            return records

        logger.info(f"[SourceFetcher] {profile.source_id}: falling back to {ExecutionPath.RENDERED.value}")
        return await self.rendered.get_listings(profile, query, max_results)
