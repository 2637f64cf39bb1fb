"""Rendered Fetch - Playwright 브라우저 렌더링 후 페이지 내 추출"""

import asyncio
import random
from typing import Awaitable, Callable, List, Optional

from playwright.async_api import Error as PlaywrightError, Page, TimeoutError as PlaywrightTimeoutError

from partsearch.core.config import settings
from partsearch.core.exceptions import NavigationError, NoContainerFound
from partsearch.core.logging import logger, sanitize_for_log
from partsearch.engine.session_limiter import SessionLimiter, get_session_limiter

from .catalog import SourceProfile
from .executor import FetchStrategy
from .http_client import pick_user_agent
from .playwright import PageExtractor, configure_page, evaluate_in_page, new_page
from .result import RawRecord


class RenderedFetch(FetchStrategy):
    """Playwright 기반 느린 경로 실행자

    특징:
    - 공유 헤드리스 브라우저 재사용, 페이지는 fetch마다 생성/종료
    - 무작위 viewport/User-Agent + 이동 전 짧은 무작위 지연 (지문 다양화)
    - 이미지/폰트/스타일시트/미디어 요청 차단
    - 이동 실패 시 고정 간격으로 최대 N회 재시도
    - SessionLimiter로 동시 실행 수 제한 (초과 시 즉시 CapacityExceeded)

    Usage:
        fetcher = RenderedFetch()
        records = await fetcher.get_listings(get_profile("mcmaster"), "6203 bearing", 10)
    """

    name = "rendered"

    def __init__(
        self,
        limiter: Optional[SessionLimiter] = None,
        page_factory: Optional[Callable[[], Awaitable[Page]]] = None,
        extractor: Optional[PageExtractor] = None,
        *,
        navigation_timeout_ms: Optional[int] = None,
        navigation_retries: Optional[int] = None,
        retry_delay_s: Optional[float] = None,
        selector_timeout_ms: Optional[int] = None,
        pre_navigation_delay_s: Optional[tuple[float, float]] = None,
    ):
        self.limiter = limiter or get_session_limiter()
        self.page_factory = page_factory or new_page
        self.extractor = extractor or evaluate_in_page
        self.navigation_timeout_ms = navigation_timeout_ms or settings.crawler_navigation_timeout_ms
        self.navigation_retries = (
            settings.crawler_navigation_retries if navigation_retries is None else navigation_retries
        )
        self.retry_delay_s = settings.crawler_retry_delay_s if retry_delay_s is None else retry_delay_s
        self.selector_timeout_ms = selector_timeout_ms or settings.crawler_selector_timeout_ms
        self.pre_navigation_delay_s = pre_navigation_delay_s or (
            settings.crawler_pre_navigation_delay_min_s,
            settings.crawler_pre_navigation_delay_max_s,
        )

    async def get_listings(self, profile: SourceProfile, query: str, max_results: int) -> List[RawRecord]:
        """브라우저 검색 실행

        Raises:
            CapacityExceeded: 동시 세션 상한
            NavigationError: 재시도 후에도 이동 실패
            NoContainerFound: 후보 컨테이너가 하나도 나타나지 않음
            BrowserException: 브라우저 실행 실패
        """
        url = profile.search_url(query)

        async with self.limiter.session():
            page: Optional[Page] = None
            try:
                logger.info(f"[RenderedFetch] {profile.source_id}: query='{sanitize_for_log(query)}'")

                page = await self.page_factory()
                await configure_page(page, user_agent=pick_user_agent())

                low, high = self.pre_navigation_delay_s
                if high > 0:
                    await asyncio.sleep(random.uniform(low, high))

                await self._navigate(page, url)
                container_selector = await self._wait_for_container(page, profile)

                records = await self.extractor(page, profile, container_selector, max_results)
                logger.info(f"[RenderedFetch] {profile.source_id}: {len(records)} records")
                return records
            finally:
                if page is not None:
                    try:
                        await page.close()
                    except Exception as e:
                        logger.warning(f"[RenderedFetch] Failed to close page: {type(e).__name__}: {e}")

    async def _navigate(self, page: Page, url: str) -> None:
        attempts = self.navigation_retries + 1
        last_err: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                await page.goto(url, wait_until="domcontentloaded", timeout=self.navigation_timeout_ms)
                return
            except PlaywrightError as e:
                last_err = e
                logger.warning(
                    f"[RenderedFetch] Navigation failed (attempt {attempt}/{attempts}): {type(e).__name__}"
                )
                if attempt < attempts and self.retry_delay_s > 0:
                    await asyncio.sleep(self.retry_delay_s)

        raise NavigationError(url, attempts, f"{type(last_err).__name__}: {last_err}")

    async def _wait_for_container(self, page: Page, profile: SourceProfile) -> str:
        """후보 컨테이너 selector를 순서대로 기다려 처음 나타난 것을 반환"""
        for selector in profile.container:
            try:
                await page.wait_for_selector(selector, timeout=self.selector_timeout_ms)
                logger.debug(f"[RenderedFetch] {profile.source_id}: container '{selector}' found")
                return selector
            except PlaywrightTimeoutError:
                continue

        raise NoContainerFound(profile.source_id, profile.container.selectors)
