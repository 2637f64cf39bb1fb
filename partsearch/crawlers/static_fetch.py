"""Static Fetch - HTTP 단일 요청 + HTML 파싱"""

from typing import List, Optional

from partsearch.core.config import settings
from partsearch.core.logging import logger, sanitize_for_log

from .catalog import SourceProfile
from .executor import FetchStrategy
from .extractor import extract_records
from .http_client import SharedHttpClient, browser_headers, get_shared_http_client
from .result import RawRecord


class StaticFetch(FetchStrategy):
    """HTTP 기반 빠른 경로 실행자

    특징:
    - 요청 1회 (빠름, 비용 낮음)
    - 무작위 User-Agent + 브라우저 유사 헤더
    - 고정 타임아웃, 리다이렉트 횟수 제한
    - 매칭 0건이면 빈 목록 (예외 없음), 전송 실패만 TransportError
    """

    name = "static"

    def __init__(self, http_client: Optional[SharedHttpClient] = None, timeout_s: Optional[float] = None):
        self.http_client = http_client or get_shared_http_client()
        self.timeout_s = timeout_s or settings.crawler_http_timeout_s

    async def get_listings(self, profile: SourceProfile, query: str, max_results: int) -> List[RawRecord]:
        """HTTP 검색 실행

        Raises:
            TransportError: 연결 실패/타임아웃/2xx가 아닌 응답
        """
        url = profile.search_url(query)
        logger.debug(f"[StaticFetch] {profile.source_id}: query='{sanitize_for_log(query)}'")

        _status, html = await self.http_client.get_text(
            url,
            timeout_s=self.timeout_s,
            headers=browser_headers(),
        )

        records = extract_records(html, profile, max_results)
        logger.info(f"[StaticFetch] {profile.source_id}: {len(records)} records")
        return records
