"""Execution Strategy - Static/Rendered Path Decision Logic

Determines whether a source falls back to the rendered path and which
failures are isolated at the per-source boundary.
"""

import asyncio
from enum import Enum
from typing import Optional, Sequence

from partsearch.core.exceptions import CrawlerException, TransportError


class ExecutionPath(str, Enum):
    """실행 경로

    소스 하나를 검색할 때 사용 가능한 경로들을 정의합니다.
    """

    STATIC = "static"
    RENDERED = "rendered"


class ExecutionStrategy:
    """실행 전략 결정

    Static 결과/오류에 따라 Rendered 폴백 여부를 결정합니다.

    Usage:
        strategy = ExecutionStrategy()

        try:
            records = await static.get_listings(profile, query, 10)
            error = None
        except TransportError as e:
            records, error = [], e
        if strategy.should_fallback_to_rendered(records, error):
            records = await rendered.get_listings(profile, query, 10)
    """

    @staticmethod
    def should_fallback_to_rendered(records: Sequence, error: Optional[Exception] = None) -> bool:
        """Rendered로 Fallback 여부 결정

        - Static이 0건을 반환한 경우
        - Static이 TransportError로 실패한 경우 (0건과 동일 취급)

        Args:
            records: Static 결과
            error: Static에서 발생한 예외 (없으면 None)

        Returns:
            bool: Rendered로 전환해야 하는지 여부
        """
        if error is not None:
            return isinstance(error, TransportError)
        return len(records) == 0

    @staticmethod
    def is_isolated_failure(error: Exception) -> bool:
        """소스 경계에서 빈 결과로 흡수할 예외인지

        크롤러 예외(전송/이동/컨테이너 없음/세션 상한/브라우저)와
        asyncio 타임아웃은 해당 소스만 실패로 처리합니다.
        """
        return isinstance(error, (CrawlerException, TimeoutError, asyncio.TimeoutError))
