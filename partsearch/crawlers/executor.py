"""Fetch Strategy Protocol - Interface for Static/Rendered fetchers

Defines the common interface that all fetch strategies must implement.
"""

from typing import List, Protocol

from .catalog import SourceProfile
from .result import RawRecord


class FetchStrategy(Protocol):
    """공급사 검색 실행자 프로토콜

    StaticFetch/RenderedFetch가 구현해야 할 인터페이스입니다.

    구현 예시:
        class StaticFetch(FetchStrategy):
            async def get_listings(self, profile, query, max_results):
                # HTTP 기반 검색 로직
                ...
    """

    name: str

    async def get_listings(self, profile: SourceProfile, query: str, max_results: int) -> List[RawRecord]:
        """검색 실행

        Args:
            profile: 공급사 설정
            query: 검색어
            max_results: 최대 레코드 수

        Returns:
            List[RawRecord]: 매칭 0건이면 빈 목록

        Raises:
            TransportError: HTTP 전송 실패 (Static)
            NavigationError: 페이지 이동 실패 (Rendered)
            NoContainerFound: 컨테이너 selector 없음 (Rendered)
            CapacityExceeded: 브라우저 세션 상한 (Rendered)
        """
        ...
